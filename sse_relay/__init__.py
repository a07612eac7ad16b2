"""Resumable Server-Sent Events relay.

Server half: sequence-tagged event history with bounded retention and
Last-Event-ID replay, plus a streaming adapter that bridges an async event
source onto a ``text/event-stream`` response.

Client half: a reconnecting subscription with exponential backoff and full
jitter, a durable resumption cursor, and a local heartbeat.
"""

__version__ = "0.1.0"
