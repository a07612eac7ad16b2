"""Reconnecting event-stream client."""

from sse_relay.application.client.backoff import BackoffPolicy
from sse_relay.application.client.heartbeat import HeartbeatMonitor
from sse_relay.application.client.resumption_cursor import ResumptionCursor
from sse_relay.application.client.sse_client import (
    ConnectionState,
    SSEClient,
    SSEClientOptions,
)

__all__ = [
    "BackoffPolicy",
    "ConnectionState",
    "HeartbeatMonitor",
    "ResumptionCursor",
    "SSEClient",
    "SSEClientOptions",
]
