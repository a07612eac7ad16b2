"""Application layer - Use cases and orchestration.

Structure:
- client/: Reconnecting subscription (state machine, backoff, resumption
  cursor, heartbeat)

The application layer orchestrates protocols; transports and storage live
in the infrastructure layer.
"""
