"""Presentation layer - HTTP concerns.

This layer contains FastAPI routers. It is thin: the events route hands the
request and the application's event source to the stream adapter.

Structure:
- routers/events.py: GET /events (SSE stream)
- routers/system.py: root and health endpoints
"""
