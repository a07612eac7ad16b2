"""Test suite for the SSE relay.

Test structure:
- unit/: Unit tests - protocol components in isolation with test doubles
- api/: API endpoint tests - HTTP endpoints through FastAPI TestClient
- utils/: Shared test doubles (scheduler, transport, requests)
"""
