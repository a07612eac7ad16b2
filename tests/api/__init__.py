"""API tests package.

End-to-end tests for HTTP endpoints using TestClient:
- Event stream framing, replay, and termination
- Response headers
- System routes
"""
