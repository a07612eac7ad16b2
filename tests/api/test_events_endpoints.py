"""API tests for the events SSE endpoint.

Tests the complete HTTP request/response cycle for:
- GET /events (Server-Sent Events stream)

Architecture:
    - Uses FastAPI TestClient with an app built by create_app()
    - Event sources are finite so every stream terminates
    - Each test injects its own EventHistory

Note:
    TestClient with streaming responses requires careful handling.
    We use iter_lines() for streaming tests.
"""

import json

import pytest
from fastapi.testclient import TestClient

from sse_relay.infrastructure.sse.event_history import EventHistory
from sse_relay.main import create_app


# =============================================================================
# Helpers
# =============================================================================


def source_of(*items):
    """Source factory yielding the given items for every request."""

    def factory(request):
        async def generate():
            for item in items:
                yield item

        return generate()

    return factory


def read_frames(response) -> list[tuple[int, dict]]:
    """Collect (id, payload) pairs from a streamed response."""
    frames = []
    current_id = None
    for line in response.iter_lines():
        if line.startswith("id: "):
            current_id = int(line[4:])
        elif line.startswith("data: "):
            frames.append((current_id, json.loads(line[6:])))
    return frames


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def history():
    return EventHistory(max_history_size=100)


@pytest.fixture
def make_client(history):
    def factory(*items) -> TestClient:
        return TestClient(create_app(source_of(*items), history=history))

    return factory


# =============================================================================
# Stream Tests
# =============================================================================


@pytest.mark.api
class TestEventsEndpoint:
    """Test GET /events."""

    def test_streams_events_until_terminal(self, make_client):
        client = make_client(
            {"event": "message", "data": "a"},
            {"event": "end"},
            {"event": "message", "data": "never sent"},
        )

        with client.stream("GET", "/events") as response:
            assert response.status_code == 200
            frames = read_frames(response)

        assert frames == [
            (1, {"event": "message", "data": "a"}),
            (2, {"event": "end"}),
        ]

    def test_response_headers(self, make_client):
        client = make_client({"event": "end"})

        with client.stream("GET", "/events") as response:
            response.read()

        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-transform, no-cache"
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["x-accel-buffering"] == "no"

    def test_resume_with_last_event_id_header(self, make_client, history):
        """Test a reconnecting client receives missed events first."""
        for n in range(1, 6):
            history.admit("message", {"event": "message", "n": n})
        client = make_client({"event": "end"})

        with client.stream(
            "GET", "/events", headers={"Last-Event-ID": "2"}
        ) as response:
            frames = read_frames(response)

        assert [sequence_id for sequence_id, _ in frames] == [3, 4, 5, 6]

    def test_resume_with_query_parameter(self, make_client, history):
        history.admit("message", {"event": "message"})
        history.admit("message", {"event": "message"})
        client = make_client({"event": "end"})

        with client.stream("GET", "/events?lastEventId=1") as response:
            frames = read_frames(response)

        assert [sequence_id for sequence_id, _ in frames] == [2, 3]

    def test_disallowed_event_ends_stream(self, make_client):
        client = make_client(
            {"event": "message"},
            {"event": "forbidden"},
            {"event": "message"},
        )

        with client.stream("GET", "/events") as response:
            frames = read_frames(response)

        assert frames == [(1, {"event": "message"})]

    def test_ids_continue_across_requests(self, make_client):
        client = make_client({"event": "message"}, {"event": "end"})

        with client.stream("GET", "/events") as response:
            first = read_frames(response)
        with client.stream("GET", "/events") as response:
            second = read_frames(response)

        assert [i for i, _ in first] == [1, 2]
        assert [i for i, _ in second] == [3, 4]
