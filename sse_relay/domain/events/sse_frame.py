"""Inbound SSE frame as seen by the client.

Built by the transport from each httpx-sse event that carries data.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True, slots=True)
class SSEFrame:
    """One dispatched event-stream message.

    Attributes:
        data: Concatenated ``data`` lines (joined with newlines).
        id: Last event id seen on the stream, if any.
        event: ``event`` field; ``message`` when the server named none.
        retry: ``retry`` hint in milliseconds, if sent.
    """

    data: str
    id: str | None = None
    event: str | None = None
    retry: int | None = None
