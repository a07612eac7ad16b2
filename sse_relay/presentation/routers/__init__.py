"""HTTP routers."""

from sse_relay.presentation.routers.events import create_events_router
from sse_relay.presentation.routers.system import system_router

__all__ = ["create_events_router", "system_router"]
