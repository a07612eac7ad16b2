"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- sse/: Event history, stream adapter, cursor storage
- transport/: httpx event-stream transport and frame parser
- scheduling/: asyncio-backed scheduler
- logging/: structlog console adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
