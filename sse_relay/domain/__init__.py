"""Domain layer - Protocol vocabulary.

This layer contains the event records exchanged over the wire and the
protocols (ports) that infrastructure adapters implement. It has NO
dependencies on any framework or infrastructure - it is pure Python.

Structure:
- events/: Stream event records and wire frames
- protocols/: Logger, cursor store, scheduler, and transport interfaces
"""
