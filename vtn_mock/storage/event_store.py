"""Ordered in-memory event storage polled by VENs."""
import structlog
from ..oadr_models import Event
from .locks import ReadWriteLock

log = structlog.get_logger()


class EventStore:
    """
    Append-only list of events, cleared only wholesale.

    Reads take a shared lock and return a copy, so pollers never see a
    half-applied append or clear. Storage is unbounded and lives for the
    process lifetime only.
    """

    def __init__(self, events: list[Event] | None = None):
        self._events: list[Event] = list(events or [])
        self._lock = ReadWriteLock()

    def append(self, event: Event) -> None:
        """Add an event to the end of the collection."""
        with self._lock.write():
            self._events.append(event)
            size = len(self._events)
        log.info("event.stored", event_id=event.id, program_id=event.program_id, stored=size)

    def clear(self) -> None:
        """Drop every stored event."""
        with self._lock.write():
            dropped = len(self._events)
            self._events.clear()
        log.info("events.cleared", dropped=dropped)

    def snapshot(self) -> list[Event]:
        """Copy of the stored events in insertion order."""
        with self._lock.read():
            return list(self._events)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._events)
