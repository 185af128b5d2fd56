"""
In-Memory Storage

DESIGN DECISION: There is no database. The whole business lives in one
BusinessData snapshot held by BusinessStore for the session.

Updates are functional: callers pass a function from the previous
snapshot to the next one, and the store swaps the reference. Readers
holding an old snapshot keep seeing consistent data.
"""

import time
from typing import Callable, Optional
from uuid import UUID

from nexus_manager.models.audit import AuditEvent, AuditEventType
from nexus_manager.models.business import BusinessData
from nexus_manager.storage.interface import AuditStorageInterface


class IdGenerator:
    """
    Timestamp-based record ids.

    Ids are the current time in milliseconds, bumped so that two ids
    issued within the same millisecond are still distinct and increasing.
    """

    def __init__(self, clock_ms: Optional[Callable[[], int]] = None):
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def next_id(self) -> str:
        now = self._clock_ms()
        if now <= self._last:
            now = self._last + 1
        self._last = now
        return str(now)

    def next_document_id(
        self,
        prefix: str,
        taken: Optional[set[str]] = None,
    ) -> str:
        """
        Short document number: prefix plus the last six digits of an id.

        Six digits wrap around, so candidates already in `taken`
        are skipped.
        """
        taken = taken or set()
        while True:
            candidate = f"{prefix}-{self.next_id()[-6:]}"
            if candidate not in taken:
                return candidate


class BusinessStore:
    """
    Holder of the current BusinessData snapshot.

    The store never edits a snapshot; `update` replaces it.
    """

    def __init__(self, data: Optional[BusinessData] = None):
        self._data = data if data is not None else BusinessData()
        self._version = 0

    @property
    def data(self) -> BusinessData:
        return self._data

    @property
    def version(self) -> int:
        """Incremented on every update; handy for cache keys in the UI."""
        return self._version

    def update(self, change: Callable[[BusinessData], BusinessData]) -> BusinessData:
        """Apply `change` to the current snapshot and keep the result."""
        new_data = change(self._data)
        if not isinstance(new_data, BusinessData):
            raise TypeError(
                f"State change must return BusinessData, got {type(new_data).__name__}"
            )
        self._data = new_data
        self._version += 1
        return new_data

    def reset(self, data: BusinessData) -> None:
        self._data = data
        self._version += 1


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Audit trail kept in a list for the lifetime of the session.

    Events are never modified. The trail is bounded: once it holds
    `max_events`, each new event pushes out the oldest one.
    """

    def __init__(self, max_events: int = 5000):
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    def __len__(self) -> int:
        return len(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        # Oldest events fall off once the cap is reached
        if len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        events = [e for e in self._events if e.correlation_id == correlation_id]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_recent_events(
        self,
        limit: int = 100,
        event_type: Optional[AuditEventType] = None,
    ) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if event_type is None or e.event_type == event_type
        ]
        # Newest first; stable for events sharing a timestamp
        return list(reversed(events))[:limit]
