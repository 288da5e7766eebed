"""
In-memory event store with a per-day index.

The layout engine only reads from the store: it asks which event ids touch
a date key and resolves ids to Events. Everything that mutates the store
happens outside a layout pass.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Optional

from .debug import debug_print
from .event_model import Event, occupied_date_range, date_key


def _debug_print(msg: str) -> None:
    debug_print("STORE", msg)


@dataclass
class DataStore:
    """
    Events by id plus the date index the layout engine queries.

    `ids_of_day` maps a date key ('YYYYMMDD') to the ids of the events
    occupying that date.
    """
    calendars: list = field(default_factory=list)
    events: dict[str, Event] = field(default_factory=dict)
    ids_of_day: dict[str, set[str]] = field(default_factory=dict)

    @classmethod
    def from_events(cls, events: Iterable[Event], calendars: Optional[list] = None) -> 'DataStore':
        store = cls(calendars=list(calendars or []))
        store.add_events(events)
        return store

    def add_event(self, event: Event):
        """Store an event and index it under every date it occupies."""
        if event.id in self.events:
            self.remove_event(event.id)

        self.events[event.id] = event

        date_range = occupied_date_range(event)
        if date_range is None:
            _debug_print(f"Event {event.id} ends before it starts, not indexed")
            return

        day, last = date_range
        while day <= last:
            self.ids_of_day.setdefault(date_key(day), set()).add(event.id)
            day += timedelta(days=1)

    def add_events(self, events: Iterable[Event]):
        for event in events:
            self.add_event(event)

    def remove_event(self, event_id: str) -> bool:
        """Remove an event and its index entries. Returns False if unknown."""
        event = self.events.pop(event_id, None)
        if event is None:
            return False

        for key in list(self.ids_of_day):
            ids = self.ids_of_day[key]
            ids.discard(event_id)
            if not ids:
                del self.ids_of_day[key]
        return True

    def get_event(self, event_id: str) -> Optional[Event]:
        return self.events.get(event_id)

    def get_ids_of_day(self, key: str) -> set[str]:
        return self.ids_of_day.get(key, set())

    def get_event_count(self) -> int:
        return len(self.events)
