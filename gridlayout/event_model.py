"""
Events and their positioned view models.

An Event is the immutable fact owned by the event store. An EventViewModel
is the per-layout projection of an Event: it keeps a reference to the
Event rather than copying its fields, and carries the computed row index
and percentage geometry.
"""

from dataclasses import dataclass
from datetime import datetime, date, time as dt_time, timedelta
from typing import Optional, Union
from icalendar import Calendar as ICalCalendar

from .debug import debug_print
from .timezone_utils import to_aware_datetime, to_local_datetime, to_local_date


DateLike = Union[date, datetime]


def _debug_print(msg: str) -> None:
    debug_print("MODEL", msg)


def to_date(value: DateLike) -> date:
    """Reduce a cell or instant to its local calendar date."""
    return to_local_date(value)


def date_key(value: DateLike) -> str:
    """Key used by the date index and the grid map, e.g. '20210502'."""
    return to_date(value).strftime("%Y%m%d")


@dataclass(frozen=True)
class Event:
    """
    A scheduled event.

    For all-day events `end` is inclusive: an all-day event from
    Friday 00:00 to Sunday 00:00 covers Friday, Saturday and Sunday.
    """
    id: str
    start: DateLike
    end: DateLike
    all_day: bool = False
    summary: str = ""
    calendar_id: str = ""

    @property
    def is_malformed(self) -> bool:
        """True if the event ends before it starts."""
        return to_aware_datetime(self.end) < to_aware_datetime(self.start)


def occupied_date_range(event: Event) -> Optional[tuple[date, date]]:
    """
    First and last local date the event occupies, both inclusive.

    A timed event ending exactly at midnight does not occupy the day it
    ends on (unless it also starts there). Returns None for malformed
    events.
    """
    if event.is_malformed:
        return None

    first = to_local_date(event.start)
    last = to_local_date(event.end)

    if not event.all_day and isinstance(event.end, datetime) and last > first:
        if to_local_datetime(event.end).time() == dt_time.min:
            last = last - timedelta(days=1)

    return first, last


@dataclass
class EventViewModel:
    """
    Positioned projection of an Event for one layout pass.

    `top` is the zero-based stacked row. `left`/`width` are percentages of
    the grid width. `start_index`/`end_index` are the grid columns the event
    is drawn across, clipped to the grid; `exceed_left`/`exceed_right` tell
    whether the event continues outside the visible grid.
    """
    event: Event
    top: int = 0
    left: float = 0.0
    width: float = 0.0
    start_index: int = 0
    end_index: int = 0
    exceed_left: bool = False
    exceed_right: bool = False

    @classmethod
    def create(cls, event: Event) -> 'EventViewModel':
        return cls(event=event)

    # ==================== Delegated Properties ====================

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def start(self) -> DateLike:
        return self.event.start

    @property
    def end(self) -> DateLike:
        return self.event.end

    @property
    def all_day(self) -> bool:
        return self.event.all_day

    @property
    def summary(self) -> str:
        return self.event.summary

    def date_range(self) -> Optional[tuple[date, date]]:
        return occupied_date_range(self.event)

    def occupies(self, day: DateLike) -> bool:
        """Check if the event's occupied date range includes `day`."""
        date_range = self.date_range()
        if date_range is None:
            return False
        first, last = date_range
        return first <= to_date(day) <= last

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "summary": self.summary,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "all_day": self.all_day,
            "top": self.top,
            "left": self.left,
            "width": self.width,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "exceed_left": self.exceed_left,
            "exceed_right": self.exceed_right,
        }


# ==================== iCalendar Adapter ====================

def events_from_icalendar(ical_text: Union[str, bytes], calendar_id: str = "") -> list[Event]:
    """
    Convert the VEVENTs of an iCalendar document into Events.

    All-day VEVENTs have an exclusive DTEND; it is turned into the
    inclusive end Event expects. Recurring VEVENTs contribute their
    first occurrence only.

    Raises:
        ValueError: if the text is not valid iCalendar data.
    """
    calendar = ICalCalendar.from_ical(ical_text)
    events: list[Event] = []
    seen_ids: dict[str, int] = {}

    for component in calendar.walk('VEVENT'):
        dtstart = component.get('DTSTART')
        if dtstart is None:
            _debug_print(f"Skipping VEVENT without DTSTART: {component.get('UID')}")
            continue

        start = dtstart.dt
        all_day = isinstance(start, date) and not isinstance(start, datetime)
        end = _vevent_end(component, start, all_day)

        if all_day:
            start = datetime.combine(start, dt_time.min)
            end = datetime.combine(end, dt_time.min)

        if component.get('RRULE') is not None:
            _debug_print(f"Recurrence of {component.get('UID')} not expanded")

        event_id = _vevent_id(component, seen_ids)
        summary = component.get('SUMMARY')
        events.append(Event(
            id=event_id,
            start=start,
            end=end,
            all_day=all_day,
            summary=str(summary) if summary else 'Untitled',
            calendar_id=calendar_id,
        ))

    return events


def _vevent_end(component, start: DateLike, all_day: bool) -> DateLike:
    dtend = component.get('DTEND')
    if dtend is not None:
        end = dtend.dt
    elif component.get('DURATION') is not None:
        end = start + component.get('DURATION').dt
    else:
        return start

    if all_day:
        if isinstance(end, datetime):
            end = end.date()
        # DTEND of an all-day event is the day after the last one
        end = max(start, end - timedelta(days=1))
    return end


def _vevent_id(component, seen_ids: dict[str, int]) -> str:
    uid = str(component.get('UID') or 'event')
    recurrence_id = component.get('RECURRENCE-ID')
    if recurrence_id is not None:
        uid = f"{uid}@{recurrence_id.dt.isoformat()}"

    count = seen_ids.get(uid, 0)
    seen_ids[uid] = count + 1
    if count:
        return f"{uid}#{count}"
    return uid
