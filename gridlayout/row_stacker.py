"""
Vertical row assignment for stacked events.

Greedy interval partitioning: events sorted by start (longer first on
ties) take the lowest row that is free at their start. With sorted starts
this uses the minimum number of rows.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, Optional

from .debug import debug_print
from .event_model import Event, occupied_date_range
from .timezone_utils import to_aware_datetime


Span = tuple[Any, Any]
SpanFunction = Callable[[Event], Optional[Span]]


def _debug_print(msg: str) -> None:
    debug_print("STACK", msg)


def event_span(event: Event) -> Optional[Span]:
    """
    Half-open instant interval [start, end) of an event.

    All-day events, and events whose end is a plain date, run to the
    midnight after their last date, so two such events sharing a day
    overlap.
    """
    date_range = occupied_date_range(event)
    if date_range is None:
        return None

    if event.all_day or not isinstance(event.end, datetime):
        first, last = date_range
        return to_aware_datetime(first), to_aware_datetime(last + timedelta(days=1))

    return to_aware_datetime(event.start), to_aware_datetime(event.end)


def day_span(event: Event) -> Optional[Span]:
    """Half-open date interval [first_date, last_date + 1 day)."""
    date_range = occupied_date_range(event)
    if date_range is None:
        return None
    first, last = date_range
    return first, last + timedelta(days=1)


def assign_rows(events: Iterable[Event], span: Optional[SpanFunction] = None) -> dict[str, int]:
    """
    Assign a zero-based row ("top") to every event.

    Events are sorted by start ascending, ties broken by longer duration
    first, then by input order. Each event goes to the lowest row whose
    last end is <= its start; if none is free a new row is opened.

    Args:
        events: Events to stack.
        span: Maps an event to its half-open [start, end) interval.
            Defaults to event_span. Events mapped to None are skipped.

    Returns:
        Dict mapping event id -> row index.
    """
    span = span or event_span

    spans = []
    for order, event in enumerate(events):
        interval = span(event)
        if interval is None:
            _debug_print(f"Event {event.id} has no span, not stacked")
            continue
        spans.append((interval[0], interval[1], order, event))

    spans.sort(key=lambda s: (s[0], -(s[1] - s[0]), s[2]))

    row_ends: list = []  # end of the last event in each row
    rows: dict[str, int] = {}

    for start, end, _order, event in spans:
        for row_idx, row_end in enumerate(row_ends):
            if row_end <= start:
                row_ends[row_idx] = end
                rows[event.id] = row_idx
                break
        else:
            rows[event.id] = len(row_ends)
            row_ends.append(end)

    _debug_print(f"Stacked {len(rows)} events into {len(row_ends)} rows")
    return rows
