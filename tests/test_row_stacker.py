"""
Tests for greedy row assignment.
"""

from datetime import date, datetime, timedelta

import pytz
from hypothesis import given, settings
from hypothesis import strategies as st

from gridlayout.event_model import Event
from gridlayout.row_stacker import assign_rows, day_span, event_span

from tests.factories import all_day, timed


def test_empty_input():
    assert assign_rows([]) == {}


def test_non_overlapping_events_share_row():
    events = [
        timed("a", datetime(2021, 5, 3, 9), datetime(2021, 5, 3, 10)),
        timed("b", datetime(2021, 5, 3, 10), datetime(2021, 5, 3, 11)),
        timed("c", datetime(2021, 5, 3, 12), datetime(2021, 5, 3, 13)),
    ]

    assert assign_rows(events) == {"a": 0, "b": 0, "c": 0}


def test_overlapping_events_get_lowest_free_row():
    events = [
        timed("a", datetime(2021, 5, 3, 8), datetime(2021, 5, 3, 10)),
        timed("b", datetime(2021, 5, 3, 9), datetime(2021, 5, 3, 11)),
        timed("c", datetime(2021, 5, 3, 10), datetime(2021, 5, 3, 12)),
        timed("d", datetime(2021, 5, 3, 10, 30), datetime(2021, 5, 3, 11)),
    ]

    assert assign_rows(events) == {"a": 0, "b": 1, "c": 0, "d": 2}


def test_longer_event_wins_tie_on_start():
    events = [
        all_day("short", date(2021, 5, 3), date(2021, 5, 3)),
        all_day("long", date(2021, 5, 3), date(2021, 5, 5)),
    ]

    rows = assign_rows(events)

    assert rows == {"long": 0, "short": 1}


def test_equal_spans_keep_input_order():
    events = [
        all_day("first", date(2021, 5, 3), date(2021, 5, 4)),
        all_day("second", date(2021, 5, 3), date(2021, 5, 4)),
    ]

    assert assign_rows(events) == {"first": 0, "second": 1}


def test_all_day_events_sharing_a_day_do_not_share_row():
    events = [
        all_day("fri-sun", date(2021, 4, 30), date(2021, 5, 2)),
        all_day("sun-tue", date(2021, 5, 2), date(2021, 5, 4)),
        all_day("tue-thu", date(2021, 5, 4), date(2021, 5, 6)),
    ]

    rows = assign_rows(events)

    assert rows == {"fri-sun": 0, "sun-tue": 1, "tue-thu": 0}


def test_malformed_event_is_left_out():
    events = [
        timed("ok", datetime(2021, 5, 3, 9), datetime(2021, 5, 3, 10)),
        timed("broken", datetime(2021, 5, 3, 10), datetime(2021, 5, 3, 9)),
    ]

    assert assign_rows(events) == {"ok": 0}


def test_day_span_stacks_timed_events_per_day():
    # Different hours on the same day still share the day cell
    events = [
        timed("morning", datetime(2021, 5, 3, 8), datetime(2021, 5, 3, 9)),
        timed("evening", datetime(2021, 5, 3, 18), datetime(2021, 5, 3, 19)),
    ]

    assert assign_rows(events) == {"morning": 0, "evening": 0}
    assert assign_rows(events, span=day_span) == {"morning": 0, "evening": 1}


def test_date_valued_events_sharing_a_day_do_not_share_row():
    # Plain date ends are inclusive, so both events occupy Tuesday
    events = [
        Event("mon-tue", date(2021, 5, 3), date(2021, 5, 4)),
        Event("tue-wed", date(2021, 5, 4), date(2021, 5, 5)),
    ]

    assert assign_rows(events) == {"mon-tue": 0, "tue-wed": 1}
    assert assign_rows(events, span=day_span) == {"mon-tue": 0, "tue-wed": 1}


def test_event_span_of_date_valued_event_runs_to_next_midnight():
    start, end = event_span(Event("x", date(2021, 5, 3), date(2021, 5, 4)))

    assert start == pytz.UTC.localize(datetime(2021, 5, 3))
    assert end == pytz.UTC.localize(datetime(2021, 5, 5))


def test_event_span_of_all_day_event_runs_to_next_midnight():
    start, end = event_span(all_day("x", date(2021, 5, 3), date(2021, 5, 4)))

    assert start == pytz.UTC.localize(datetime(2021, 5, 3))
    assert end == pytz.UTC.localize(datetime(2021, 5, 5))


def test_mixed_aware_and_naive_events():
    events = [
        timed("naive", datetime(2021, 5, 3, 9), datetime(2021, 5, 3, 11)),
        timed("aware", pytz.UTC.localize(datetime(2021, 5, 3, 10)),
              pytz.UTC.localize(datetime(2021, 5, 3, 12))),
    ]

    assert assign_rows(events) == {"naive": 0, "aware": 1}


# ============================================================================
# Properties
# ============================================================================

BASE = pytz.UTC.localize(datetime(2021, 5, 3))

intervals = st.lists(
    st.tuples(st.integers(min_value=0, max_value=48), st.integers(min_value=1, max_value=12)),
    max_size=30,
)


def _events(raw):
    return [
        Event(
            id=f"e{i}",
            start=BASE + timedelta(hours=start),
            end=BASE + timedelta(hours=start + length),
        )
        for i, (start, length) in enumerate(raw)
    ]


def _overlap(a: Event, b: Event) -> bool:
    return a.start < b.end and b.start < a.end


@settings(max_examples=200)
@given(intervals)
def test_overlapping_events_never_share_row(raw):
    events = _events(raw)
    rows = assign_rows(events)

    assert set(rows) == {e.id for e in events}
    for i, a in enumerate(events):
        for b in events[i + 1:]:
            if _overlap(a, b):
                assert rows[a.id] != rows[b.id]


@settings(max_examples=200)
@given(intervals)
def test_every_lower_row_is_blocked(raw):
    events = _events(raw)
    rows = assign_rows(events)

    for event in events:
        for row in range(rows[event.id]):
            assert any(
                rows[other.id] == row and _overlap(event, other)
                for other in events if other is not event
            )


@settings(max_examples=200)
@given(intervals)
def test_row_count_is_maximum_overlap(raw):
    events = _events(raw)
    rows = assign_rows(events)

    max_overlap = max(
        (sum(1 for e in events if e.start <= point.start < e.end) for point in events),
        default=0,
    )
    row_count = max(rows.values()) + 1 if rows else 0
    assert row_count == max_overlap
