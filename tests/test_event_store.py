"""
Tests for the date-indexed event store.
"""

from datetime import date, datetime

import pytz

from gridlayout.event_model import Event
from gridlayout.event_store import DataStore

from tests.factories import all_day, timed


def test_add_event_indexes_every_occupied_day():
    store = DataStore()
    store.add_event(all_day("trip", date(2021, 4, 30), date(2021, 5, 2)))

    assert store.ids_of_day == {
        "20210430": {"trip"},
        "20210501": {"trip"},
        "20210502": {"trip"},
    }
    assert store.get_event("trip").id == "trip"


def test_from_events():
    store = DataStore.from_events([
        timed("a", datetime(2021, 5, 3, 9), datetime(2021, 5, 3, 10)),
        timed("b", datetime(2021, 5, 3, 11), datetime(2021, 5, 4, 0)),
    ], calendars=["work"])

    assert store.calendars == ["work"]
    assert store.get_ids_of_day("20210503") == {"a", "b"}
    assert store.get_ids_of_day("20210504") == set()
    assert store.get_event_count() == 2


def test_replacing_event_reindexes_it():
    store = DataStore()
    store.add_event(all_day("x", date(2021, 5, 3), date(2021, 5, 4)))
    store.add_event(all_day("x", date(2021, 5, 6), date(2021, 5, 6)))

    assert store.ids_of_day == {"20210506": {"x"}}


def test_remove_event():
    store = DataStore.from_events([
        all_day("a", date(2021, 5, 3), date(2021, 5, 4)),
        all_day("b", date(2021, 5, 4), date(2021, 5, 4)),
    ])

    assert store.remove_event("a")
    assert not store.remove_event("a")
    assert store.ids_of_day == {"20210504": {"b"}}
    assert store.get_event("a") is None


def test_malformed_event_is_stored_but_not_indexed():
    store = DataStore()
    store.add_event(Event("broken", datetime(2021, 5, 3, 10), datetime(2021, 5, 3, 9)))

    assert store.get_event("broken") is not None
    assert store.ids_of_day == {}


def test_date_start_with_aware_end_is_indexed():
    store = DataStore.from_events([
        Event("mixed", date(2021, 5, 3), pytz.UTC.localize(datetime(2021, 5, 4, 10))),
    ])

    assert store.ids_of_day == {"20210503": {"mixed"}, "20210504": {"mixed"}}
