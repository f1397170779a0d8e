from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from helpers import FlakyStore
from talea.core.notifications import NotificationCenter
from talea.core.storage import InMemoryKeyValueStore, JsonFileStore
from talea.core.trips import TripPlanner, current_trip_key, trips_key
from talea.schemas import UserIdentity

MEMBER = UserIdentity(id="user-1", is_anonymous=False)
GUEST = UserIdentity(id="anon-1", is_anonymous=True)


class _Clock:
    def __init__(self) -> None:
        self.value = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.value += timedelta(minutes=1)
        return self.value


def _planner(store=None) -> TripPlanner:
    return TripPlanner(store if store is not None else InMemoryKeyValueStore(), clock=_Clock())


@pytest.mark.parametrize("identity", [None, GUEST])
def test_trips_require_sign_in(identity):
    notifications = NotificationCenter()
    planner = TripPlanner(InMemoryKeyValueStore(), notifications=notifications, clock=_Clock())

    assert planner.create_trip(identity, "Lisbon") is None
    assert notifications.active()[-1].message == "You must be logged in to create trips"
    assert planner.trips(GUEST.id) == []


def test_blank_name_is_rejected():
    planner = _planner()

    assert planner.create_trip(MEMBER, "   ") is None
    assert planner.trips(MEMBER.id) == []


def test_create_makes_the_trip_current_and_persists_camel_case():
    store = InMemoryKeyValueStore()
    planner = _planner(store)

    trip = planner.create_trip(MEMBER, " Lisbon weekend ", "Lisbon")

    assert trip.name == "Lisbon weekend"
    assert trip.id.startswith("trip-")
    assert planner.current_trip(MEMBER.id).id == trip.id
    assert store.get(current_trip_key(MEMBER.id)) == trip.id
    stored = json.loads(store.get(trips_key(MEMBER.id)))
    assert stored[0]["userId"] == "user-1"
    assert stored[0]["taleIds"] == []


def test_add_and_remove_tales():
    planner = _planner()
    trip = planner.create_trip(MEMBER, "Kyoto")

    assert planner.add_to_trip(MEMBER.id, trip.id, "dummy-event-1") is True
    assert planner.add_to_trip(MEMBER.id, trip.id, "dummy-event-1") is True
    assert planner.add_to_trip(MEMBER.id, trip.id, "dummy-hotel-2") is True

    updated = planner.get(MEMBER.id, trip.id)
    assert updated.tale_ids == ["dummy-event-1", "dummy-hotel-2"]
    assert updated.updated_at > trip.updated_at

    assert planner.remove_from_trip(MEMBER.id, trip.id, "dummy-event-1") is True
    assert planner.get(MEMBER.id, trip.id).tale_ids == ["dummy-hotel-2"]


def test_unknown_trip_is_reported():
    planner = _planner()

    assert planner.select_trip(MEMBER.id, "trip-missing") is False
    assert planner.add_to_trip(MEMBER.id, "trip-missing", "x") is False
    assert planner.delete_trip(MEMBER.id, "trip-missing") is False


def test_select_and_delete_current_trip():
    store = InMemoryKeyValueStore()
    planner = _planner(store)
    first = planner.create_trip(MEMBER, "Kyoto")
    second = planner.create_trip(MEMBER, "Osaka")
    assert planner.current_trip(MEMBER.id).id == second.id

    assert planner.select_trip(MEMBER.id, first.id) is True
    assert planner.delete_trip(MEMBER.id, first.id) is True

    assert planner.current_trip(MEMBER.id) is None
    assert store.get(current_trip_key(MEMBER.id)) is None
    assert [trip.id for trip in planner.trips(MEMBER.id)] == [second.id]


def test_failed_current_trip_write_rolls_back_creation():
    store = FlakyStore()
    planner = _planner(store)
    store.failing_prefixes.add("currentTripId:")

    assert planner.create_trip(MEMBER, "Kyoto") is None
    assert planner.trips(MEMBER.id) == []


def test_failed_update_keeps_trip_unchanged():
    store = FlakyStore()
    planner = _planner(store)
    trip = planner.create_trip(MEMBER, "Kyoto")
    store.failing_prefixes.add("userTrips:")

    assert planner.add_to_trip(MEMBER.id, trip.id, "dummy-event-1") is False
    assert planner.get(MEMBER.id, trip.id).tale_ids == []


def test_planners_sharing_a_file_see_each_other(tmp_path):
    path = tmp_path / "store.json"
    first = _planner(JsonFileStore(path))
    second = _planner(JsonFileStore(path))

    trip = first.create_trip(MEMBER, "Kyoto")
    second.add_to_trip(MEMBER.id, trip.id, "dummy-event-1")
    first.add_to_trip(MEMBER.id, trip.id, "dummy-hotel-1")

    assert second.get(MEMBER.id, trip.id).tale_ids == ["dummy-event-1", "dummy-hotel-1"]
