"""Simple per-user trip planner."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pydantic import ValidationError

from talea.core.errors import StorageError
from talea.core.notifications import NotificationCenter
from talea.core.storage import KeyValueStore, read_json, store_lock, write_json
from talea.schemas import Trip, UserIdentity

_LOGGER = logging.getLogger(__name__)

TRIPS_KEY_PREFIX = "userTrips:"
CURRENT_TRIP_KEY_PREFIX = "currentTripId:"


def trips_key(user_id: str) -> str:
    return f"{TRIPS_KEY_PREFIX}{user_id}"


def current_trip_key(user_id: str) -> str:
    return f"{CURRENT_TRIP_KEY_PREFIX}{user_id}"


class TripPlanner:
    """Creates trips and collects tales into them.

    Operations report problems as notifications and return ``False`` or
    ``None``; they never raise.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        notifications: Optional[NotificationCenter] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._store = store
        self._notifications = notifications or NotificationCenter()
        self._clock = clock
        self._lock = store_lock(store)

    # Storage -----------------------------------------------------------
    def _read(self, user_id: str) -> List[Trip]:
        payload = read_json(self._store, trips_key(user_id), default=[])
        if not isinstance(payload, list):
            _LOGGER.warning("Trips for %s are not a list; starting empty", user_id)
            return []
        trips = []
        for item in payload:
            try:
                trips.append(Trip.model_validate(item))
            except ValidationError:
                _LOGGER.warning("Skipping malformed trip for %s: %r", user_id, item)
        return trips

    def _write(self, user_id: str, trips: List[Trip]) -> None:
        write_json(self._store, trips_key(user_id), [trip.model_dump(mode="json", by_alias=True) for trip in trips])

    def _failed(self, action: str, exc: StorageError) -> None:
        _LOGGER.error("Failed to %s: %s", action, exc)
        self._notifications.error("Trip not updated", f"Failed to {action}. Please try again.")

    # Read API ----------------------------------------------------------
    def trips(self, user_id: Optional[str]) -> List[Trip]:
        if not user_id:
            return []
        with self._lock:
            return self._read(user_id)

    def get(self, user_id: Optional[str], trip_id: str) -> Optional[Trip]:
        for trip in self.trips(user_id):
            if trip.id == trip_id:
                return trip
        return None

    def current_trip(self, user_id: Optional[str]) -> Optional[Trip]:
        if not user_id:
            return None
        with self._lock:
            trip_id = self._store.get(current_trip_key(user_id))
            if not trip_id:
                return None
            return self.get(user_id, trip_id)

    # Mutations ---------------------------------------------------------
    def create_trip(self, identity: Optional[UserIdentity], name: str, destination: str = "") -> Optional[Trip]:
        if identity is None or identity.is_anonymous:
            self._notifications.info("Sign in required", "You must be logged in to create trips")
            return None
        cleaned = (name or "").strip()
        if not cleaned:
            self._notifications.warning("Name your trip", "Give your trip a name first.")
            return None

        now = self._clock()
        trip = Trip(
            id=f"trip-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}",
            user_id=identity.id,
            name=cleaned,
            destination=(destination or "").strip(),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            existing = self._read(identity.id)
            try:
                self._write(identity.id, existing + [trip])
            except StorageError as exc:
                self._failed("create trip", exc)
                return None
            try:
                self._store.set(current_trip_key(identity.id), trip.id)
            except StorageError as exc:
                try:
                    self._write(identity.id, existing)
                except StorageError:
                    _LOGGER.exception("Unable to roll back trip %s", trip.id)
                self._failed("create trip", exc)
                return None
        _LOGGER.info("Trip %s created for %s", trip.id, identity.id)
        self._notifications.success("Trip created", f"{trip.name} is now your current trip")
        return trip

    def select_trip(self, user_id: Optional[str], trip_id: str) -> bool:
        if not user_id:
            return False
        with self._lock:
            if not any(trip.id == trip_id for trip in self._read(user_id)):
                self._notifications.error("Trip not found", "That trip no longer exists.")
                return False
            try:
                self._store.set(current_trip_key(user_id), trip_id)
            except StorageError as exc:
                self._failed("select trip", exc)
                return False
        return True

    def _update_tales(self, user_id: Optional[str], trip_id: str, tale_id: str, *, add: bool) -> bool:
        if not user_id:
            return False
        with self._lock:
            trips = self._read(user_id)
            for index, trip in enumerate(trips):
                if trip.id == trip_id:
                    break
            else:
                self._notifications.error("Trip not found", "That trip no longer exists.")
                return False

            present = tale_id in trip.tale_ids
            if present == add:
                return True
            tale_ids = trip.tale_ids + [tale_id] if add else [item for item in trip.tale_ids if item != tale_id]
            trips[index] = trip.model_copy(update={"tale_ids": tale_ids, "updated_at": self._clock()})
            try:
                self._write(user_id, trips)
            except StorageError as exc:
                self._failed("add to trip" if add else "remove from trip", exc)
                return False

        if add:
            _LOGGER.info("Tale %s added to trip %s", tale_id, trip_id)
            self._notifications.success("Added to Trip!", f"Added to {trip.name}")
        else:
            _LOGGER.info("Tale %s removed from trip %s", tale_id, trip_id)
            self._notifications.info("Removed from Trip", f"Removed from {trip.name}")
        return True

    def add_to_trip(self, user_id: Optional[str], trip_id: str, tale_id: str) -> bool:
        return self._update_tales(user_id, trip_id, tale_id, add=True)

    def remove_from_trip(self, user_id: Optional[str], trip_id: str, tale_id: str) -> bool:
        return self._update_tales(user_id, trip_id, tale_id, add=False)

    def delete_trip(self, user_id: Optional[str], trip_id: str) -> bool:
        if not user_id:
            return False
        with self._lock:
            trips = self._read(user_id)
            remaining = [trip for trip in trips if trip.id != trip_id]
            if len(remaining) == len(trips):
                self._notifications.error("Trip not found", "That trip no longer exists.")
                return False
            try:
                self._write(user_id, remaining)
                if self._store.get(current_trip_key(user_id)) == trip_id:
                    self._store.remove(current_trip_key(user_id))
            except StorageError as exc:
                self._failed("delete trip", exc)
                return False
        _LOGGER.info("Trip %s deleted for %s", trip_id, user_id)
        self._notifications.info("Trip deleted", "The trip was removed.")
        return True


__all__ = [
    "CURRENT_TRIP_KEY_PREFIX",
    "TRIPS_KEY_PREFIX",
    "TripPlanner",
    "current_trip_key",
    "trips_key",
]
