"""Per-user favorites, kept apart from the saved collection and its quota."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, FrozenSet, List, Optional

from pydantic import ValidationError

from talea.core.errors import SignInRequiredError, StorageError, TaleaError
from talea.core.notifications import NotificationCenter
from talea.core.storage import KeyValueStore, read_json, store_lock, write_json
from talea.schemas import FavoriteEntry, Notification, Tale, UserIdentity

_LOGGER = logging.getLogger(__name__)

FAVORITES_KEY_PREFIX = "favorites_"


def favorites_key(user_id: str) -> str:
    return f"{FAVORITES_KEY_PREFIX}{user_id}"


@dataclass(frozen=True)
class FavoriteResult:
    tale_id: str
    added: Optional[bool] = None
    error: Optional[TaleaError] = None
    notification: Optional[Notification] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FavoritesLedger:
    """Heart toggle for signed-in users.

    Favorites never touch the trial quota. Older lists that hold bare tale
    ids are read as entries without a title.
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

    def _read(self, user_id: str) -> List[FavoriteEntry]:
        payload = read_json(self._store, favorites_key(user_id), default=[])
        if not isinstance(payload, list):
            _LOGGER.warning("Favorites for %s are not a list; starting empty", user_id)
            return []
        entries: List[FavoriteEntry] = []
        seen = set()
        for item in payload:
            if isinstance(item, str):
                item = {"id": item, "timestamp": self._clock()}
            try:
                entry = FavoriteEntry.model_validate(item)
            except ValidationError:
                _LOGGER.warning("Skipping malformed favorite for %s: %r", user_id, item)
                continue
            if entry.id in seen:
                continue
            seen.add(entry.id)
            entries.append(entry)
        return entries

    def entries(self, user_id: Optional[str]) -> List[FavoriteEntry]:
        if not user_id:
            return []
        with self._lock:
            return self._read(user_id)

    def favorite_ids(self, user_id: Optional[str]) -> FrozenSet[str]:
        return frozenset(entry.id for entry in self.entries(user_id))

    def is_favorite(self, user_id: Optional[str], tale_id: str) -> bool:
        return tale_id in self.favorite_ids(user_id)

    def toggle_favorite(self, identity: Optional[UserIdentity], tale: Tale) -> FavoriteResult:
        """Add ``tale`` to the favorites of ``identity`` or take it off again."""

        if identity is None or identity.is_anonymous:
            notification = self._notifications.info("Sign in required", "Please sign in to add favorites.")
            return FavoriteResult(
                tale_id=tale.id,
                error=SignInRequiredError("favorites need a signed-in user"),
                notification=notification,
            )

        user_id = identity.id
        with self._lock:
            current = self._read(user_id)
            removing = any(entry.id == tale.id for entry in current)
            if removing:
                updated = [entry for entry in current if entry.id != tale.id]
            else:
                entry = FavoriteEntry(id=tale.id, title=tale.title, type=tale.type.value, timestamp=self._clock())
                updated = current + [entry]
            try:
                write_json(self._store, favorites_key(user_id), [item.model_dump(mode="json") for item in updated])
            except StorageError as exc:
                _LOGGER.error("Error updating favorites for %s: %s", user_id, exc)
                notification = self._notifications.error("Favorites", "Failed to update favorites.")
                return FavoriteResult(tale_id=tale.id, error=exc, notification=notification)

        if removing:
            _LOGGER.info("Tale %s removed from favorites of %s", tale.id, user_id)
            notification = self._notifications.info("Favorites", "Removed from Favorites!")
        else:
            _LOGGER.info("Tale %s added to favorites of %s", tale.id, user_id)
            notification = self._notifications.success("Favorites", "Added to Favorites!")
        return FavoriteResult(tale_id=tale.id, added=not removing, notification=notification)


__all__ = [
    "FAVORITES_KEY_PREFIX",
    "FavoriteResult",
    "FavoritesLedger",
    "favorites_key",
]
