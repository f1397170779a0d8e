"""Per-user saved tales and the toggle-save workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Optional

from talea.core.errors import NotReadyError, StorageError, TaleaError
from talea.core.notifications import NotificationCenter
from talea.core.quota import QuotaTracker
from talea.core.storage import KeyValueStore, read_json, store_lock, write_json
from talea.schemas import Notification, SaveOutcome, Tier, UpgradeTrigger

_LOGGER = logging.getLogger(__name__)

SAVED_ITEMS_KEY_PREFIX = "savedItems:"


def saved_items_key(user_id: str) -> str:
    return f"{SAVED_ITEMS_KEY_PREFIX}{user_id}"


@dataclass(frozen=True)
class ToggleResult:
    """Terminal state of a :meth:`SavedItemsLedger.toggle_save` call."""

    item_id: str
    outcome: Optional[SaveOutcome] = None
    error: Optional[TaleaError] = None
    notification: Optional[Notification] = None
    upgrade_trigger: Optional[UpgradeTrigger] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SavedItemsLedger:
    """Maintains the saved set for each user id.

    New saves are checked against the quota tracker; removals never are.
    Sets are read from the store on every call; toggles hold ``store_lock``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        quota: QuotaTracker,
        tier_provider: Callable[[], Optional[Tier]],
        *,
        notifications: Optional[NotificationCenter] = None,
    ) -> None:
        self._store = store
        self._quota = quota
        self._tier_provider = tier_provider
        self._notifications = notifications or NotificationCenter()
        self._lock = store_lock(store)

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    def _read(self, user_id: str) -> FrozenSet[str]:
        payload = read_json(self._store, saved_items_key(user_id), default=[])
        if not isinstance(payload, list):
            _LOGGER.warning("Saved items for %s are not a list; starting empty", user_id)
            return frozenset()
        return frozenset(str(item) for item in payload if isinstance(item, str) and item)

    def _persist(self, user_id: str, item_ids: Iterable[str]) -> None:
        write_json(self._store, saved_items_key(user_id), sorted(item_ids))

    def load(self, user_id: str) -> FrozenSet[str]:
        """Re-read the saved set from storage, e.g. after an identity change."""

        item_ids = self._read(user_id)
        _LOGGER.info("Loaded %s saved tales for user %s", len(item_ids), user_id)
        return item_ids

    def saved_ids(self, user_id: str) -> FrozenSet[str]:
        with self._lock:
            return self._read(user_id)

    def is_saved(self, user_id: Optional[str], item_id: str) -> bool:
        if not user_id:
            return False
        return item_id in self.saved_ids(user_id)

    def clear(self, user_id: str) -> bool:
        """Drop every saved tale for ``user_id``. Quota is not refunded."""

        with self._lock:
            try:
                self._store.remove(saved_items_key(user_id))
            except StorageError as exc:
                _LOGGER.warning("Failed to clear saved tales for %s: %s", user_id, exc)
                self._notifications.error("Clear Failed", "Could not clear your collection. Please try again.")
                return False
        self._notifications.info("Cleared", "Your collection is now empty")
        return True

    def _not_ready(self, item_id: str, reason: str) -> ToggleResult:
        _LOGGER.error("Attempted to toggle save for %s but %s", item_id, reason)
        notification = self._notifications.error("Not ready", "App not ready to save items. Please try again.")
        return ToggleResult(item_id=item_id, error=NotReadyError(reason), notification=notification)

    def _failed(self, item_id: str, exc: StorageError) -> ToggleResult:
        _LOGGER.error("Error toggling save state for %s: %s", item_id, exc)
        notification = self._notifications.error("Save Failed", "Could not save item. Please try again.")
        return ToggleResult(item_id=item_id, error=exc, notification=notification)

    def toggle_save(self, user_id: Optional[str], item_id: str) -> ToggleResult:
        """Save ``item_id`` if absent, otherwise remove it.

        Either the saved set and the trial counter are both updated or
        neither is; failures come back on the result instead of raising.
        """

        if not user_id:
            return self._not_ready(item_id, "user id was not ready")

        with self._lock:
            current = self.saved_ids(user_id)

            if item_id in current:
                updated = current - {item_id}
                try:
                    self._persist(user_id, updated)
                except StorageError as exc:
                    return self._failed(item_id, exc)
                _LOGGER.info("Tale %s unsaved for user %s", item_id, user_id)
                notification = self._notifications.info("Removed", "Item removed from your collection")
                return ToggleResult(item_id=item_id, outcome=SaveOutcome.UNSAVED, notification=notification)

            tier = self._tier_provider()
            if tier is None:
                return self._not_ready(item_id, "tier could not be resolved")

            if not self._quota.can_save(tier):
                info = self._quota.trial_info()
                _LOGGER.info("Save of %s blocked for user %s (tier=%s)", item_id, user_id, tier.value)
                notification = self._notifications.info(
                    "Save limit reached",
                    f"You've used {info.used_saves}/{info.max_saves} free saves. Upgrade to save more.",
                )
                return ToggleResult(
                    item_id=item_id,
                    outcome=SaveOutcome.BLOCKED,
                    notification=notification,
                    upgrade_trigger=UpgradeTrigger.SAVE_LIMIT,
                )

            spends_trial = tier == Tier.ANONYMOUS
            snapshot = self._quota.state
            decremented = False
            updated = current | {item_id}
            try:
                if spends_trial:
                    self._quota.decrement_save()
                    decremented = True
                self._persist(user_id, updated)
            except StorageError as exc:
                if decremented:
                    try:
                        self._quota.restore(snapshot)
                    except StorageError:
                        _LOGGER.exception("Unable to restore trial saves after failed save of %s", item_id)
                return self._failed(item_id, exc)

            _LOGGER.info("Tale %s saved for user %s (tier=%s)", item_id, user_id, tier.value)
            notification = self._notifications.success("Saved!", "Item added to your collection")
            return ToggleResult(item_id=item_id, outcome=SaveOutcome.SAVED, notification=notification)


__all__ = [
    "SAVED_ITEMS_KEY_PREFIX",
    "SavedItemsLedger",
    "ToggleResult",
    "saved_items_key",
]
