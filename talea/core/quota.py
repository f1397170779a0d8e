"""Trial-save and daily AI-usage counters."""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timezone
from typing import Callable, Dict, Mapping, Optional, Tuple

from talea.config import QuotaLimits
from talea.core.errors import StorageError
from talea.core.storage import KeyValueStore, store_lock
from talea.schemas import QuotaState, Tier, TrialInfo

_LOGGER = logging.getLogger(__name__)

TRIAL_REMAINING_KEY = "trialRemainingSaves"
AI_USAGE_KEY = "aiUsageToday"
AI_USAGE_DATE_KEY = "lastAiUsageDate"

QUOTA_KEYS = (TRIAL_REMAINING_KEY, AI_USAGE_KEY, AI_USAGE_DATE_KEY)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def can_save(tier: Tier, remaining_saves: int) -> bool:
    """Signed-in tiers save freely; anonymous users spend trial saves."""

    if tier in (Tier.PREMIUM, Tier.FREEMIUM):
        return True
    return remaining_saves > 0


def can_use_ai(tier: Tier, ai_usage_today: int, limits: QuotaLimits = QuotaLimits()) -> bool:
    if tier == Tier.PREMIUM:
        return True
    if tier == Tier.FREEMIUM:
        return ai_usage_today < limits.ai_daily_freemium
    return ai_usage_today < limits.ai_daily_anonymous


class QuotaTracker:
    """Owns :class:`QuotaState` and keeps it in sync with the store.

    The counters are browser-wide: they are not keyed by user id and survive
    identity changes. Every check re-reads the store under ``store_lock``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        limits: Optional[QuotaLimits] = None,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._store = store
        self._limits = limits or QuotaLimits()
        self._today = today
        self._lock = store_lock(store)
        with self._lock:
            self._state = self._load()

    # Loading -----------------------------------------------------------
    def _read_int(self, key: str, default: int) -> int:
        raw = self._store.get(key)
        if raw is None:
            return default
        try:
            return max(0, int(raw))
        except ValueError:
            _LOGGER.warning("Corrupt quota counter %s=%r; using %s", key, raw, default)
            return default

    def _read_date(self, key: str) -> Optional[date]:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return date.fromisoformat(raw.split("T")[0])
        except ValueError:
            _LOGGER.warning("Corrupt quota date %s=%r; resetting", key, raw)
            return None

    def _read_state(self) -> Tuple[QuotaState, Optional[date]]:
        """Counters as stored, plus the stale usage date when a new day began."""

        today = self._today()
        remaining = self._read_int(TRIAL_REMAINING_KEY, self._limits.trial_saves)
        usage = self._read_int(AI_USAGE_KEY, 0)
        last_date = self._read_date(AI_USAGE_DATE_KEY)
        stale = None
        if last_date != today:
            stale = last_date
            usage = 0
            last_date = today
        state = QuotaState(
            remaining_saves=remaining,
            trial_expired=remaining == 0,
            ai_usage_today=usage,
            last_usage_date=last_date,
        )
        return state, stale

    def _load(self) -> QuotaState:
        state, stale = self._read_state()
        if stale is not None:
            _LOGGER.info("New day detected, resetting AI usage (last=%s)", stale)
        try:
            self._write(self._serialise(state))
        except StorageError as exc:
            _LOGGER.warning("Unable to initialise quota keys: %s", exc)
        return state

    def _sync(self) -> QuotaState:
        self._state, _ = self._read_state()
        return self._state

    # Persistence -------------------------------------------------------
    @staticmethod
    def _serialise(state: QuotaState) -> Dict[str, str]:
        return {
            TRIAL_REMAINING_KEY: str(state.remaining_saves),
            AI_USAGE_KEY: str(state.ai_usage_today),
            AI_USAGE_DATE_KEY: state.last_usage_date.isoformat(),
        }

    def _write(self, values: Mapping[str, str]) -> None:
        previous = {key: self._store.get(key) for key in values}
        written = []
        try:
            for key, value in values.items():
                if previous[key] == value:
                    continue
                self._store.set(key, value)
                written.append(key)
        except StorageError:
            for key in written:
                try:
                    if previous[key] is None:
                        self._store.remove(key)
                    else:
                        self._store.set(key, previous[key])
                except StorageError:
                    _LOGGER.warning("Unable to roll back quota key %s", key)
            raise

    def _commit(self, state: QuotaState) -> QuotaState:
        self._write(self._serialise(state))
        self._state = state
        return state

    # Read API ----------------------------------------------------------
    @property
    def limits(self) -> QuotaLimits:
        return self._limits

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def state(self) -> QuotaState:
        """Current stored counters with any pending day rollover applied."""

        with self._lock:
            return self._sync()

    @property
    def remaining_saves(self) -> int:
        return self.state.remaining_saves

    @property
    def trial_expired(self) -> bool:
        return self.state.trial_expired

    @property
    def ai_usage_today(self) -> int:
        return self.state.ai_usage_today

    def can_save(self, tier: Tier) -> bool:
        return can_save(tier, self.remaining_saves)

    def can_use_ai(self, tier: Tier) -> bool:
        return can_use_ai(tier, self.ai_usage_today, self._limits)

    def trial_info(self) -> TrialInfo:
        maximum = self._limits.trial_saves
        return TrialInfo(used_saves=max(0, maximum - self.remaining_saves), max_saves=maximum)

    # Mutations ---------------------------------------------------------
    def decrement_save(self) -> int:
        """Spend one trial save and return what is left.

        Only the saved-items ledger calls this, right after an anonymous save.
        """

        with self._lock:
            current = self._sync()
            remaining = max(0, current.remaining_saves - 1)
            state = current.model_copy(
                update={"remaining_saves": remaining, "trial_expired": remaining == 0}
            )
            self._commit(state)
            _LOGGER.info("Trial save used; %s remaining", remaining)
            return remaining

    def record_ai_usage(self) -> int:
        """Count one successful AI invocation and return today's total."""

        with self._lock:
            state, stale = self._read_state()
            if stale is not None:
                _LOGGER.info("New day detected, resetting AI usage (last=%s)", stale)
            state = state.model_copy(update={"ai_usage_today": state.ai_usage_today + 1})
            self._commit(state)
            return state.ai_usage_today

    def reset_trial(self) -> None:
        """Restore the starting trial allotment. Support tooling only."""

        with self._lock:
            self._commit(
                self._sync().model_copy(
                    update={"remaining_saves": self._limits.trial_saves, "trial_expired": False}
                )
            )
            _LOGGER.info("Trial reset to %s saves", self._limits.trial_saves)

    def restore(self, state: QuotaState) -> None:
        """Write a previous snapshot back, e.g. to undo a decrement."""

        with self._lock:
            self._commit(state)


__all__ = [
    "AI_USAGE_DATE_KEY",
    "AI_USAGE_KEY",
    "QUOTA_KEYS",
    "QuotaTracker",
    "TRIAL_REMAINING_KEY",
    "can_save",
    "can_use_ai",
    "utc_today",
]
