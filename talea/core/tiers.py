"""Tier resolution and the persisted premium upgrade."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from talea.core.storage import KeyValueStore
from talea.schemas import Tier, UserIdentity

_LOGGER = logging.getLogger(__name__)

USER_TIER_KEY = "userTier"
UPGRADE_DATE_KEY = "upgradeDate"
SELECTED_PLAN_KEY = "selectedPlan"


def resolve_tier(identity: Optional[UserIdentity], premium_override: bool = False) -> Optional[Tier]:
    """Return the tier for ``identity``.

    ``None`` means auth has not produced an identity yet; callers should hide
    tier-dependent UI instead of guessing a tier.
    """

    if identity is None:
        return None
    if premium_override or identity.is_premium:
        return Tier.PREMIUM
    if not identity.is_anonymous:
        return Tier.FREEMIUM
    return Tier.ANONYMOUS


class PremiumStatus:
    """Reads and records the simulated premium upgrade."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._store = store
        self._clock = clock

    def is_premium(self) -> bool:
        return self._store.get(USER_TIER_KEY) == Tier.PREMIUM.value and bool(self._store.get(UPGRADE_DATE_KEY))

    def upgraded_at(self) -> Optional[datetime]:
        raw = self._store.get(UPGRADE_DATE_KEY)
        if not raw:
            return None
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            _LOGGER.warning("Ignoring malformed upgrade date %r", raw)
            return None

    def upgrade(self, plan: str = Tier.PREMIUM.value) -> None:
        """Persist a completed upgrade. Raises ``StorageError`` on write failure."""

        self._store.set(USER_TIER_KEY, Tier.PREMIUM.value)
        self._store.set(UPGRADE_DATE_KEY, self._clock().isoformat())
        self._store.set(SELECTED_PLAN_KEY, plan)
        _LOGGER.info("Upgraded browser profile to premium (plan=%s)", plan)


__all__ = [
    "PremiumStatus",
    "SELECTED_PLAN_KEY",
    "UPGRADE_DATE_KEY",
    "USER_TIER_KEY",
    "resolve_tier",
]
