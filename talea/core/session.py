"""Explicit wiring of the Talea services for one browser session."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, FrozenSet, List, Optional

from talea.config import QuotaLimits
from talea.core.auth import LocalAuth
from talea.core.catalog import TaleCatalog
from talea.core.companion import TravelCompanion
from talea.core.errors import CompanionError, InvalidQuestionError, NotReadyError, StorageError, TaleaError
from talea.core.favorites import FavoriteResult, FavoritesLedger
from talea.core.ledger import SavedItemsLedger, ToggleResult
from talea.core.notifications import NotificationCenter
from talea.core.quota import QuotaTracker, utc_today
from talea.core.storage import KeyValueStore
from talea.core.tiers import PremiumStatus, resolve_tier
from talea.core.trips import TripPlanner
from talea.schemas import (
    Notification,
    Tale,
    TaleType,
    Tier,
    TrialInfo,
    Trip,
    UpgradePrompt,
    UpgradeTrigger,
    UserIdentity,
)

_LOGGER = logging.getLogger(__name__)

_PROMPT_COPY: Dict[UpgradeTrigger, Dict[str, str]] = {
    UpgradeTrigger.SAVE_LIMIT: {
        "title": "🚫 Save Limit Reached",
        "subtitle": "You've used {used}/{maximum} free saves",
        "description": "Upgrade to save unlimited destinations and unlock powerful travel planning features.",
        "button_text": "Upgrade to Save More",
    },
    UpgradeTrigger.AI_LIMIT: {
        "title": "🤖 AI Features Locked",
        "subtitle": "Get personalized recommendations",
        "description": "Unlock AI-powered travel suggestions, itinerary optimization, and smart recommendations.",
        "button_text": "Unlock AI Features",
    },
    UpgradeTrigger.UPGRADE_BUTTON: {
        "title": "✨ Upgrade Your Travel Experience",
        "subtitle": "Unlock premium features",
        "description": "Get access to AI recommendations, unlimited saves, and advanced planning tools.",
        "button_text": "Upgrade to Premium",
    },
    UpgradeTrigger.DEFAULT: {
        "title": "🎯 Go Premium",
        "subtitle": "Unlock all features",
        "description": "Get the full travel planning experience with unlimited saves and AI features.",
        "button_text": "Upgrade Now",
    },
}


@dataclass(frozen=True)
class CompanionReply:
    answer: Optional[str] = None
    error: Optional[TaleaError] = None
    notification: Optional[Notification] = None
    upgrade_trigger: Optional[UpgradeTrigger] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.upgrade_trigger is None


class TaleaSession:
    """Owns the auth, quota, ledger, favorites, trip and catalog services for a browser."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        limits: Optional[QuotaLimits] = None,
        catalog: Optional[TaleCatalog] = None,
        companion: Optional[TravelCompanion] = None,
        today: Callable[[], date] = utc_today,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.notifications = NotificationCenter(clock=clock)
        self.auth = LocalAuth(store)
        self.premium = PremiumStatus(store)
        self.quota = QuotaTracker(store, limits=limits or QuotaLimits.from_env(), today=today)
        self.ledger = SavedItemsLedger(store, self.quota, lambda: self.tier, notifications=self.notifications)
        self.favorites = FavoritesLedger(store, notifications=self.notifications)
        self.planner = TripPlanner(store, notifications=self.notifications)
        self.catalog = catalog or TaleCatalog.demo()
        self.companion = companion or TravelCompanion()
        self._premium_override = self.premium.is_premium()
        self.auth.subscribe(self._on_identity_change)

    # Identity ----------------------------------------------------------
    def _on_identity_change(self, identity: Optional[UserIdentity]) -> None:
        self.refresh_tier()
        if identity is not None:
            self.ledger.load(identity.id)

    def start(self) -> Optional[UserIdentity]:
        """Bootstrap auth; returns ``None`` if the guest could not be stored."""

        if self.auth.is_ready:
            return self.auth.identity
        try:
            return self.auth.bootstrap()
        except StorageError as exc:
            _LOGGER.warning("Unable to bootstrap local user: %s", exc)
            self.notifications.error("Not ready", "Could not start your session. Please refresh the page.")
            return None

    def _auth_call(self, action: Callable[[], Optional[UserIdentity]]) -> Optional[UserIdentity]:
        try:
            return action()
        except StorageError as exc:
            _LOGGER.warning("Auth change could not be persisted: %s", exc)
            self.notifications.error("Authentication failed", "Could not update your account. Please try again.")
            return self.auth.identity

    def sign_up(self, email: str, password: str) -> Optional[UserIdentity]:
        return self._auth_call(lambda: self.auth.sign_up(email, password))

    def sign_in(self, email: str, password: str) -> Optional[UserIdentity]:
        return self._auth_call(lambda: self.auth.sign_in(email, password))

    def continue_as_guest(self) -> Optional[UserIdentity]:
        return self._auth_call(self.auth.sign_in_anonymously)

    def sign_out(self) -> None:
        self._auth_call(lambda: self.auth.sign_out())

    @property
    def identity(self) -> Optional[UserIdentity]:
        return self.auth.identity

    @property
    def is_ready(self) -> bool:
        return self.auth.is_ready and self.auth.identity is not None

    # Tier --------------------------------------------------------------
    def refresh_tier(self) -> None:
        self._premium_override = self.premium.is_premium()

    @property
    def tier(self) -> Optional[Tier]:
        return resolve_tier(self.auth.identity, self._premium_override)

    def upgrade(self, plan: str = Tier.PREMIUM.value) -> bool:
        try:
            self.premium.upgrade(plan)
        except StorageError as exc:
            _LOGGER.warning("Upgrade failed: %s", exc)
            self.notifications.error("Upgrade failed", "Upgrade failed! Please try again.")
            return False
        self.refresh_tier()
        self.notifications.success("Welcome to Premium", "Unlimited saves and AI features are unlocked.")
        return True

    def trial_info(self) -> TrialInfo:
        return self.quota.trial_info()

    def upgrade_prompt(self, trigger: UpgradeTrigger = UpgradeTrigger.DEFAULT) -> UpgradePrompt:
        copy = dict(_PROMPT_COPY[UpgradeTrigger(trigger)])
        info = self.trial_info()
        copy["subtitle"] = copy["subtitle"].format(used=info.used_saves, maximum=info.max_saves)
        return UpgradePrompt(trigger=trigger, **copy)

    # Saved tales -------------------------------------------------------
    def toggle_save(self, tale_id: str) -> ToggleResult:
        return self.ledger.toggle_save(self.auth.user_id, tale_id)

    def saved_ids(self) -> FrozenSet[str]:
        user_id = self.auth.user_id
        return self.ledger.saved_ids(user_id) if user_id else frozenset()

    def is_saved(self, tale_id: str) -> bool:
        return self.ledger.is_saved(self.auth.user_id, tale_id)

    def saved_tales(self, tale_type: Optional[TaleType | str] = None) -> List[Tale]:
        return self.catalog.by_ids(self.saved_ids(), tale_type=tale_type)

    def clear_saved(self) -> bool:
        user_id = self.auth.user_id
        if not user_id:
            return False
        return self.ledger.clear(user_id)

    # Favorites ---------------------------------------------------------
    def toggle_favorite(self, tale_id: str) -> FavoriteResult:
        tale = self.catalog.get(tale_id)
        if tale is None:
            _LOGGER.warning("Cannot favorite unknown tale %s", tale_id)
            notification = self.notifications.error("Favorites", "Failed to update favorites.")
            return FavoriteResult(tale_id=tale_id, error=TaleaError(f"unknown tale {tale_id}"), notification=notification)
        return self.favorites.toggle_favorite(self.auth.identity, tale)

    def is_favorite(self, tale_id: str) -> bool:
        return self.favorites.is_favorite(self.auth.user_id, tale_id)

    def favorite_tales(self) -> List[Tale]:
        tales = []
        for entry in self.favorites.entries(self.auth.user_id):
            tale = self.catalog.get(entry.id)
            if tale is not None:
                tales.append(tale)
        return tales

    # Trips -------------------------------------------------------------
    def trips(self) -> List[Trip]:
        return self.planner.trips(self.auth.user_id)

    def current_trip(self) -> Optional[Trip]:
        return self.planner.current_trip(self.auth.user_id)

    def create_trip(self, name: str, destination: str = "") -> Optional[Trip]:
        return self.planner.create_trip(self.auth.identity, name, destination)

    def select_trip(self, trip_id: str) -> bool:
        return self.planner.select_trip(self.auth.user_id, trip_id)

    def add_to_trip(self, tale_id: str, trip_id: Optional[str] = None) -> bool:
        """Add ``tale_id`` to ``trip_id``, or to the current trip when omitted."""

        if trip_id is None:
            current = self.current_trip()
            if current is None:
                self.notifications.info("No trip selected", "Create or pick a trip first.")
                return False
            trip_id = current.id
        return self.planner.add_to_trip(self.auth.user_id, trip_id, tale_id)

    def remove_from_trip(self, trip_id: str, tale_id: str) -> bool:
        return self.planner.remove_from_trip(self.auth.user_id, trip_id, tale_id)

    def delete_trip(self, trip_id: str) -> bool:
        return self.planner.delete_trip(self.auth.user_id, trip_id)

    def trip_tales(self, trip: Trip) -> List[Tale]:
        return [tale for tale in (self.catalog.get(tale_id) for tale_id in trip.tale_ids) if tale is not None]

    # AI companion ------------------------------------------------------
    def can_use_ai(self) -> bool:
        tier = self.tier
        return tier is not None and self.quota.can_use_ai(tier)

    def ask_companion(self, question: str) -> CompanionReply:
        """Ask the companion, counting usage only when an answer arrives."""

        tier = self.tier
        if tier is None:
            notification = self.notifications.error("Not ready", "App not ready yet. Please try again.")
            return CompanionReply(error=NotReadyError("identity not ready"), notification=notification)
        if not question or not question.strip():
            exc = InvalidQuestionError("Ask the companion a question first.")
            notification = self.notifications.warning("Nothing to ask", str(exc))
            return CompanionReply(error=exc, notification=notification)
        if not self.quota.can_use_ai(tier):
            _LOGGER.info("AI usage blocked (tier=%s, used=%s)", tier.value, self.quota.ai_usage_today)
            notification = self.notifications.info("AI limit reached", "Upgrade to keep chatting with your companion.")
            return CompanionReply(notification=notification, upgrade_trigger=UpgradeTrigger.AI_LIMIT)

        try:
            answer = self.companion.ask(question, saved=self.saved_tales())
        except CompanionError as exc:
            _LOGGER.warning("Companion request failed: %s", exc)
            notification = self.notifications.error("Companion unavailable", str(exc))
            return CompanionReply(error=exc, notification=notification)

        try:
            self.quota.record_ai_usage()
        except StorageError as exc:
            _LOGGER.warning("AI usage could not be recorded: %s", exc)
        return CompanionReply(answer=answer)


__all__ = ["CompanionReply", "TaleaSession"]
