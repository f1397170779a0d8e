from __future__ import annotations

from datetime import datetime, timezone

import pytest

from talea.core.storage import InMemoryKeyValueStore
from talea.core.tiers import (
    SELECTED_PLAN_KEY,
    UPGRADE_DATE_KEY,
    USER_TIER_KEY,
    PremiumStatus,
    resolve_tier,
)
from talea.schemas import Tier, UserIdentity


@pytest.mark.parametrize(
    "identity, override, expected",
    [
        (UserIdentity(id="anon-1", is_anonymous=True), False, Tier.ANONYMOUS),
        (UserIdentity(id="anon-1", is_anonymous=True), True, Tier.PREMIUM),
        (UserIdentity(id="user-1", is_anonymous=False), False, Tier.FREEMIUM),
        (UserIdentity(id="user-1", is_anonymous=False), True, Tier.PREMIUM),
        (UserIdentity(id="user-1", is_anonymous=False, is_premium=True), False, Tier.PREMIUM),
    ],
)
def test_resolve_tier_precedence(identity, override, expected):
    assert resolve_tier(identity, override) is expected


def test_resolve_tier_returns_none_before_auth_is_ready():
    assert resolve_tier(None, True) is None
    assert resolve_tier(None, False) is None


def test_identity_accepts_camel_case_payloads():
    identity = UserIdentity.model_validate({"uid": "anon-9", "isAnonymous": True, "email": "guest@local.com"})
    assert identity.id == "anon-9"
    assert identity.is_anonymous is True
    assert identity.is_premium is False


def test_premium_status_requires_upgrade_date():
    store = InMemoryKeyValueStore()
    status = PremiumStatus(store)
    store.set(USER_TIER_KEY, "premium")
    assert status.is_premium() is False

    store.set(UPGRADE_DATE_KEY, "2024-05-01T10:00:00+00:00")
    assert status.is_premium() is True


def test_upgrade_records_tier_date_and_plan():
    store = InMemoryKeyValueStore()
    moment = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    status = PremiumStatus(store, clock=lambda: moment)

    status.upgrade()

    assert store.get(USER_TIER_KEY) == "premium"
    assert store.get(SELECTED_PLAN_KEY) == "premium"
    assert status.upgraded_at() == moment
    assert status.is_premium() is True


def test_malformed_upgrade_date_is_ignored(caplog):
    store = InMemoryKeyValueStore()
    store.set(UPGRADE_DATE_KEY, "yesterday-ish")
    assert PremiumStatus(store).upgraded_at() is None
    assert "malformed upgrade date" in caplog.text
