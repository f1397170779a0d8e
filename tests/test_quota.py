from __future__ import annotations

from datetime import date, timedelta

import pytest

from helpers import FakeToday, FlakyStore
from talea.config import QuotaLimits
from talea.core.errors import StorageError
from talea.core.quota import (
    AI_USAGE_DATE_KEY,
    AI_USAGE_KEY,
    TRIAL_REMAINING_KEY,
    QuotaTracker,
    can_save,
    can_use_ai,
)
from talea.core.storage import InMemoryKeyValueStore, JsonFileStore
from talea.schemas import Tier

TODAY = date(2024, 5, 1)


@pytest.mark.parametrize(
    "tier, remaining, expected",
    [
        (Tier.PREMIUM, 0, True),
        (Tier.FREEMIUM, 0, True),
        (Tier.ANONYMOUS, 0, False),
        (Tier.ANONYMOUS, 1, True),
        (Tier.ANONYMOUS, 3, True),
    ],
)
def test_can_save(tier, remaining, expected):
    assert can_save(tier, remaining) is expected


@pytest.mark.parametrize(
    "tier, usage, expected",
    [
        (Tier.PREMIUM, 1000, True),
        (Tier.FREEMIUM, 4, True),
        (Tier.FREEMIUM, 5, False),
        (Tier.ANONYMOUS, 2, True),
        (Tier.ANONYMOUS, 3, False),
    ],
)
def test_can_use_ai_default_limits(tier, usage, expected):
    assert can_use_ai(tier, usage) is expected


def test_can_use_ai_honours_configured_limits():
    limits = QuotaLimits(trial_saves=3, ai_daily_freemium=10, ai_daily_anonymous=0)
    assert can_use_ai(Tier.FREEMIUM, 9, limits) is True
    assert can_use_ai(Tier.ANONYMOUS, 0, limits) is False


def test_fresh_store_is_initialised():
    store = InMemoryKeyValueStore()
    tracker = QuotaTracker(store, today=FakeToday(TODAY))

    state = tracker.state
    assert state.remaining_saves == 3
    assert state.trial_expired is False
    assert state.ai_usage_today == 0
    assert state.last_usage_date == TODAY
    assert store.get(TRIAL_REMAINING_KEY) == "3"
    assert store.get(AI_USAGE_KEY) == "0"
    assert store.get(AI_USAGE_DATE_KEY) == "2024-05-01"


def test_decrement_floors_at_zero_and_expires_trial():
    store = InMemoryKeyValueStore()
    tracker = QuotaTracker(store, today=FakeToday(TODAY))

    assert [tracker.decrement_save() for _ in range(5)] == [2, 1, 0, 0, 0]
    assert tracker.remaining_saves == 0
    assert tracker.trial_expired is True
    assert store.get(TRIAL_REMAINING_KEY) == "0"


def test_record_ai_usage_resets_to_one_on_new_day():
    today = FakeToday(TODAY)
    store = InMemoryKeyValueStore()
    tracker = QuotaTracker(store, today=today)
    tracker.record_ai_usage()
    tracker.record_ai_usage()
    assert tracker.ai_usage_today == 2

    today.value = TODAY + timedelta(days=1)
    assert tracker.ai_usage_today == 0
    assert tracker.record_ai_usage() == 1

    assert tracker.state.last_usage_date == TODAY + timedelta(days=1)
    assert store.get(AI_USAGE_KEY) == "1"
    assert store.get(AI_USAGE_DATE_KEY) == "2024-05-02"


def test_load_applies_day_rollover(caplog):
    store = InMemoryKeyValueStore()
    store.set(AI_USAGE_KEY, "4")
    store.set(AI_USAGE_DATE_KEY, "2024-04-30")

    with caplog.at_level("INFO"):
        tracker = QuotaTracker(store, today=FakeToday(TODAY))

    assert tracker.ai_usage_today == 0
    assert store.get(AI_USAGE_KEY) == "0"
    assert "New day detected" in caplog.text


def test_persisted_counters_survive_reload():
    store = InMemoryKeyValueStore()
    first = QuotaTracker(store, today=FakeToday(TODAY))
    first.decrement_save()
    first.record_ai_usage()

    second = QuotaTracker(store, today=FakeToday(TODAY))
    assert second.remaining_saves == 2
    assert second.ai_usage_today == 1


def test_corrupt_counters_fall_back_to_defaults(caplog):
    store = InMemoryKeyValueStore()
    store.set(TRIAL_REMAINING_KEY, "three")
    store.set(AI_USAGE_DATE_KEY, "not-a-date")

    tracker = QuotaTracker(store, today=FakeToday(TODAY))

    assert tracker.remaining_saves == 3
    assert tracker.state.last_usage_date == TODAY
    assert "Corrupt quota counter" in caplog.text


def test_reset_trial_restores_allotment():
    tracker = QuotaTracker(InMemoryKeyValueStore(), limits=QuotaLimits(trial_saves=2), today=FakeToday(TODAY))
    tracker.decrement_save()
    tracker.decrement_save()
    assert tracker.trial_expired is True

    tracker.reset_trial()

    assert tracker.remaining_saves == 2
    assert tracker.trial_expired is False


def test_trial_info_reports_used_saves():
    tracker = QuotaTracker(InMemoryKeyValueStore(), today=FakeToday(TODAY))
    tracker.decrement_save()
    info = tracker.trial_info()
    assert (info.used_saves, info.max_saves) == (1, 3)


def test_failed_write_leaves_state_untouched():
    store = FlakyStore()
    tracker = QuotaTracker(store, today=FakeToday(TODAY))
    store.failing_prefixes.add(TRIAL_REMAINING_KEY)

    with pytest.raises(StorageError):
        tracker.decrement_save()

    assert tracker.remaining_saves == 3
    assert store.get(TRIAL_REMAINING_KEY) == "3"


def test_partial_write_is_rolled_back():
    store = FlakyStore()
    today = FakeToday(TODAY)
    tracker = QuotaTracker(store, today=today)
    tracker.record_ai_usage()
    tracker.record_ai_usage()
    store.failing_prefixes.add(AI_USAGE_DATE_KEY)

    today.value = TODAY + timedelta(days=1)
    with pytest.raises(StorageError):
        tracker.record_ai_usage()

    assert store.get(AI_USAGE_KEY) == "2"
    assert store.get(AI_USAGE_DATE_KEY) == "2024-05-01"
    assert tracker.state.ai_usage_today == 0


def test_trackers_on_one_file_never_grant_more_than_the_trial(tmp_path):
    path = tmp_path / "store.json"
    first = QuotaTracker(JsonFileStore(path), today=FakeToday(TODAY))
    second = QuotaTracker(JsonFileStore(path), today=FakeToday(TODAY))

    assert first.decrement_save() == 2
    assert second.remaining_saves == 2
    assert second.decrement_save() == 1
    assert first.can_save(Tier.ANONYMOUS) is True
    assert first.decrement_save() == 0

    assert second.can_save(Tier.ANONYMOUS) is False
    assert second.trial_expired is True


def test_ai_usage_is_shared_between_trackers_on_one_store():
    store = InMemoryKeyValueStore()
    first = QuotaTracker(store, today=FakeToday(TODAY))
    second = QuotaTracker(store, today=FakeToday(TODAY))

    first.record_ai_usage()
    second.record_ai_usage()
    first.record_ai_usage()

    assert second.ai_usage_today == 3
    assert second.can_use_ai(Tier.ANONYMOUS) is False
