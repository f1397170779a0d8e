"""Environment-driven configuration for Talea."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_LOGGER = logging.getLogger(__name__)

DEFAULT_TRIAL_SAVES = 3
DEFAULT_AI_DAILY_FREEMIUM = 5
DEFAULT_AI_DAILY_ANONYMOUS = 3


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        _LOGGER.warning("Ignoring invalid integer for %s: %r (using %s)", name, raw, default)
        return default
    return max(0, value)


@dataclass(frozen=True)
class QuotaLimits:
    """Tier allowances used by the quota tracker."""

    trial_saves: int = DEFAULT_TRIAL_SAVES
    ai_daily_freemium: int = DEFAULT_AI_DAILY_FREEMIUM
    ai_daily_anonymous: int = DEFAULT_AI_DAILY_ANONYMOUS

    @classmethod
    def from_env(cls) -> "QuotaLimits":
        """Return limits read from ``TALEA_*`` environment variables."""

        return cls(
            trial_saves=_int_from_env("TALEA_TRIAL_SAVES", DEFAULT_TRIAL_SAVES),
            ai_daily_freemium=_int_from_env("TALEA_AI_DAILY_FREEMIUM", DEFAULT_AI_DAILY_FREEMIUM),
            ai_daily_anonymous=_int_from_env("TALEA_AI_DAILY_ANONYMOUS", DEFAULT_AI_DAILY_ANONYMOUS),
        )


@dataclass(frozen=True)
class StorageSettings:
    store_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "StorageSettings":
        raw = os.getenv("TALEA_STORE_PATH")
        return cls(store_path=Path(raw).expanduser() if raw and raw.strip() else None)


def log_level() -> str:
    return (os.getenv("TALEA_LOG_LEVEL") or "INFO").upper()


__all__ = [
    "DEFAULT_AI_DAILY_ANONYMOUS",
    "DEFAULT_AI_DAILY_FREEMIUM",
    "DEFAULT_TRIAL_SAVES",
    "QuotaLimits",
    "StorageSettings",
    "log_level",
]
