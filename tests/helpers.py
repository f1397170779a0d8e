"""Shared test doubles."""

from __future__ import annotations

from datetime import date
from typing import Optional, Set

from talea.core.errors import StorageError
from talea.core.storage import InMemoryKeyValueStore


class FakeToday:
    def __init__(self, value: date) -> None:
        self.value = value

    def __call__(self) -> date:
        return self.value


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store whose writes fail for selected key prefixes."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_prefixes: Set[str] = set()
        self.writes: list[str] = []

    def _check(self, key: str) -> None:
        if any(key.startswith(prefix) for prefix in self.failing_prefixes):
            raise StorageError(f"write to {key} failed")

    def set(self, key: str, value: str) -> None:
        self._check(key)
        self.writes.append(key)
        super().set(key, value)

    def remove(self, key: str) -> None:
        self._check(key)
        super().remove(key)


class TierBox:
    """Mutable tier provider for ledger tests."""

    def __init__(self, tier: Optional[object]) -> None:
        self.tier = tier

    def __call__(self):
        return self.tier
