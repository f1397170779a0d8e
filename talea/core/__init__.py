"""Core services for Talea."""

from .catalog import TaleCatalog
from .favorites import FavoriteResult, FavoritesLedger
from .ledger import SavedItemsLedger, ToggleResult
from .quota import QuotaTracker, can_save, can_use_ai
from .session import TaleaSession
from .storage import InMemoryKeyValueStore, JsonFileStore, KeyValueStore, store_lock
from .tiers import PremiumStatus, resolve_tier
from .trips import TripPlanner

__all__ = [
    "FavoriteResult",
    "FavoritesLedger",
    "InMemoryKeyValueStore",
    "JsonFileStore",
    "KeyValueStore",
    "PremiumStatus",
    "QuotaTracker",
    "SavedItemsLedger",
    "TaleCatalog",
    "TaleaSession",
    "ToggleResult",
    "TripPlanner",
    "can_save",
    "can_use_ai",
    "resolve_tier",
    "store_lock",
]
