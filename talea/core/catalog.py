"""Browse, filter and search helpers for the tale catalog."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from talea.core.tale_data import demo_tales
from talea.schemas import Tale, TaleType

ALL_CATEGORIES = "All Categories"
ALL_PERSONALITIES = "All Personalities"
ALL_TYPES = "All Types"

SORT_DEFAULT = "Default"
SORT_POPULARITY = "Popularity"
SORT_NEWEST = "Newest"
SORT_PRICE_ASC = "Price: Low to High"
SORT_PRICE_DESC = "Price: High to Low"
SORT_RATING = "Rating"

SORT_OPTIONS: Sequence[str] = (
    SORT_DEFAULT,
    SORT_POPULARITY,
    SORT_NEWEST,
    SORT_PRICE_ASC,
    SORT_PRICE_DESC,
    SORT_RATING,
)


def _matches(tale: Tale, needle: str) -> bool:
    return any(needle in field.lower() for field in (tale.title, tale.location, tale.description))


def _sort(tales: List[Tale], order: str) -> List[Tale]:
    if order in (SORT_POPULARITY, SORT_RATING):
        return sorted(tales, key=lambda tale: tale.rating or 0, reverse=True)
    if order == SORT_NEWEST:
        return sorted(tales, key=lambda tale: tale.event_date or date.min, reverse=True)
    if order == SORT_PRICE_ASC:
        return sorted(tales, key=lambda tale: tale.price or 0)
    if order == SORT_PRICE_DESC:
        return sorted(tales, key=lambda tale: tale.price or 0, reverse=True)
    if order != SORT_DEFAULT:
        raise ValueError(f"Unknown sort order: {order}")
    return tales


class TaleCatalog:
    """Read-only collection of tales keyed by id, in display order."""

    def __init__(self, tales: Iterable[Tale | Mapping[str, object]]) -> None:
        self._tales: List[Tale] = []
        self._by_id: Dict[str, Tale] = {}
        for item in tales:
            tale = item if isinstance(item, Tale) else Tale.model_validate(item)
            if tale.id in self._by_id:
                raise ValueError(f"Duplicate tale id: {tale.id}")
            self._tales.append(tale)
            self._by_id[tale.id] = tale

    @classmethod
    def demo(cls) -> "TaleCatalog":
        return cls(demo_tales())

    def __len__(self) -> int:
        return len(self._tales)

    def __contains__(self, tale_id: object) -> bool:
        return tale_id in self._by_id

    @property
    def tales(self) -> List[Tale]:
        return list(self._tales)

    def get(self, tale_id: str) -> Optional[Tale]:
        return self._by_id.get(tale_id)

    def by_ids(self, tale_ids: Iterable[str], *, tale_type: Optional[TaleType | str] = None) -> List[Tale]:
        """Return the known tales among ``tale_ids`` in catalog order."""

        wanted = set(tale_ids)
        kind = TaleType(tale_type) if tale_type and tale_type != ALL_TYPES else None
        return [
            tale
            for tale in self._tales
            if tale.id in wanted and (kind is None or tale.type == kind)
        ]

    def featured(self) -> List[Tale]:
        return [tale for tale in self._tales if tale.featured]

    def categories(self) -> List[str]:
        seen = sorted({tale.category for tale in self._tales if tale.category})
        return [ALL_CATEGORIES, *seen]

    def personality_types(self) -> List[str]:
        seen = sorted({tale.personality_type for tale in self._tales if tale.personality_type})
        return [ALL_PERSONALITIES, *seen]

    def explore(
        self,
        query: str = "",
        *,
        category: str = ALL_CATEGORIES,
        personality: str = ALL_PERSONALITIES,
        sort: str = SORT_DEFAULT,
    ) -> List[Tale]:
        """Filter with a case-insensitive substring search and sort the result."""

        results = list(self._tales)
        needle = query.strip().lower()
        if needle:
            results = [tale for tale in results if _matches(tale, needle)]
        if category and category != ALL_CATEGORIES:
            results = [tale for tale in results if tale.category == category]
        if personality and personality != ALL_PERSONALITIES:
            results = [tale for tale in results if tale.personality_type == personality]
        return _sort(results, sort)


__all__ = [
    "ALL_CATEGORIES",
    "ALL_PERSONALITIES",
    "ALL_TYPES",
    "SORT_OPTIONS",
    "TaleCatalog",
]
