from __future__ import annotations

import pytest

from talea.core.catalog import (
    ALL_CATEGORIES,
    ALL_PERSONALITIES,
    ALL_TYPES,
    TaleCatalog,
)
from talea.schemas import Tale, TaleType


def _catalog() -> TaleCatalog:
    return TaleCatalog(
        [
            {
                "id": "t1",
                "type": "video",
                "title": "Kyoto Tea Ceremony",
                "description": "Ancient rituals",
                "location": "Kyoto, Japan",
                "rating": 4.8,
                "price": 50,
                "category": "Cultural Experience",
                "personalityType": "The Cultural Weaver",
            },
            {
                "id": "t2",
                "type": "restaurant",
                "title": "Tapas Crawl",
                "description": "Family-run bars in the old town",
                "location": "Barcelona, Spain",
                "rating": 4.5,
                "price": 65,
                "category": "Food & Dining",
                "personalityType": "The Culinary Explorer",
            },
            {
                "id": "t3",
                "type": "event",
                "title": "Holi Festival",
                "description": "Colours and music in Jaipur",
                "location": "Jaipur, India",
                "rating": 4.7,
                "price": 40,
                "date": "2025-03-14",
                "category": "Cultural Festival",
                "personalityType": "The Cultural Weaver",
            },
        ]
    )


def test_search_is_case_insensitive_substring_over_title_location_description():
    catalog = _catalog()
    assert [tale.id for tale in catalog.explore("KYOTO")] == ["t1"]
    assert [tale.id for tale in catalog.explore("old town")] == ["t2"]
    assert [tale.id for tale in catalog.explore("india")] == ["t3"]
    assert catalog.explore("nowhere") == []


def test_filters_combine_with_search():
    catalog = _catalog()
    weavers = catalog.explore(personality="The Cultural Weaver")
    assert [tale.id for tale in weavers] == ["t1", "t3"]
    assert [tale.id for tale in catalog.explore("holi", personality="The Cultural Weaver")] == ["t3"]
    assert [tale.id for tale in catalog.explore(category="Food & Dining")] == ["t2"]
    assert len(catalog.explore(category=ALL_CATEGORIES, personality=ALL_PERSONALITIES)) == 3


@pytest.mark.parametrize(
    "order, expected",
    [
        ("Default", ["t1", "t2", "t3"]),
        ("Rating", ["t1", "t3", "t2"]),
        ("Popularity", ["t1", "t3", "t2"]),
        ("Price: Low to High", ["t3", "t1", "t2"]),
        ("Price: High to Low", ["t2", "t1", "t3"]),
        ("Newest", ["t3", "t1", "t2"]),
    ],
)
def test_sort_orders(order, expected):
    assert [tale.id for tale in _catalog().explore(sort=order)] == expected


def test_unknown_sort_order_is_rejected():
    with pytest.raises(ValueError):
        _catalog().explore(sort="Alphabetical")


def test_by_ids_keeps_catalog_order_and_skips_unknown_ids():
    catalog = _catalog()
    assert [tale.id for tale in catalog.by_ids(["t3", "missing", "t1"])] == ["t1", "t3"]
    assert [tale.id for tale in catalog.by_ids(["t1", "t2"], tale_type="restaurant")] == ["t2"]
    assert len(catalog.by_ids(["t1", "t2"], tale_type=ALL_TYPES)) == 2


def test_filter_options_start_with_sentinels():
    catalog = _catalog()
    assert catalog.categories()[0] == ALL_CATEGORIES
    assert catalog.personality_types() == [
        ALL_PERSONALITIES,
        "The Culinary Explorer",
        "The Cultural Weaver",
    ]


def test_duplicate_ids_are_rejected():
    tale = Tale(id="x", type=TaleType.HOTEL, title="Stay", description="Nice", location="Here")
    with pytest.raises(ValueError):
        TaleCatalog([tale, tale])


def test_demo_catalog_covers_every_tale_type():
    catalog = TaleCatalog.demo()
    assert {tale.type for tale in catalog.tales} == set(TaleType)
    assert "dummy-attraction-1" in catalog
    assert catalog.get("dummy-video-1").featured is True
    assert catalog.featured()
