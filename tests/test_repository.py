"""
Tests for curated store persistence (in-memory SQLite).
"""

import pytest

from src.database import (
    configure_engine,
    count_curated,
    get_curated,
    get_or_create_niche_id,
    init_db,
    list_curated,
    list_niche_names,
    replace_curated,
)
from src.discovery.models import StoreRecord


@pytest.fixture(autouse=True)
def memory_db():
    configure_engine("sqlite://")
    init_db()
    yield
    configure_engine("sqlite://")


class TestNiches:
    """Test niche rows."""

    def test_get_or_create_is_idempotent(self):
        first = get_or_create_niche_id("golf")
        assert get_or_create_niche_id("golf") == first
        assert get_or_create_niche_id("sauna") != first

    def test_list_niche_names_sorted(self):
        get_or_create_niche_id("sauna")
        get_or_create_niche_id("golf")
        assert list_niche_names() == ["golf", "sauna"]


class TestCuratedStores:
    """Test curated store replacement and lookup."""

    def test_replace_cleans_and_defaults(self):
        ok = replace_curated("golf", [
            StoreRecord("Golf Haus", "https://golfhaus.com", "golfhaus.com"),
            {"domain": "https://www.PuttShop.com/", "name": ""},
            {"name": "No Domain"},
            {"name": "Golf Haus again", "domain": "golfhaus.com"},
        ])

        assert ok is True
        stores = get_curated("golf")
        assert [s.domain for s in stores] == ["golfhaus.com", "puttshop.com"]
        assert stores[1].name == "puttshop.com"
        assert stores[1].url == "https://puttshop.com"

    def test_replace_overwrites(self):
        replace_curated("golf", [StoreRecord.from_domain("a.com"), StoreRecord.from_domain("b.com")])
        replace_curated("golf", [StoreRecord.from_domain("c.com")])

        assert [s.domain for s in get_curated("golf")] == ["c.com"]
        assert count_curated("golf") == 1

    def test_niches_are_independent(self):
        replace_curated("golf", [StoreRecord.from_domain("a.com")])
        replace_curated("sauna", [StoreRecord.from_domain("a.com"), StoreRecord.from_domain("b.com")])

        assert count_curated("golf") == 1
        assert count_curated("sauna") == 2

    def test_unknown_niche(self):
        assert get_curated("nope") == []
        assert count_curated("nope") == 0

    def test_list_curated_grouped(self):
        replace_curated("sauna", [StoreRecord.from_domain("s.com")])
        replace_curated("golf", [StoreRecord.from_domain("g1.com"), StoreRecord.from_domain("g2.com")])

        grouped = list_curated()

        assert list(grouped) == ["golf", "sauna"]
        assert [s.domain for s in grouped["golf"]] == ["g1.com", "g2.com"]
