"""
Tests for seed catalog lookups.
"""

from src.discovery.models import StoreRecord
from src.discovery.seed_catalog import SeedCatalog, get_default_catalog


class TestKnownStores:
    """Test exact-key lookups on the curated tables."""

    def test_backyard_has_five(self, default_catalog):
        stores = default_catalog.get_known("backyard")
        assert len(stores) == 5
        assert stores[0].domain == "bbqguys.com"
        assert stores[0].url == "https://bbqguys.com"

    def test_unknown_key(self, default_catalog):
        assert default_catalog.get_known("underwater basket weaving") == []

    def test_every_key_seeded(self, default_catalog):
        for key in default_catalog.keys():
            assert default_catalog.has(key)

    def test_default_key(self, default_catalog):
        assert default_catalog.default_key == "backyard"


class TestCleaning:
    """Test deduplication and exclusion."""

    def test_dedupe_and_exclude(self):
        catalog = SeedCatalog(stores={
            "backyard": [
                ("A", "a.com"),
                ("A again", "www.a.com"),
                ("Amazon", "amazon.com"),
                {"name": "B", "domain": "b.com"},
                StoreRecord.from_domain("shop.walmart.com"),
            ],
        })
        assert [s.domain for s in catalog.get_known("backyard")] == ["a.com", "b.com"]

    def test_global_dedupes_across_keys(self):
        catalog = SeedCatalog(stores={
            "backyard": [("A", "a.com"), ("B", "b.com")],
            "golf": [("B twin", "b.com"), ("C", "c.com")],
        })
        assert [s.domain for s in catalog.get_global()] == ["a.com", "b.com", "c.com"]

    def test_excluded_retailers_never_returned(self, test_catalog):
        domains = [s.domain for s in test_catalog.get_global()]
        assert "amazon.com" not in domains
        assert test_catalog.is_excluded("amazon.com")


class TestWideAndPrimary:
    """Test variation-aware lookups."""

    def test_wide_for_alias(self, default_catalog):
        wide = default_catalog.get_wide("home theatre")
        assert wide == default_catalog.get_known("man cave")

    def test_wide_unions_variations(self):
        catalog = SeedCatalog(stores={
            "backyard": [("A", "a.com")],
            "patio": [("P", "p.com")],
        })
        assert [s.domain for s in catalog.get_wide("backyard")] == ["a.com", "p.com"]

    def test_primary_prefers_canonical(self):
        catalog = SeedCatalog(stores={
            "backyard": [("A", "a.com")],
            "patio": [("P", "p.com")],
        })
        assert [s.domain for s in catalog.get_primary("backyard")] == ["a.com"]

    def test_primary_falls_back_to_variation(self):
        catalog = SeedCatalog(stores={
            "backyard": [],
            "patio": [("P", "p.com")],
        })
        assert [s.domain for s in catalog.get_primary("backyard")] == ["p.com"]

    def test_default_catalog_is_shared(self):
        assert get_default_catalog() is get_default_catalog()
