"""
Tests for domain cleaning and retailer exclusion.
"""

from src.utils.domain_filter import (
    EXCLUDED_RETAILERS,
    clean_domain,
    filter_excluded_domains,
    is_excluded_domain,
)


class TestCleanDomain:
    """Test domain normalization."""

    def test_strips_scheme_www_and_path(self):
        assert clean_domain("HTTPS://www.BBQGuys.com/grills?x=1") == "bbqguys.com"

    def test_strips_port(self):
        assert clean_domain("shop.example.com:8080") == "shop.example.com"

    def test_bare_domain_unchanged(self):
        assert clean_domain("golfhaus.com") == "golfhaus.com"

    def test_empty(self):
        assert clean_domain(None) == ""
        assert clean_domain("") == ""


class TestIsExcludedDomain:
    """Test retailer exclusion."""

    def test_exact(self):
        assert is_excluded_domain("amazon.com")
        assert is_excluded_domain("https://www.walmart.com/")

    def test_subdomain(self):
        assert is_excluded_domain("shop.walmart.com")

    def test_lookalike_not_excluded(self):
        assert not is_excluded_domain("notamazon.com")

    def test_empty(self):
        assert not is_excluded_domain("")

    def test_core_retailers_present(self):
        for retailer in ("amazon.com", "walmart.com", "target.com", "homedepot.com", "wayfair.com"):
            assert retailer in EXCLUDED_RETAILERS


class TestFilterExcludedDomains:
    """Test list filtering across input shapes."""

    def test_mixed_inputs(self):
        class Item:
            def __init__(self, domain):
                self.domain = domain

        kept_obj = Item("golfhaus.com")
        items = [
            "amazon.com",
            "bbqguys.com",
            {"domain": "ebay.com"},
            {"domain": "firepitsdirect.com"},
            Item("target.com"),
            kept_obj,
        ]
        result = filter_excluded_domains(items, source="test")
        assert result == ["bbqguys.com", {"domain": "firepitsdirect.com"}, kept_obj]
