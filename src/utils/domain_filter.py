"""
Domain Filtering Utilities

Shared domain handling used by every competitor candidate source:
- Seed catalog lookups
- Claude-generated candidates
- Curated stores loaded from the database

Large generalist retailers are NEVER valid niche competitors, so they are
dropped when candidates are collected rather than after they are probed.
"""

import re
from typing import FrozenSet, Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# EXCLUDED RETAILERS - Major marketplaces that are never niche competitors
# =============================================================================

# Online Marketplaces
MARKETPLACES = {
    "amazon.com",
    "ebay.com",
    "etsy.com",
    "alibaba.com", "aliexpress.com",
    "wish.com",
    "overstock.com",
}

# Big-Box & Department Stores
BIG_BOX_RETAILERS = {
    "walmart.com",
    "target.com",
    "costco.com",
    "bestbuy.com",
    "macys.com",
    "ikea.com",
}

# Home Improvement & Furniture Chains
HOME_IMPROVEMENT = {
    "homedepot.com",
    "lowes.com",
    "wayfair.com",
}

# Combined set of all excluded retailers
EXCLUDED_RETAILERS: FrozenSet[str] = frozenset(
    MARKETPLACES |
    BIG_BOX_RETAILERS |
    HOME_IMPROVEMENT
)


# =============================================================================
# DOMAIN NORMALIZATION
# =============================================================================

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://")


def clean_domain(value: Optional[str]) -> str:
    """
    Reduce a domain or URL to its bare, lowercase host.

    "HTTPS://www.BBQGuys.com/grills?x=1" -> "bbqguys.com"

    The result is the deduplication key used across the whole pipeline.
    """
    if not value:
        return ""

    domain = value.strip().lower()
    domain = _SCHEME_RE.sub("", domain)

    # Drop path, query, fragment and port
    domain = re.split(r"[/?#]", domain, maxsplit=1)[0]
    domain = domain.split(":", 1)[0]

    if domain.startswith("www."):
        domain = domain[4:]

    return domain.strip(".")


def is_excluded_domain(
    domain: Optional[str],
    excluded: FrozenSet[str] = EXCLUDED_RETAILERS,
) -> bool:
    """
    Check if a domain belongs to an excluded retailer.

    Uses two matching strategies:
    1. Exact match against the excluded set
    2. Subdomain matching (shop.walmart.com -> walmart.com)

    Args:
        domain: Domain name or URL to check
        excluded: Excluded set to check against

    Returns:
        True if the domain must never be returned as a competitor
    """
    key = clean_domain(domain)
    if not key:
        return False

    # Strategy 1: Exact match
    if key in excluded:
        return True

    # Strategy 2: Subdomain of an excluded retailer
    for retailer in excluded:
        if key.endswith("." + retailer):
            return True

    return False


def filter_excluded_domains(
    domains: Iterable,
    source: str = "unknown",
    excluded: FrozenSet[str] = EXCLUDED_RETAILERS,
) -> List:
    """
    Filter a list of candidates, removing excluded retailers.

    Args:
        domains: Domain strings, dicts with a 'domain' key, or objects
                 with a 'domain' attribute
        source: Description of where these domains came from (for logging)
        excluded: Excluded set to check against

    Returns:
        Filtered list with excluded retailers removed
    """
    filtered = []
    excluded_count = 0

    for item in domains:
        if isinstance(item, str):
            domain = item
        elif isinstance(item, dict):
            domain = item.get("domain", "")
        else:
            domain = getattr(item, "domain", "")

        if is_excluded_domain(domain, excluded):
            excluded_count += 1
            logger.debug(f"Excluded retailer domain from {source}: {domain}")
        else:
            filtered.append(item)

    if excluded_count > 0:
        logger.info(f"Filtered {excluded_count} retailer domains from {source}")

    return filtered
