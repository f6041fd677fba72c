"""
Dropshipping Score

Ranks generated store candidates by how strongly their name, domain and
description suggest a multi-brand reseller rather than a manufacturer.
Used only for ordering; verification decides acceptance.
"""

from typing import Dict, List, Optional, Tuple


# ============================================================================
# KEYWORD WEIGHTS
# ============================================================================

# Reseller-style store words: (name, domain, description) points
STORE_KEYWORDS: List[str] = [
    "warehouse", "depot", "outlet", "direct", "wholesale", "supply", "supplies",
    "gear", "store", "shop", "mart", "plaza", "exchange", "collection",
    "source", "superstore", "factory", "express", "plus", "world",
]
STORE_KEYWORD_POINTS: Tuple[int, int, int] = (10, 8, 5)

# Business model words: (description, name) points
BUSINESS_MODEL_KEYWORDS: List[str] = [
    "dropship", "supplier", "import", "wholesale", "distributor",
    "catalog", "selection", "variety", "range", "collection",
]
BUSINESS_MODEL_POINTS: Tuple[int, int] = (15, 10)

# Manufacturer / corporate words: (name, domain) penalties
CORPORATE_KEYWORDS: List[str] = [
    "corp", "corporation", "inc", "llc", "company", "brand",
    "manufacturer", "factory", "mill", "works",
]
CORPORATE_PENALTIES: Tuple[int, int] = (5, 3)

DOMAIN_BONUSES: Dict[str, int] = {
    "hyphen": 5,       # descriptive hyphenated domains
    "long": 3,         # more than 15 characters
    "dot_com": 2,
}


def dropshipping_score(
    name: Optional[str],
    domain: Optional[str],
    description: Optional[str] = None,
) -> int:
    """
    Heuristic dropshipping score for a store candidate.

    Args:
        name: Store display name
        domain: Bare store domain
        description: Optional one-line description

    Returns:
        Non-negative integer score; higher looks more like a reseller
    """
    name = (name or "").lower()
    domain = (domain or "").lower()
    description = (description or "").lower()

    score = 0

    name_pts, domain_pts, desc_pts = STORE_KEYWORD_POINTS
    for keyword in STORE_KEYWORDS:
        if keyword in name:
            score += name_pts
        if keyword in domain:
            score += domain_pts
        if keyword in description:
            score += desc_pts

    desc_pts, name_pts = BUSINESS_MODEL_POINTS
    for keyword in BUSINESS_MODEL_KEYWORDS:
        if keyword in description:
            score += desc_pts
        if keyword in name:
            score += name_pts

    name_pen, domain_pen = CORPORATE_PENALTIES
    for keyword in CORPORATE_KEYWORDS:
        if keyword in name:
            score -= name_pen
        if keyword in domain:
            score -= domain_pen

    if "-" in domain:
        score += DOMAIN_BONUSES["hyphen"]
    if len(domain) > 15:
        score += DOMAIN_BONUSES["long"]
    if domain.endswith(".com"):
        score += DOMAIN_BONUSES["dot_com"]

    return max(0, score)
