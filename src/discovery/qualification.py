"""
Qualification Classifier

Decides whether a store looks like a high-ticket dropshipping business
from its homepage HTML.

Signals:
- High-ticket: a dollar price >= $500, or buy-now-pay-later financing
- Dropshipping: authorized-dealer, ships-from-supplier, made-to-order
  and similar reseller language

Curated ("trusted known") stores need either signal; everything else
needs both.
"""

import logging
import re
from typing import List, Optional, TYPE_CHECKING

from .models import (
    QualificationAssessment,
    QualificationStatus,
    StoreRecord,
)

if TYPE_CHECKING:
    from .store_prober import StoreProber

logger = logging.getLogger(__name__)


# $1,250 / $ 2,499.99 / $799 / $12500
PRICE_RE = re.compile(r"\$\s?([0-9]{1,3}(?:,[0-9]{3})+|[0-9]{3,6})(?:\.[0-9]{2})?")

INSTALLMENT_RE = re.compile(
    r"affirm|klarna|afterpay|shop pay installments|pay over time",
    re.IGNORECASE,
)

DROPSHIP_PHRASES: List[str] = [
    # Dealer / reseller language
    "authorized dealer", "authorized reseller",
    "official dealer", "official reseller",
    "brands we carry", "brands we stock", "our brands",
    "brand partners", "dealer program",
    # Fulfilment
    "ships directly from", "ships from supplier", "ships from manufacturer",
    "direct from supplier",
    "drop ship", "dropship", "drop-ship", "drop shipping", "dropshipping",
    "lead time", "built to order", "made to order",
    "factory direct", "special order",
    # Warranty / catalog breadth
    "brand warranty", "manufacturer warranty", "multiple brands",
    "wholesale", "distributor",
]


# =============================================================================
# SIGNAL EXTRACTION
# =============================================================================

def extract_max_price(html: Optional[str]) -> int:
    """Largest whole-dollar amount on the page, or 0."""
    if not html:
        return 0
    max_price = 0
    for match in PRICE_RE.finditer(html):
        value = int(match.group(1).replace(",", ""))
        if value > max_price:
            max_price = value
    return max_price


def has_installment_offer(html: Optional[str]) -> bool:
    return bool(html) and INSTALLMENT_RE.search(html) is not None


def find_dropship_phrases(html: Optional[str]) -> List[str]:
    if not html:
        return []
    text = html.lower()
    return [phrase for phrase in DROPSHIP_PHRASES if phrase in text]


def content_suggests_dropshipping(html: Optional[str]) -> bool:
    return bool(find_dropship_phrases(html))


def decide_qualification(high_ticket: bool, dropship_hint: bool, trusted_known: bool) -> bool:
    """Trusted stores need either signal; others need both."""
    if trusted_known:
        return high_ticket or dropship_hint
    return high_ticket and dropship_hint


def assess_html(
    html: Optional[str],
    trusted_known: bool = False,
    final_url: Optional[str] = None,
) -> QualificationAssessment:
    """Classify already-fetched homepage HTML."""
    if html is None:
        return QualificationAssessment(
            status=QualificationStatus.NO_CONTENT,
            trusted_known=trusted_known,
        )

    phrases = find_dropship_phrases(html)
    assessment = QualificationAssessment(
        status=QualificationStatus.NOT_QUALIFIED,
        max_price=extract_max_price(html),
        has_installments=has_installment_offer(html),
        dropship_hint=bool(phrases),
        trusted_known=trusted_known,
        final_url=final_url,
        matched_phrases=phrases,
    )
    if decide_qualification(assessment.high_ticket, assessment.dropship_hint, trusted_known):
        assessment.status = QualificationStatus.QUALIFIED
    return assessment


# =============================================================================
# CLASSIFIER
# =============================================================================

class QualificationClassifier:
    """Fetches a store's homepage and classifies it."""

    def __init__(self, fetcher: "StoreProber"):
        self.fetcher = fetcher

    async def assess(
        self,
        store: StoreRecord,
        fast_verify: bool = False,
        trusted_known: bool = False,
    ) -> QualificationAssessment:
        page = await self.fetcher.fetch_html(store, fast_verify=fast_verify)
        assessment = assess_html(page.html, trusted_known=trusted_known, final_url=page.final_url)
        logger.debug(
            f"{store.domain}: {assessment.status.value} "
            f"(max ${assessment.max_price}, installments={assessment.has_installments}, "
            f"dropship={assessment.dropship_hint}, trusted={trusted_known})"
        )
        return assessment

    async def qualifies(
        self,
        store: StoreRecord,
        fast_verify: bool = False,
        trusted_known: bool = False,
    ) -> bool:
        assessment = await self.assess(store, fast_verify=fast_verify, trusted_known=trusted_known)
        return assessment.qualified
