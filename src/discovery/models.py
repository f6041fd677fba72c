"""
Competitor Discovery Data Models

Defines the types passed between the discovery components:
- Store records (the unit every stage consumes and returns)
- Tagged liveness and qualification outcomes
- Niche resolution results
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from src.utils.domain_filter import clean_domain


# Smallest dollar price that counts as high-ticket
HIGH_TICKET_MIN_PRICE = 500


# =============================================================================
# ENUMS
# =============================================================================


class LivenessStatus(str, Enum):
    """Outcome of probing a store's URL variants."""
    LIVE = "live"  # A variant answered 2xx/3xx
    DEAD = "dead"  # Every variant answered with an error status
    UNKNOWN = "unknown"  # No variant answered at all (DNS, refused, timeout)


class QualificationStatus(str, Enum):
    """Outcome of the high-ticket dropshipping classifier."""
    QUALIFIED = "qualified"
    NOT_QUALIFIED = "not_qualified"
    NO_CONTENT = "no_content"  # Homepage HTML could not be fetched


class MatchLayer(str, Enum):
    """Which normalizer layer produced a canonical niche key."""
    EXACT = "exact"
    UMBRELLA_SYNONYM = "umbrella_synonym"
    POPULAR_SYNONYM = "popular_synonym"
    CONTAINMENT = "containment"
    KEYWORD_CLUSTER = "keyword_cluster"
    FUZZY = "fuzzy"
    DEFAULT = "default"


# =============================================================================
# STORE RECORDS
# =============================================================================


@dataclass(frozen=True)
class StoreRecord:
    """A competitor store candidate. The bare domain is its identity."""
    name: str
    url: str
    domain: str
    description: Optional[str] = None

    @property
    def key(self) -> str:
        """Deduplication key: lowercase domain without www."""
        return clean_domain(self.domain)

    @classmethod
    def from_domain(cls, domain: str, name: Optional[str] = None) -> "StoreRecord":
        """Build a record for a bare domain with an https URL."""
        bare = clean_domain(domain)
        return cls(name=name or bare, url=f"https://{bare}", domain=bare)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["StoreRecord"]:
        """
        Build a record from a loosely-shaped dict.

        The domain is cleaned, the URL defaults to https://<domain> and
        gains a scheme when it lacks one, the name defaults to the domain.
        Returns None when no domain can be derived.
        """
        if not isinstance(data, dict):
            return None

        domain = clean_domain(data.get("domain") or data.get("url"))
        if not domain:
            return None

        url = str(data.get("url") or "").strip()
        if not url:
            url = f"https://{domain}"
        elif not url.lower().startswith(("http://", "https://")):
            url = f"https://{url}"

        name = str(data.get("name") or "").strip() or domain
        description = data.get("description") or None

        return cls(name=name, url=url, domain=domain, description=description)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "name": self.name,
            "url": self.url,
            "domain": self.domain,
        }
        if self.description:
            data["description"] = self.description
        return data


# =============================================================================
# PROBE RESULTS
# =============================================================================


@dataclass
class LivenessCheck:
    """Result of probing a store for liveness."""
    status: LivenessStatus
    url: Optional[str] = None  # Variant that answered
    method: Optional[str] = None  # HEAD or GET
    status_code: Optional[int] = None
    attempts: int = 0
    error: Optional[str] = None  # Last transport error seen

    @property
    def is_live(self) -> bool:
        return self.status == LivenessStatus.LIVE


@dataclass
class FetchResult:
    """Homepage HTML and the URL variant that produced it."""
    html: Optional[str] = None
    final_url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.html is not None


@dataclass
class QualificationAssessment:
    """Signals extracted from a store's homepage and the final decision."""
    status: QualificationStatus
    max_price: int = 0
    has_installments: bool = False
    dropship_hint: bool = False
    trusted_known: bool = False
    final_url: Optional[str] = None
    matched_phrases: List[str] = field(default_factory=list)

    @property
    def high_ticket(self) -> bool:
        return self.max_price >= HIGH_TICKET_MIN_PRICE or self.has_installments

    @property
    def qualified(self) -> bool:
        return self.status == QualificationStatus.QUALIFIED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "max_price": self.max_price,
            "has_installments": self.has_installments,
            "dropship_hint": self.dropship_hint,
            "high_ticket": self.high_ticket,
            "trusted_known": self.trusted_known,
            "final_url": self.final_url,
            "matched_phrases": self.matched_phrases,
        }


@dataclass
class VerificationResult:
    """Per-candidate outcome of one orchestrator verification pass."""
    store: StoreRecord
    live: bool = False
    qualifies: bool = False
    relevant: bool = False
    error: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.live and self.qualifies and self.relevant


# =============================================================================
# NICHE RESOLUTION
# =============================================================================


@dataclass
class NicheResolution:
    """How a free-text niche was mapped onto a catalog key."""
    raw: str
    normalized: str
    canonical: str
    matched_by: MatchLayer
    matched_term: Optional[str] = None  # Synonym/candidate that triggered the match
    score: Optional[float] = None  # Fuzzy score when matched_by is FUZZY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "raw": self.raw,
            "normalized": self.normalized,
            "canonical": self.canonical,
            "matched_by": self.matched_by.value,
            "matched_term": self.matched_term,
            "score": self.score,
        }
