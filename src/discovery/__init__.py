"""
Competitor Discovery Module

Finds live, high-ticket dropshipping stores for a free-text niche.

Pipeline:
1. **Niche Normalizer** - maps free text onto a catalog key
2. **Seed Catalog** - curated stores per niche, wide and global lists
3. **Candidate Generator** - Claude-suggested stores (optional)
4. **Store Prober** - liveness over four URL variants
5. **Qualification** - high-ticket price / dropshipping signals
6. **Relevance** - niche keyword check on name, domain, description
7. **Orchestrator** - staged, deadline-bounded verification

Example Usage:
    from src.discovery import CompetitorFinder, get_verified_competitors

    stores = await get_verified_competitors("home theater", fast=True)

    async with CompetitorFinder() as finder:
        stores = await finder.get_verified_competitors(
            "pizza ovens", deadline_at=time.time() + 45,
        )
"""

# Models
from .models import (
    HIGH_TICKET_MIN_PRICE,
    FetchResult,
    LivenessCheck,
    LivenessStatus,
    MatchLayer,
    NicheResolution,
    QualificationAssessment,
    QualificationStatus,
    StoreRecord,
    VerificationResult,
)

# Niche resolution
from .niche_normalizer import NicheNormalizer, toggle_plural
from .seed_catalog import SeedCatalog, get_default_catalog

# Probing and classification
from .deadline import Deadline
from .store_prober import (
    FAST_PROFILE,
    THOROUGH_PROFILE,
    ProbeProfile,
    StoreProber,
    build_url_variants,
)
from .qualification import QualificationClassifier, assess_html, decide_qualification
from .relevance import RelevanceFilter

# Candidate generation
from .candidate_generator import (
    CandidateGenerator,
    ClaudeCandidateGenerator,
    NullCandidateGenerator,
    create_candidate_generator,
)

# Orchestration
from .orchestrator import CompetitorFinder, get_verified_competitors
from .audit import AuditResult, audit_niche, audit_niches

__all__ = [
    # Models
    "HIGH_TICKET_MIN_PRICE",
    "FetchResult",
    "LivenessCheck",
    "LivenessStatus",
    "MatchLayer",
    "NicheResolution",
    "QualificationAssessment",
    "QualificationStatus",
    "StoreRecord",
    "VerificationResult",
    # Niche resolution
    "NicheNormalizer",
    "toggle_plural",
    "SeedCatalog",
    "get_default_catalog",
    # Probing and classification
    "Deadline",
    "FAST_PROFILE",
    "THOROUGH_PROFILE",
    "ProbeProfile",
    "StoreProber",
    "build_url_variants",
    "QualificationClassifier",
    "assess_html",
    "decide_qualification",
    "RelevanceFilter",
    # Candidate generation
    "CandidateGenerator",
    "ClaudeCandidateGenerator",
    "NullCandidateGenerator",
    "create_candidate_generator",
    # Orchestration
    "CompetitorFinder",
    "get_verified_competitors",
    "AuditResult",
    "audit_niche",
    "audit_niches",
]
