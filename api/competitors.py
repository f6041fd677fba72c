"""
API Endpoints for Verified Competitors

Handles:
1. Verified competitor lookup for a niche (fast or thorough)
2. Niche resolution preview (normalized form, catalog key, variations)
"""

import logging
from typing import AsyncGenerator, List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.discovery import CompetitorFinder, SeedCatalog, get_default_catalog
from src.utils.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/competitors",
    tags=["competitors"],
)


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class VerifiedCompetitorsRequest(BaseModel):
    """Request for verified competitor stores."""
    niche: str = Field(..., description="Free-text niche, e.g. 'home theater'")
    fast: bool = Field(
        default=False,
        description="Return catalog/generated stores without verification",
    )
    time_limit_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        le=300,
        description="Seconds allowed for thorough verification",
    )
    max_attempts: Optional[int] = Field(
        default=None,
        ge=0,
        le=20,
        description="Candidate generation retry rounds",
    )


class StoreResponse(BaseModel):
    """A competitor store."""
    name: str
    url: str
    domain: str
    description: Optional[str] = None


class VerifiedCompetitorsResponse(BaseModel):
    """Verified competitor stores for a niche."""
    niche: str
    canonical: str
    competitors: List[StoreResponse]
    total: int


class NicheResolutionResponse(BaseModel):
    """How a free-text niche maps onto the catalog."""
    niche: str
    normalized: str
    canonical: str
    matched_by: str
    variations: List[str]


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_catalog() -> SeedCatalog:
    """Seed catalog dependency."""
    return get_default_catalog()


async def get_finder() -> AsyncGenerator[CompetitorFinder, None]:
    """Competitor finder dependency; closes its HTTP clients afterwards."""
    finder = CompetitorFinder()
    try:
        yield finder
    finally:
        await finder.close()


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/verified", response_model=VerifiedCompetitorsResponse)
async def verified_competitors(
    request: VerifiedCompetitorsRequest,
    finder: CompetitorFinder = Depends(get_finder),
):
    """
    Find up to five verified competitor stores for a niche.

    Returns 404 with a suggestion when nothing could be verified.
    """
    settings = get_settings()
    time_limit = request.time_limit_seconds or settings.VERIFY_TIME_LIMIT
    max_attempts = (
        request.max_attempts if request.max_attempts is not None
        else settings.DEFAULT_MAX_ATTEMPTS
    )

    canonical = finder.normalizer.map_to_canonical(request.niche)
    logger.info(f"Verified competitors requested for '{request.niche}' ({canonical})")

    stores = await finder.get_verified_competitors(
        request.niche,
        fast=request.fast,
        deadline_at=finder.clock() + time_limit,
        max_attempts=max_attempts,
    )

    if not stores:
        return JSONResponse(
            status_code=404,
            content={
                "error": f"No verified competitors found for '{request.niche}'",
                "suggestion": "Try a different niche or a broader term",
            },
        )

    return VerifiedCompetitorsResponse(
        niche=request.niche,
        canonical=canonical,
        competitors=[StoreResponse(**store.to_dict()) for store in stores],
        total=len(stores),
    )


@router.get("/resolve", response_model=NicheResolutionResponse)
async def resolve_niche(
    niche: str = Query(..., description="Free-text niche"),
    catalog: SeedCatalog = Depends(get_catalog),
):
    """Show how a niche is normalized and which catalog key it maps to."""
    normalizer = catalog.normalizer
    resolution = normalizer.resolve(niche)

    return NicheResolutionResponse(
        niche=niche,
        normalized=resolution.normalized,
        canonical=resolution.canonical,
        matched_by=resolution.matched_by.value,
        variations=normalizer.expand_variations(resolution.normalized),
    )
