"""
Curated Competitor Audit

Re-verifies the stored competitors for a niche and persists the
survivors:

1. Stored curated + catalog wide stores, strict verification (up to 12)
2. Orchestrator top-up when fewer than 5 survive
3. Last-chance serial fill from wide + global stores, trusted known
4. Save up to 10 via replace_curated
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from src.utils.domain_filter import filter_excluded_domains
from .deadline import Deadline
from .models import StoreRecord
from .orchestrator import CompetitorFinder

logger = logging.getLogger(__name__)


AUDIT_BATCH_SIZE = 10
AUDIT_MAX_VERIFIED = 12
AUDIT_KEEP = 10
MIN_VERIFIED = 5
MIN_AUDIT_TIME_LIMIT = 30.0


@dataclass
class AuditResult:
    """Outcome of auditing one niche."""
    niche: str
    audited: int = 0
    saved: int = 0
    competitors: List[StoreRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "niche": self.niche,
            "audited": self.audited,
            "saved": self.saved,
            "competitors": [c.to_dict() for c in self.competitors],
        }


def _dedupe(stores: List[StoreRecord]) -> List[StoreRecord]:
    unique: Dict[str, StoreRecord] = {}
    for store in stores:
        if store.key and store.key not in unique:
            unique[store.key] = store
    return list(unique.values())


async def audit_niche(
    niche: str,
    finder: CompetitorFinder,
    time_limit: float = 60.0,
    keep: int = AUDIT_KEEP,
    load_curated: Optional[Callable[[str], List[StoreRecord]]] = None,
    save_curated: Optional[Callable[[str, List[StoreRecord]], bool]] = None,
) -> AuditResult:
    """
    Audit and persist working competitor stores for one niche.

    Args:
        niche: Niche name as stored in the database
        finder: Orchestrator supplying catalog, prober and classifier
        time_limit: Seconds for the whole audit (at least 30)
        keep: Maximum stores to persist
        load_curated: Reads stored stores (defaults to repository.get_curated)
        save_curated: Replaces stored stores (defaults to repository.replace_curated)

    Returns:
        AuditResult with the stores that were saved
    """
    if load_curated is None or save_curated is None:
        from src.database import repository
        load_curated = load_curated or repository.get_curated
        save_curated = save_curated or repository.replace_curated

    deadline = Deadline.after(max(MIN_AUDIT_TIME_LIMIT, time_limit), finder.clock)
    catalog = finder.catalog

    candidates = _dedupe(
        filter_excluded_domains(load_curated(niche), source=f"curated {niche}", excluded=catalog.excluded)
        + catalog.get_wide(niche)
    )
    verified: List[StoreRecord] = []

    # Step 1: strict verification of stored and catalog stores
    for start in range(0, len(candidates), AUDIT_BATCH_SIZE):
        if deadline.is_expired() or len(verified) >= AUDIT_MAX_VERIFIED:
            break
        batch = candidates[start:start + AUDIT_BATCH_SIZE]
        checks = await asyncio.gather(*(_passes_strict(finder, store) for store in batch))
        for store, ok in zip(batch, checks):
            if ok and len(verified) < AUDIT_MAX_VERIFIED:
                verified.append(store)

    seen = {store.key for store in verified}

    # Step 2: orchestrator top-up
    if len(verified) < MIN_VERIFIED and not deadline.is_expired():
        strict = await finder.get_verified_competitors(niche, deadline_at=deadline.at)
        for store in strict:
            if len(verified) >= AUDIT_MAX_VERIFIED:
                break
            if store.key and store.key not in seen:
                verified.append(store)
                seen.add(store.key)

    # Step 3: last-chance trusted fill
    if len(verified) < MIN_VERIFIED and not deadline.is_expired():
        for store in _dedupe(catalog.get_wide(niche) + catalog.get_global()):
            if len(verified) >= MIN_VERIFIED or deadline.is_expired():
                break
            if store.key in seen:
                continue
            if await _passes_trusted(finder, store, niche):
                verified.append(store)
                seen.add(store.key)

    to_save = verified[:keep]
    if to_save:
        save_curated(niche, to_save)

    logger.info(f"Audited '{niche}': {len(verified)} verified, {len(to_save)} saved")
    return AuditResult(
        niche=niche,
        audited=len(verified),
        saved=len(to_save),
        competitors=to_save,
    )


async def _passes_strict(finder: CompetitorFinder, store: StoreRecord) -> bool:
    try:
        if not await finder.prober.exists(store, fast_verify=False):
            return False
        return await finder.classifier.qualifies(store, fast_verify=False)
    except Exception as e:
        logger.debug(f"Audit check failed for {store.domain}: {e}")
        return False


async def _passes_trusted(finder: CompetitorFinder, store: StoreRecord, niche: str) -> bool:
    try:
        if not await finder.relevance.is_relevant(store, niche, check_content=False):
            return False
        if not await finder.prober.exists(store, fast_verify=True):
            return False
        return await finder.classifier.qualifies(store, fast_verify=True, trusted_known=True)
    except Exception as e:
        logger.debug(f"Last-chance check failed for {store.domain}: {e}")
        return False


async def audit_niches(
    niches: List[str],
    finder: CompetitorFinder,
    time_limit: float = 60.0,
    keep: int = AUDIT_KEEP,
    load_curated: Optional[Callable[[str], List[StoreRecord]]] = None,
    save_curated: Optional[Callable[[str, List[StoreRecord]], bool]] = None,
) -> List[AuditResult]:
    """Audit niches one at a time; a failing niche is logged and skipped."""
    results = []
    for niche in niches:
        try:
            results.append(await audit_niche(
                niche,
                finder,
                time_limit=time_limit,
                keep=keep,
                load_curated=load_curated,
                save_curated=save_curated,
            ))
        except Exception as e:
            logger.error(f"Audit failed for '{niche}': {e}")
            results.append(AuditResult(niche=niche))
    return results
