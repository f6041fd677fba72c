"""
Verified-Competitor Orchestrator

Assembles up to five live, high-ticket, niche-relevant competitor stores.

Fast mode returns catalog stores (topped up with generated candidates)
without any verification.

Thorough mode runs strictly ordered waves, each verifying candidates in
concurrent batches and stopping once five stores are verified or the
deadline passes:

    a. wide seed      - catalog stores for the niche and its variations
    b. primary        - the canonical key's own stores
    c. generated      - Claude candidates for the raw niche
    d. variations     - Claude candidates per variation, 4 calls at a time
    e. retries        - repeated generation rounds, up to max_attempts
    f. global         - every catalog store, fast-verify, trusted known

A candidate is accepted only if it is live, qualifies and is relevant.
Any exception while verifying a candidate rejects that candidate only.
Generation calls are cancelled when the deadline passes.
"""

import asyncio
import logging
import time
from functools import partial
from typing import Callable, Iterable, List, Optional, Set

from src.utils.config import get_settings
from .candidate_generator import CandidateGenerator, create_candidate_generator
from .deadline import Deadline
from .models import StoreRecord, VerificationResult
from .qualification import QualificationClassifier
from .relevance import RelevanceFilter
from .seed_catalog import SeedCatalog, get_default_catalog
from .store_prober import StoreProber

logger = logging.getLogger(__name__)


DEFAULT_MAX_ATTEMPTS = 8

BATCH_SIZE = 8
GLOBAL_BATCH_SIZE = 12
VARIATION_WAVE_WIDTH = 4
RETRY_VARIATION_COUNT = 6


class VerificationRun:
    """
    State owned by one thorough-mode call.

    Only the orchestrator mutates it, between batches, so concurrent
    probes never write to it.
    """

    def __init__(self, niche: str, deadline: Deadline, limit: int, variations: List[str]):
        self.niche = niche
        self.deadline = deadline
        self.limit = limit
        self.variations = variations
        self.verified: List[StoreRecord] = []
        self.seen: Set[str] = set()  # accepted domains
        self.attempted: Set[str] = set()  # domains already probed in strict waves

    @property
    def full(self) -> bool:
        return len(self.verified) >= self.limit

    @property
    def done(self) -> bool:
        return self.full or self.deadline.is_expired()

    def accept(self, store: StoreRecord) -> bool:
        if self.full or store.key in self.seen:
            return False
        self.verified.append(store)
        self.seen.add(store.key)
        return True


class CompetitorFinder:
    """
    Finds verified competitor stores for a niche.

    Usage:
        async with CompetitorFinder() as finder:
            stores = await finder.get_verified_competitors(
                "home theater", deadline_at=time.time() + 45,
            )
    """

    def __init__(
        self,
        catalog: Optional[SeedCatalog] = None,
        prober: Optional[StoreProber] = None,
        generator: Optional[CandidateGenerator] = None,
        classifier: Optional[QualificationClassifier] = None,
        relevance: Optional[RelevanceFilter] = None,
        max_competitors: Optional[int] = None,
        batch_size: int = BATCH_SIZE,
        global_batch_size: int = GLOBAL_BATCH_SIZE,
        clock: Callable[[], float] = time.time,
    ):
        self.catalog = catalog or get_default_catalog()
        self.normalizer = self.catalog.normalizer
        self._owns_prober = prober is None
        self.prober = prober or StoreProber.from_settings()
        self.generator = generator if generator is not None else create_candidate_generator()
        self.classifier = classifier or QualificationClassifier(self.prober)
        self.relevance = relevance or RelevanceFilter(self.normalizer, self.prober)
        self.max_competitors = max_competitors or get_settings().MAX_COMPETITORS
        self.batch_size = batch_size
        self.global_batch_size = global_batch_size
        self.clock = clock

    async def close(self):
        """Close the prober if this finder created it."""
        if self._owns_prober:
            await self.prober.close()

    async def __aenter__(self) -> "CompetitorFinder":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    async def get_verified_competitors(
        self,
        niche: str,
        fast: bool = False,
        deadline_at: Optional[float] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> List[StoreRecord]:
        """
        Return up to five competitor stores for a niche.

        Args:
            niche: Free-text niche
            fast: Skip verification and return catalog/generated stores
            deadline_at: Epoch seconds after which no new work starts
            max_attempts: Generation retry rounds in wave (e)

        Returns:
            Verified stores; empty or partial lists are valid results
        """
        deadline = Deadline(deadline_at, self.clock)
        if fast:
            return await self._fast_lookup(niche, deadline)

        run = VerificationRun(
            niche=niche,
            deadline=deadline,
            limit=self.max_competitors,
            variations=self._variations_for(niche),
        )

        stages = [
            ("wide seed", self._wave_wide_seed),
            ("primary lookup", self._wave_primary),
            ("generated", self._wave_generated),
            ("variations", self._wave_variations),
            ("retries", partial(self._wave_retries, max_attempts=max_attempts)),
            ("global fallback", self._wave_global),
        ]

        for name, stage in stages:
            if run.done:
                break
            await stage(run)
            logger.info(f"'{niche}' after {name}: {len(run.verified)} verified")

        if run.deadline.is_expired() and not run.full:
            logger.info(f"Deadline reached for '{niche}' with {len(run.verified)} verified")

        return run.verified[:self.max_competitors]

    # =========================================================================
    # FAST MODE
    # =========================================================================

    async def _fast_lookup(self, niche: str, deadline: Deadline) -> List[StoreRecord]:
        stores = self.catalog.get_wide(niche)[:self.max_competitors]
        if len(stores) >= self.max_competitors:
            return stores

        seen = {store.key for store in stores}
        for store in await self._generate(niche, deadline):
            if len(stores) >= self.max_competitors:
                break
            if not store.key or store.key in seen or self.catalog.is_excluded(store.domain):
                continue
            stores.append(store)
            seen.add(store.key)

        return stores[:self.max_competitors]

    # =========================================================================
    # WAVES
    # =========================================================================

    async def _wave_wide_seed(self, run: VerificationRun):
        await self._verify_batches(run, self.catalog.get_wide(run.niche))

    async def _wave_primary(self, run: VerificationRun):
        await self._verify_batches(run, self.catalog.get_primary(run.niche))

    async def _wave_generated(self, run: VerificationRun):
        await self._verify_batches(run, await self._generate(run.niche, run.deadline))

    async def _wave_variations(self, run: VerificationRun):
        variations = run.variations
        for start in range(0, len(variations), VARIATION_WAVE_WIDTH):
            if run.done:
                return
            group = variations[start:start + VARIATION_WAVE_WIDTH]
            results = await asyncio.gather(*(self._generate(v, run.deadline) for v in group))
            for candidates in results:
                if run.done:
                    return
                await self._verify_batches(run, candidates)

    async def _wave_retries(self, run: VerificationRun, max_attempts: int):
        targets = [run.niche] + run.variations[:RETRY_VARIATION_COUNT]
        for attempt in range(max_attempts):
            if run.done:
                return
            logger.debug(f"Generation retry {attempt + 1}/{max_attempts} for '{run.niche}'")
            results = await asyncio.gather(*(self._generate(t, run.deadline) for t in targets))
            for candidates in results:
                if run.done:
                    return
                await self._verify_batches(run, candidates)

    async def _wave_global(self, run: VerificationRun):
        # Curated stores from any niche, still gated by relevance
        await self._verify_batches(
            run,
            self.catalog.get_global(),
            batch_size=self.global_batch_size,
            fast_verify=True,
            trusted_known=True,
            strict=False,
        )

    # =========================================================================
    # VERIFICATION
    # =========================================================================

    def _variations_for(self, niche: str) -> List[str]:
        """Variations of the normalized and canonical niche, minus the niche."""
        normalized = self.normalizer.normalize(niche)
        canonical = self.normalizer.map_to_canonical(niche)
        variations = self.normalizer.expand_variations(normalized)
        variations.extend(self.normalizer.expand_variations(canonical))
        return [v for v in dict.fromkeys(variations) if v and v != normalized]

    async def _generate(self, term: str, deadline: Deadline) -> List[StoreRecord]:
        """Generated candidates for a term; a call still running at the deadline is cancelled."""
        if deadline.is_expired():
            return []
        try:
            stores = await asyncio.wait_for(
                self.generator.generate(term),
                timeout=deadline.remaining(),
            )
        except asyncio.TimeoutError:
            logger.info(f"Candidate generation for '{term}' cut off by the deadline")
            return []
        except Exception as e:
            logger.warning(f"Candidate generator raised for '{term}': {e}")
            return []
        return list(stores)

    def _collect(
        self,
        run: VerificationRun,
        candidates: Iterable[Optional[StoreRecord]],
        strict: bool,
    ) -> List[StoreRecord]:
        """Drop excluded retailers and already-seen or duplicate domains."""
        fresh = []
        keys = set()
        for store in candidates:
            if store is None:
                continue
            key = store.key
            if not key or key in keys or key in run.seen:
                continue
            if strict and key in run.attempted:
                continue
            if self.catalog.is_excluded(key):
                logger.debug(f"Skipping excluded retailer {key}")
                continue
            keys.add(key)
            fresh.append(store)
        return fresh

    async def _verify_batches(
        self,
        run: VerificationRun,
        candidates: Iterable[Optional[StoreRecord]],
        batch_size: Optional[int] = None,
        fast_verify: bool = False,
        trusted_known: bool = False,
        strict: bool = True,
    ):
        fresh = self._collect(run, candidates, strict)
        size = batch_size or self.batch_size

        for start in range(0, len(fresh), size):
            if run.done:
                return
            batch = fresh[start:start + size]
            if strict:
                run.attempted.update(store.key for store in batch)

            results = await asyncio.gather(*(
                self._verify_candidate(store, run.niche, fast_verify, trusted_known)
                for store in batch
            ))

            for result in results:
                if result.accepted and run.accept(result.store):
                    logger.info(f"Verified competitor for '{run.niche}': {result.store.domain}")

    async def _verify_candidate(
        self,
        store: StoreRecord,
        niche: str,
        fast_verify: bool,
        trusted_known: bool,
    ) -> VerificationResult:
        result = VerificationResult(store=store)
        try:
            result.live = await self.prober.exists(store, fast_verify=fast_verify)
            if not result.live:
                return result

            result.qualifies = await self.classifier.qualifies(
                store, fast_verify=fast_verify, trusted_known=trusted_known,
            )
            if not result.qualifies:
                return result

            result.relevant = await self.relevance.is_relevant(store, niche, check_content=False)
        except Exception as e:
            result.error = f"{type(e).__name__}: {e}"
            logger.debug(f"Rejected {store.domain} after error: {result.error}")
        return result


# =============================================================================
# FACTORY FUNCTION
# =============================================================================


async def get_verified_competitors(
    niche: str,
    fast: bool = False,
    deadline_at: Optional[float] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    generator: Optional[CandidateGenerator] = None,
) -> List[StoreRecord]:
    """
    Convenience function to find verified competitors with default
    collaborators.

    Args:
        niche: Free-text niche
        fast: Skip verification
        deadline_at: Epoch seconds deadline
        max_attempts: Generation retry rounds
        generator: Candidate generator (defaults to the configured one)

    Returns:
        Up to five competitor stores
    """
    async with CompetitorFinder(generator=generator) as finder:
        return await finder.get_verified_competitors(
            niche,
            fast=fast,
            deadline_at=deadline_at,
            max_attempts=max_attempts,
        )
