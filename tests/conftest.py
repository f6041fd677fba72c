"""
Pytest Configuration and Shared Fixtures

Provides a small seed catalog and in-process fakes for the prober,
classifier and candidate generator so orchestration can be tested
without network access.
"""

from typing import Dict, Iterable, List, Optional

import pytest

from src.discovery.candidate_generator import CandidateGenerator
from src.discovery.models import FetchResult, StoreRecord
from src.discovery.niche_normalizer import NicheNormalizer
from src.discovery.seed_catalog import SeedCatalog


# ============================================================================
# Catalog Fixtures
# ============================================================================

TEST_STORES = {
    "backyard": [
        ("Yard Depot", "yarddepot.com"),
        ("Patio Place", "patioplace.com"),
        ("Garden Hub", "gardenhub.com"),
        ("Deck World", "deckworld.com"),
        ("Lawn Pros", "lawnpros.com"),
        ("Backyard Bros", "backyardbros.com"),
    ],
    "golf": [
        ("Golf Haus", "golfhaus.com"),
        ("Putt Shop", "puttshop.com"),
    ],
    "marine": [
        ("Boat Barn", "boatbarn.com"),
        ("Amazon", "amazon.com"),
    ],
}


@pytest.fixture
def test_catalog() -> SeedCatalog:
    """Three-niche catalog; amazon.com must always be filtered."""
    return SeedCatalog(stores=TEST_STORES)


@pytest.fixture
def default_catalog() -> SeedCatalog:
    """Catalog built from the curated tables."""
    return SeedCatalog()


@pytest.fixture
def normalizer() -> NicheNormalizer:
    return NicheNormalizer()


# ============================================================================
# Fakes
# ============================================================================

class FakeProber:
    """Answers liveness from a set of live domains and records every call."""

    def __init__(self, live: Iterable[str] = (), html: Optional[Dict[str, str]] = None):
        self.live = set(live)
        self.html = html or {}
        self.calls: List[tuple] = []

    async def exists(self, store: StoreRecord, fast_verify: bool = False) -> bool:
        self.calls.append((store.key, fast_verify))
        return store.key in self.live

    async def fetch_html(self, store: StoreRecord, fast_verify: bool = False) -> FetchResult:
        html = self.html.get(store.key)
        return FetchResult(html=html, final_url=f"https://{store.key}" if html else None)

    async def close(self):
        pass

    def probed(self, key: str, fast_verify: Optional[bool] = None) -> int:
        return sum(
            1 for k, fast in self.calls
            if k == key and (fast_verify is None or fast == fast_verify)
        )


class FakeClassifier:
    """
    Strict qualification for domains in `qualified`; trusted-known
    qualification additionally for domains in `trusted`. Domains in
    `raises` raise RuntimeError.
    """

    def __init__(
        self,
        qualified: Iterable[str] = (),
        trusted: Iterable[str] = (),
        raises: Iterable[str] = (),
    ):
        self.qualified = set(qualified)
        self.trusted = set(trusted)
        self.raises = set(raises)
        self.calls: List[tuple] = []

    async def qualifies(
        self,
        store: StoreRecord,
        fast_verify: bool = False,
        trusted_known: bool = False,
    ) -> bool:
        self.calls.append((store.key, fast_verify, trusted_known))
        if store.key in self.raises:
            raise RuntimeError(f"classifier blew up on {store.key}")
        if store.key in self.qualified:
            return True
        return trusted_known and store.key in self.trusted


class FakeGenerator(CandidateGenerator):
    """Returns canned candidates per term and records requested terms."""

    def __init__(self, results: Optional[Dict[str, List[StoreRecord]]] = None):
        self.results = results or {}
        self.calls: List[str] = []

    async def generate(self, niche: str) -> List[StoreRecord]:
        self.calls.append(niche)
        return list(self.results.get(niche, []))


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def store(domain: str, name: Optional[str] = None) -> StoreRecord:
    """Shorthand for a store record with an https URL."""
    return StoreRecord.from_domain(domain, name)
