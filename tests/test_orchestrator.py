"""
Tests for the verified-competitor orchestrator.

All collaborators are in-process fakes (see conftest.py).
"""

import asyncio
import time
from unittest.mock import MagicMock, patch

import pytest

from src.discovery.orchestrator import CompetitorFinder

from conftest import FakeClassifier, FakeGenerator, FakeProber, TEST_STORES, store


class SlowGenerator(FakeGenerator):
    """Generator whose calls take `delay` seconds."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    async def generate(self, niche):
        self.calls.append(niche)
        await asyncio.sleep(self.delay)
        return []


BACKYARD_DOMAINS = [domain for _, domain in TEST_STORES["backyard"]]


def make_finder(catalog, prober, classifier, generator=None, clock=None, **kwargs) -> CompetitorFinder:
    extra = {"clock": clock} if clock is not None else {}
    return CompetitorFinder(
        catalog=catalog,
        prober=prober,
        classifier=classifier,
        generator=generator or FakeGenerator(),
        **extra,
        **kwargs,
    )


class TestFastMode:
    """Fast mode returns catalog stores without verification."""

    @pytest.mark.asyncio
    async def test_default_catalog_backyard(self, default_catalog):
        prober = FakeProber()
        finder = make_finder(default_catalog, prober, FakeClassifier())

        stores = await finder.get_verified_competitors("Backyard!", fast=True)

        assert [s.domain for s in stores] == [s.domain for s in default_catalog.get_known("backyard")]
        assert prober.calls == []

    @pytest.mark.asyncio
    async def test_tops_up_with_generated(self, test_catalog):
        generator = FakeGenerator({"golf": [
            store("golfhaus.com"),  # already in the catalog
            store("amazon.com"),
            store("golfa.com"),
            store("golfb.com"),
            store("golfc.com"),
            store("golfd.com"),
        ]})
        finder = make_finder(test_catalog, FakeProber(), FakeClassifier(), generator)

        stores = await finder.get_verified_competitors("golf", fast=True)

        assert [s.domain for s in stores] == [
            "golfhaus.com", "puttshop.com", "golfa.com", "golfb.com", "golfc.com",
        ]


class TestThoroughMode:
    """Thorough mode verifies every returned store."""

    @pytest.mark.asyncio
    async def test_caps_at_five(self, test_catalog):
        prober = FakeProber(live=BACKYARD_DOMAINS)
        classifier = FakeClassifier(qualified=BACKYARD_DOMAINS)
        finder = make_finder(test_catalog, prober, classifier)

        stores = await finder.get_verified_competitors("backyard")

        domains = [s.domain for s in stores]
        assert len(domains) == 5
        assert len(set(domains)) == 5
        assert set(domains) <= set(BACKYARD_DOMAINS)

    @pytest.mark.asyncio
    async def test_only_live_qualified_relevant(self, test_catalog):
        live = ["yarddepot.com", "patioplace.com", "gardenhub.com"]
        prober = FakeProber(live=live + ["boatbarn.com"])
        classifier = FakeClassifier(qualified=["yarddepot.com", "gardenhub.com", "boatbarn.com"])
        finder = make_finder(test_catalog, prober, classifier)

        stores = await finder.get_verified_competitors("backyard", max_attempts=1)

        # boatbarn.com is live and qualifies but is not about backyards
        assert sorted(s.domain for s in stores) == ["gardenhub.com", "yarddepot.com"]

    @pytest.mark.asyncio
    async def test_past_deadline_does_no_work(self, test_catalog, clock):
        prober = FakeProber(live=BACKYARD_DOMAINS)
        generator = FakeGenerator()
        finder = make_finder(
            test_catalog, prober, FakeClassifier(qualified=BACKYARD_DOMAINS), generator, clock=clock,
        )

        stores = await finder.get_verified_competitors("backyard", deadline_at=clock() - 1)

        assert stores == []
        assert prober.calls == []
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_deadline_stops_between_batches(self, test_catalog, clock):
        class SlowProber(FakeProber):
            async def exists(self, store, fast_verify=False):
                clock.advance(10)
                return await super().exists(store, fast_verify)

        prober = SlowProber(live=BACKYARD_DOMAINS)
        finder = make_finder(
            test_catalog,
            prober,
            FakeClassifier(),
            clock=clock,
            batch_size=2,
        )

        stores = await finder.get_verified_competitors("backyard", deadline_at=clock() + 15)

        assert stores == []
        # One batch of two started before the deadline passed
        assert len(prober.calls) == 2

    @pytest.mark.asyncio
    async def test_candidate_exception_rejects_only_that_candidate(self, test_catalog):
        prober = FakeProber(live=BACKYARD_DOMAINS)
        classifier = FakeClassifier(
            qualified=BACKYARD_DOMAINS,
            raises=["yarddepot.com"],
        )
        finder = make_finder(test_catalog, prober, classifier)

        stores = await finder.get_verified_competitors("backyard")

        domains = [s.domain for s in stores]
        assert "yarddepot.com" not in domains
        assert len(domains) == 5

    @pytest.mark.asyncio
    async def test_generator_exception_is_contained(self, test_catalog):
        class BrokenGenerator(FakeGenerator):
            async def generate(self, niche):
                raise RuntimeError("generator down")

        prober = FakeProber(live=["golfhaus.com"])
        classifier = FakeClassifier(qualified=["golfhaus.com"])
        finder = make_finder(test_catalog, prober, classifier, BrokenGenerator())

        stores = await finder.get_verified_competitors("golf", max_attempts=2)

        assert [s.domain for s in stores] == ["golfhaus.com"]

    @pytest.mark.asyncio
    async def test_generated_candidates_verified(self, test_catalog):
        generator = FakeGenerator({"golf": [
            store("golfgalaxydirect.com", "Golf Galaxy Direct"),
            store("amazon.com", "Amazon Golf"),
        ]})
        prober = FakeProber(live=["golfgalaxydirect.com", "amazon.com"])
        classifier = FakeClassifier(qualified=["golfgalaxydirect.com", "amazon.com"])
        finder = make_finder(test_catalog, prober, classifier, generator)

        stores = await finder.get_verified_competitors("golf", max_attempts=0)

        assert [s.domain for s in stores] == ["golfgalaxydirect.com"]
        assert prober.probed("amazon.com") == 0

    @pytest.mark.asyncio
    async def test_strict_waves_probe_each_domain_once(self, test_catalog):
        prober = FakeProber()
        finder = make_finder(test_catalog, prober, FakeClassifier())

        await finder.get_verified_competitors("backyard", max_attempts=2)

        for domain in BACKYARD_DOMAINS:
            assert prober.probed(domain, fast_verify=False) == 1

    @pytest.mark.asyncio
    async def test_retries_use_niche_and_variations(self, test_catalog):
        generator = FakeGenerator()
        finder = make_finder(test_catalog, FakeProber(), FakeClassifier(), generator)

        await finder.get_verified_competitors("golf", max_attempts=3)

        # generated wave + one call per retry round for the niche itself
        assert generator.calls.count("golf") == 1 + 3
        assert "golfs" in generator.calls


class TestGenerationDeadline:
    """Slow generation cannot hold a call past its deadline."""

    @pytest.mark.asyncio
    async def test_thorough_returns_near_deadline(self, test_catalog):
        generator = SlowGenerator(delay=3.0)
        finder = make_finder(test_catalog, FakeProber(), FakeClassifier(), generator)

        started = time.time()
        stores = await finder.get_verified_competitors(
            "backyard", deadline_at=started + 0.5, max_attempts=1,
        )

        assert stores == []
        assert time.time() - started < 1.5
        assert generator.calls == ["backyard"]

    @pytest.mark.asyncio
    async def test_fast_mode_keeps_catalog_stores(self, test_catalog):
        finder = make_finder(test_catalog, FakeProber(), FakeClassifier(), SlowGenerator(delay=3.0))

        started = time.time()
        stores = await finder.get_verified_competitors(
            "golf", fast=True, deadline_at=started + 0.3,
        )

        assert [s.domain for s in stores] == ["golfhaus.com", "puttshop.com"]
        assert time.time() - started < 1.5

    @pytest.mark.asyncio
    async def test_expired_deadline_skips_generation(self, test_catalog, clock):
        generator = FakeGenerator()
        finder = make_finder(test_catalog, FakeProber(), FakeClassifier(), generator, clock=clock)

        await finder.get_verified_competitors("golf", fast=True, deadline_at=clock() - 1)

        assert generator.calls == []


class TestGlobalFallback:
    """The last wave re-checks curated stores as trusted known."""

    @pytest.mark.asyncio
    async def test_trusted_known_rescues_curated_store(self, test_catalog):
        prober = FakeProber(live=["golfhaus.com", "puttshop.com"])
        classifier = FakeClassifier(trusted=["golfhaus.com", "puttshop.com"])
        finder = make_finder(test_catalog, prober, classifier)

        stores = await finder.get_verified_competitors("golf", max_attempts=0)

        # puttshop.com qualifies but is not recognisably about golf
        assert [s.domain for s in stores] == ["golfhaus.com"]
        assert ("golfhaus.com", True, True) in classifier.calls
        assert prober.probed("golfhaus.com", fast_verify=True) == 1

    @pytest.mark.asyncio
    async def test_global_never_returns_excluded(self, test_catalog):
        prober = FakeProber(live=["amazon.com", "boatbarn.com"])
        classifier = FakeClassifier(trusted=["amazon.com", "boatbarn.com"])
        finder = make_finder(test_catalog, prober, classifier)

        stores = await finder.get_verified_competitors("marine", max_attempts=0)

        assert [s.domain for s in stores] == ["boatbarn.com"]
        assert prober.probed("amazon.com") == 0


class TestLifecycle:
    """Test resource ownership."""

    @pytest.mark.asyncio
    async def test_injected_prober_not_closed(self, test_catalog):
        class TrackingProber(FakeProber):
            closed = False

            async def close(self):
                self.closed = True

        prober = TrackingProber()
        async with make_finder(test_catalog, prober, FakeClassifier()) as finder:
            await finder.get_verified_competitors("golf", fast=True)

        assert prober.closed is False


class TestSettings:
    """Test settings-driven limits."""

    @pytest.mark.asyncio
    async def test_max_competitors_from_settings(self, test_catalog):
        settings = MagicMock(MAX_COMPETITORS=3)
        with patch("src.discovery.orchestrator.get_settings", return_value=settings):
            finder = make_finder(
                test_catalog, FakeProber(live=BACKYARD_DOMAINS), FakeClassifier(qualified=BACKYARD_DOMAINS),
            )

        stores = await finder.get_verified_competitors("backyard")

        assert finder.max_competitors == 3
        assert len(stores) == 3

    def test_explicit_limit_wins(self, test_catalog):
        finder = make_finder(test_catalog, FakeProber(), FakeClassifier(), max_competitors=2)
        assert finder.max_competitors == 2
