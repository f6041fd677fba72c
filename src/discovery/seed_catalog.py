"""
Seed Catalog

Immutable table of curated competitor stores per canonical niche.

Every list the catalog returns is deduplicated by domain (first
occurrence wins) and never contains an excluded retailer.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from src.utils.domain_filter import EXCLUDED_RETAILERS, is_excluded_domain
from .models import StoreRecord
from .niche_data import DEFAULT_NICHE, KNOWN_STORES
from .niche_normalizer import NicheNormalizer

logger = logging.getLogger(__name__)


def _coerce_record(entry: Any) -> Optional[StoreRecord]:
    """Accept StoreRecords, (name, domain) tuples or loose dicts."""
    if isinstance(entry, StoreRecord):
        return entry
    if isinstance(entry, tuple) and len(entry) == 2:
        name, domain = entry
        return StoreRecord.from_domain(domain, name=name)
    if isinstance(entry, dict):
        return StoreRecord.from_dict(entry)
    return None


class SeedCatalog:
    """
    Curated stores indexed by canonical niche key.

    Usage:
        catalog = SeedCatalog()
        catalog.get_known("backyard")     # curated backyard stores
        catalog.get_wide("home theatre")  # man cave stores plus variations
        catalog.get_global()              # every curated store
    """

    def __init__(
        self,
        stores: Optional[Mapping[str, Iterable[Any]]] = None,
        excluded: Iterable[str] = EXCLUDED_RETAILERS,
        default_key: str = DEFAULT_NICHE,
        normalizer: Optional[NicheNormalizer] = None,
    ):
        source = stores if stores is not None else KNOWN_STORES

        self._stores: Dict[str, Tuple[StoreRecord, ...]] = {}
        for key, entries in source.items():
            records = [_coerce_record(entry) for entry in entries]
            self._stores[key] = tuple(r for r in records if r is not None)

        self.excluded: FrozenSet[str] = frozenset(excluded)
        self.normalizer = normalizer or NicheNormalizer(
            catalog_keys=self._stores.keys(),
            default_key=default_key,
        )

    @property
    def default_key(self) -> str:
        return self.normalizer.default_key

    def keys(self) -> List[str]:
        return list(self._stores)

    def has(self, key: str) -> bool:
        return bool(self._stores.get(key))

    def is_excluded(self, domain: Optional[str]) -> bool:
        return is_excluded_domain(domain, self.excluded)

    def _clean(self, records: Iterable[StoreRecord]) -> List[StoreRecord]:
        """Drop excluded retailers and duplicate domains, keeping order."""
        seen = set()
        cleaned = []
        for record in records:
            key = record.key
            if not key or key in seen or self.is_excluded(key):
                continue
            seen.add(key)
            cleaned.append(record)
        return cleaned

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def get_known(self, key: str) -> List[StoreRecord]:
        """Curated stores stored under an exact catalog key."""
        return self._clean(self._stores.get(key, ()))

    def get_primary(self, niche: str) -> List[StoreRecord]:
        """
        Stores for the niche's canonical key, falling back to the first
        variation that has stores of its own.
        """
        canonical = self.normalizer.map_to_canonical(niche)
        known = self.get_known(canonical)
        if known:
            return known

        for variation in self.normalizer.expand_variations(canonical):
            known = self.get_known(variation)
            if known:
                logger.info(f"Using variation '{variation}' stores for '{niche}'")
                return known
        return []

    def get_wide(self, niche: str) -> List[StoreRecord]:
        """Union of stores across the canonical key and its variations."""
        canonical = self.normalizer.map_to_canonical(niche)
        records: List[StoreRecord] = []
        for variation in self.normalizer.expand_variations(canonical):
            records.extend(self._stores.get(variation, ()))
        return self._clean(records)

    def get_global(self) -> List[StoreRecord]:
        """Union of stores across every catalog key."""
        records: List[StoreRecord] = []
        for entries in self._stores.values():
            records.extend(entries)
        return self._clean(records)


@lru_cache
def get_default_catalog() -> SeedCatalog:
    """Shared catalog built from the curated tables."""
    return SeedCatalog()
