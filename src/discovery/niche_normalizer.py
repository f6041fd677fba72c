"""
Niche Normalizer

Maps free-text niche input onto the fixed set of seed catalog keys.

Resolution layers (first hit wins):
1. Exact catalog key
2. Umbrella synonyms (car/automotive -> garage)
3. Popular-niche synonyms, restricted to niches with seed data
4. Bidirectional substring containment against catalog keys
5. Regex keyword clusters (garden|yard|patio -> backyard)
6. Weighted fuzzy match (SimilarityPolicy)
7. Default bucket

The normalizer never invents a niche: every result is a catalog key.
"""

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Sequence, Tuple

from src.scoring.similarity import SimilarityPolicy, DEFAULT_SIMILARITY_POLICY
from .models import MatchLayer, NicheResolution
from .niche_data import (
    ALIASES,
    DEFAULT_NICHE,
    KEYWORD_CLUSTERS,
    KNOWN_STORES,
    POPULAR_NICHES,
    RELATED_TERMS,
    UMBRELLA_SYNONYMS,
)

logger = logging.getLogger(__name__)

# Shortest input allowed to take part in containment matching
MIN_CONTAINMENT_LENGTH = 3

_NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")


def toggle_plural(term: str) -> str:
    """Naive singular/plural toggle: strip or add a trailing "s"."""
    if not term:
        return term
    if term.endswith("s"):
        return term[:-1]
    return term + "s"


class NicheNormalizer:
    """
    Canonicalizes niche text and resolves it to a catalog key.

    Usage:
        normalizer = NicheNormalizer()
        normalizer.normalize("Home Theatre!")       # "man cave"
        normalizer.map_to_canonical("quadcopters")  # "drones"
    """

    def __init__(
        self,
        catalog_keys: Optional[Iterable[str]] = None,
        default_key: str = DEFAULT_NICHE,
        policy: SimilarityPolicy = DEFAULT_SIMILARITY_POLICY,
        aliases: Mapping[str, str] = ALIASES,
        umbrella_synonyms: Mapping[str, str] = UMBRELLA_SYNONYMS,
        popular_niches: Mapping[str, Sequence[str]] = POPULAR_NICHES,
        keyword_clusters: Sequence[Tuple[Pattern, str]] = KEYWORD_CLUSTERS,
        related_terms: Mapping[str, Sequence[str]] = RELATED_TERMS,
    ):
        keys = list(catalog_keys) if catalog_keys is not None else list(KNOWN_STORES)
        if default_key not in keys:
            raise ValueError(f"Default niche '{default_key}' is not a catalog key")

        self.keys: Tuple[str, ...] = tuple(keys)
        self._key_set = frozenset(keys)
        self.default_key = default_key
        self.policy = policy
        self.aliases = aliases
        self.umbrella_synonyms = umbrella_synonyms
        self.popular_niches = popular_niches
        self.keyword_clusters = keyword_clusters
        self.related_terms = related_terms

        self._synonym_index = self._build_synonym_index()
        self._fuzzy_candidates = self._build_fuzzy_candidates()

    def _build_synonym_index(self) -> Dict[str, str]:
        """Synonym -> niche for popular niches that have seed data."""
        index: Dict[str, str] = {}
        for niche, synonyms in self.popular_niches.items():
            if niche not in self._key_set:
                continue
            for synonym in synonyms:
                index.setdefault(synonym, niche)
        return index

    def _build_fuzzy_candidates(self) -> Dict[str, str]:
        """Candidate term -> catalog key, keys first, insertion ordered."""
        candidates = {key: key for key in self.keys}
        for synonym, niche in self._synonym_index.items():
            candidates.setdefault(synonym, niche)
        return candidates

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    def normalize(self, raw: Optional[str]) -> str:
        """
        Lowercase, strip punctuation and non-ASCII, collapse whitespace,
        then apply the alias table keyed on the space-removed form.
        """
        text = (raw or "").lower()
        text = _NON_WORD_RE.sub("", text)
        text = _WHITESPACE_RE.sub(" ", text).strip()
        return self.aliases.get(text.replace(" ", ""), text)

    def expand_variations(self, niche: str) -> List[str]:
        """
        The niche itself, its plural toggle, and its related terms.

        Ordered and free of duplicates.
        """
        if not niche:
            return []

        variations = [niche, toggle_plural(niche)]
        variations.extend(self.related_terms.get(niche, []))
        return list(dict.fromkeys(variations))

    # =========================================================================
    # CANONICAL MAPPING
    # =========================================================================

    def map_to_canonical(self, raw: Optional[str]) -> str:
        """Resolve any input to a catalog key; never fails."""
        return self.resolve(raw).canonical

    def resolve(self, raw: Optional[str]) -> NicheResolution:
        """Resolve input and report which layer matched."""
        normalized = self.normalize(raw)
        resolution = self._resolve_normalized(raw or "", normalized)
        logger.debug(
            f"Niche '{raw}' -> '{resolution.canonical}' "
            f"via {resolution.matched_by.value}"
        )
        return resolution

    def _resolve_normalized(self, raw: str, normalized: str) -> NicheResolution:
        def result(key: str, layer: MatchLayer, term: Optional[str] = None,
                   score: Optional[float] = None) -> NicheResolution:
            return NicheResolution(
                raw=raw,
                normalized=normalized,
                canonical=key,
                matched_by=layer,
                matched_term=term,
                score=score,
            )

        if not normalized:
            return result(self.default_key, MatchLayer.DEFAULT)

        forms = list(dict.fromkeys([normalized, toggle_plural(normalized)]))

        # Layer 1: exact catalog key
        if normalized in self._key_set:
            return result(normalized, MatchLayer.EXACT, normalized)

        # Layer 2: umbrella synonyms
        for form in forms:
            target = self.umbrella_synonyms.get(form)
            if target in self._key_set:
                return result(target, MatchLayer.UMBRELLA_SYNONYM, form)

        # Layer 3: popular-niche synonyms with seed data
        for form in forms:
            target = self._synonym_index.get(form)
            if target is not None:
                return result(target, MatchLayer.POPULAR_SYNONYM, form)

        # Layer 4: bidirectional containment
        if len(normalized) >= MIN_CONTAINMENT_LENGTH:
            for key in self.keys:
                if key in normalized or normalized in key:
                    return result(key, MatchLayer.CONTAINMENT, key)

        # Layer 5: keyword clusters
        for pattern, target in self.keyword_clusters:
            if target in self._key_set and pattern.search(normalized):
                return result(target, MatchLayer.KEYWORD_CLUSTER, pattern.pattern)

        # Layer 6: weighted fuzzy match
        ranked = self.policy.rank(normalized, self._fuzzy_candidates)
        if ranked is not None and ranked[1] >= self.policy.min_score:
            term, score = ranked
            return result(self._fuzzy_candidates[term], MatchLayer.FUZZY, term, score)

        # Layer 7: default bucket
        return result(self.default_key, MatchLayer.DEFAULT)
