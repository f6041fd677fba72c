"""
Relevance Filter

Keyword-substring check that a store actually belongs to a niche.
"""

import logging
from typing import List, Optional, TYPE_CHECKING

from .models import StoreRecord
from .niche_normalizer import NicheNormalizer
from .store_prober import extract_text

if TYPE_CHECKING:
    from .store_prober import StoreProber

logger = logging.getLogger(__name__)

# Shorter tokens ("rc", "ac") match far too many domains
MIN_KEYWORD_LENGTH = 3


class RelevanceFilter:
    """
    A store is relevant when any niche keyword appears in its name,
    domain or URL. Optionally falls back to the homepage text.
    """

    def __init__(self, normalizer: NicheNormalizer, fetcher: Optional["StoreProber"] = None):
        self.normalizer = normalizer
        self.fetcher = fetcher

    def build_keywords(self, niche: str) -> List[str]:
        """
        Normalized niche and canonical key, their variations, and every
        whitespace token of those.
        """
        normalized = self.normalizer.normalize(niche)
        canonical = self.normalizer.map_to_canonical(niche)

        phrases = self.normalizer.expand_variations(normalized)
        phrases.extend(self.normalizer.expand_variations(canonical))

        keywords = []
        for phrase in phrases:
            keywords.append(phrase)
            keywords.extend(phrase.split())

        return [
            keyword for keyword in dict.fromkeys(k.lower().strip() for k in keywords)
            if len(keyword) >= MIN_KEYWORD_LENGTH
        ]

    @staticmethod
    def matches_text(text: Optional[str], keywords: List[str]) -> bool:
        if not text:
            return False
        haystack = text.lower()
        return any(keyword in haystack for keyword in keywords)

    def matches_metadata(self, store: StoreRecord, keywords: List[str]) -> bool:
        return any(
            self.matches_text(value, keywords)
            for value in (store.name, store.domain, store.url)
        )

    async def is_relevant(
        self,
        store: StoreRecord,
        niche: str,
        check_content: bool = False,
    ) -> bool:
        keywords = self.build_keywords(niche)
        if self.matches_metadata(store, keywords):
            return True

        if not check_content or self.fetcher is None:
            return False

        try:
            page = await self.fetcher.fetch_html(store, fast_verify=True)
        except Exception as e:
            logger.warning(f"Relevance fetch failed for {store.domain}: {e}")
            return False

        if page.html is None:
            return False
        return self.matches_text(extract_text(page.html), keywords)
