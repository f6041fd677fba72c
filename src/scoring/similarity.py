"""
String Similarity Scoring

Pure scoring functions used by the niche normalizer's fuzzy layer:
- Levenshtein edit distance and its length-normalized similarity
- Jaccard similarity over whitespace tokens
- A weighted combination packaged as a swappable policy
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


# ============================================================================
# EDIT DISTANCE
# ============================================================================

def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic dynamic-programming edit distance with unit costs.

    Examples:
        levenshtein_distance("kitten", "sitting") -> 3
        levenshtein_distance("", "abc") -> 3
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current

    return previous[-1]


def levenshtein_similarity(a: str, b: str) -> float:
    """
    Length-normalized Levenshtein similarity in [0, 1].

    Whitespace is removed from both strings first, so "man cave" and
    "mancave" compare as identical.
    """
    a = "".join(a.split())
    b = "".join(b.split())
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


# ============================================================================
# TOKEN OVERLAP
# ============================================================================

def jaccard_token_similarity(a: str, b: str) -> float:
    """Jaccard index of the whitespace-token sets of two strings."""
    tokens_a = set(a.split())
    tokens_b = set(b.split())
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


# ============================================================================
# WEIGHTED POLICY
# ============================================================================

@dataclass(frozen=True)
class SimilarityPolicy:
    """
    Weighted fuzzy-match policy.

    score = levenshtein_weight * levenshtein_similarity
          + jaccard_weight * jaccard_token_similarity

    A best match below min_score is rejected so that nonsense input
    falls through to the caller's default.
    """
    levenshtein_weight: float = 0.7
    jaccard_weight: float = 0.3
    min_score: float = 0.5

    def score(self, a: str, b: str) -> float:
        return (
            self.levenshtein_weight * levenshtein_similarity(a, b)
            + self.jaccard_weight * jaccard_token_similarity(a, b)
        )

    def rank(self, query: str, candidates: Iterable[str]) -> Optional[Tuple[str, float]]:
        """
        Return the highest scoring candidate and its score.

        Only a strictly higher score replaces the current best, so ties
        keep the first candidate encountered. Returns None for an empty
        candidate list.
        """
        best: Optional[Tuple[str, float]] = None
        for candidate in candidates:
            value = self.score(query, candidate)
            if best is None or value > best[1]:
                best = (candidate, value)
        return best

    def best_match(self, query: str, candidates: Iterable[str]) -> Optional[str]:
        """Best candidate if it reaches min_score, otherwise None."""
        ranked = self.rank(query, candidates)
        if ranked is None or ranked[1] < self.min_score:
            return None
        return ranked[0]


DEFAULT_SIMILARITY_POLICY = SimilarityPolicy()
