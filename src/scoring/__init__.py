"""
Scoring Module

Provides the scoring calculations used during competitor discovery:

1. **Niche Similarity** (0-1)
   Weighted Levenshtein/Jaccard score used to route free-text niches onto
   catalog keys. The weights live in SimilarityPolicy and can be swapped.

2. **Dropshipping Score** (0+)
   Name/domain/description heuristic ranking generated store candidates by
   how much they look like a multi-brand reseller.

Example Usage:
    from src.scoring import SimilarityPolicy, levenshtein_distance

    policy = SimilarityPolicy(levenshtein_weight=0.6, jaccard_weight=0.4)
    policy.best_match("quadcopter", ["drones", "quadcopters"])  # "quadcopters"
"""

from .similarity import (
    levenshtein_distance,
    levenshtein_similarity,
    jaccard_token_similarity,
    SimilarityPolicy,
    DEFAULT_SIMILARITY_POLICY,
)
from .dropshipping import dropshipping_score

__all__ = [
    # Similarity
    "levenshtein_distance",
    "levenshtein_similarity",
    "jaccard_token_similarity",
    "SimilarityPolicy",
    "DEFAULT_SIMILARITY_POLICY",
    # Dropshipping
    "dropshipping_score",
]
