"""
Niche Competitor Finder

Discovers verified competitor stores for an e-commerce niche:
1. Normalizes a free-text niche onto a curated seed catalog
2. Collects candidates from the catalog and from Claude
3. Probes candidates for liveness and high-ticket dropshipping signals
4. Returns up to five verified competitors under a wall-clock deadline
"""

__version__ = "0.1.0"
