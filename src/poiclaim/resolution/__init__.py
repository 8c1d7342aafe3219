"""
Name resolution for POI phrases typed in chat.

- Comparison: string similarity metrics
- Resolver: exact, alias and fuzzy matching against the catalog
"""

from poiclaim.resolution.comparison import (
    SimilarityMetric,
    dice_coefficient,
    jaro_winkler,
    levenshtein_normalized,
    normalize_text,
    similarity,
)
from poiclaim.resolution.resolver import (
    DEFAULT_MATCH_THRESHOLD,
    NameResolver,
)

__all__ = [
    # Comparison
    "SimilarityMetric",
    "dice_coefficient",
    "jaro_winkler",
    "levenshtein_normalized",
    "normalize_text",
    "similarity",
    # Resolver
    "DEFAULT_MATCH_THRESHOLD",
    "NameResolver",
]
