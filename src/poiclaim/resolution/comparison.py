"""
String similarity metrics for POI name matching.

All metrics return a score in [0, 1] where 1.0 means identical.
Inputs are expected to be normalized with `normalize_text` first.
"""

import re
from collections import Counter
from enum import Enum

import jellyfish

_WHITESPACE = re.compile(r"\s+")


class SimilarityMetric(str, Enum):
    """Available similarity metrics."""

    DICE = "dice"  # Sorensen-Dice over character bigrams
    LEVENSHTEIN = "levenshtein"  # 1 - edit distance / longer length
    JARO_WINKLER = "jaro_winkler"


def normalize_text(text: str) -> str:
    """Trim, lower-case and collapse whitespace runs to a single space."""
    return _WHITESPACE.sub(" ", text.strip().lower())


def dice_coefficient(s1: str, s2: str) -> float:
    """
    Sorensen-Dice coefficient of the character bigrams of two strings.

    Whitespace is ignored, so "oil rig" and "oilrig" are identical.
    """
    a = _WHITESPACE.sub("", s1)
    b = _WHITESPACE.sub("", s2)

    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    bigrams_a = Counter(a[i : i + 2] for i in range(len(a) - 1))
    bigrams_b = Counter(b[i : i + 2] for i in range(len(b) - 1))
    overlap = sum((bigrams_a & bigrams_b).values())

    return 2.0 * overlap / (len(a) + len(b) - 2)


def levenshtein_normalized(s1: str, s2: str) -> float:
    """Compute normalized Levenshtein similarity (1 - normalized distance)."""
    if s1 == s2:
        return 1.0
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 0.0
    return 1.0 - jellyfish.levenshtein_distance(s1, s2) / max_len


def jaro_winkler(s1: str, s2: str) -> float:
    """Compute Jaro-Winkler similarity."""
    if not s1 or not s2:
        return 1.0 if s1 == s2 else 0.0
    return jellyfish.jaro_winkler_similarity(s1, s2)


_METRICS = {
    SimilarityMetric.DICE: dice_coefficient,
    SimilarityMetric.LEVENSHTEIN: levenshtein_normalized,
    SimilarityMetric.JARO_WINKLER: jaro_winkler,
}


def similarity(s1: str, s2: str, metric: SimilarityMetric = SimilarityMetric.DICE) -> float:
    """Score two normalized strings with the given metric."""
    return _METRICS[SimilarityMetric(metric)](s1, s2)
