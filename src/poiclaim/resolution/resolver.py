"""
Resolve free-text POI references to canonical POI identifiers.

Flow:
1. Normalize: trim, lower-case, collapse whitespace
2. Exact: match against every identifier and alias
3. Fuzzy: best similarity score over identifiers and aliases,
   accepted only at or above the threshold
"""

import logging
from dataclasses import dataclass
from typing import Optional

from poiclaim.catalog import POICatalog
from poiclaim.resolution.comparison import SimilarityMetric, normalize_text, similarity

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.6


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one phrase."""

    poi_id: Optional[str]
    score: float
    match_type: str  # 'exact', 'fuzzy', 'no_match'
    matched_name: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.poi_id is not None


NO_MATCH = ResolutionResult(poi_id=None, score=0.0, match_type="no_match")


@dataclass(frozen=True)
class _Candidate:
    name: str  # normalized identifier or alias
    poi_id: str
    order: int  # catalog declaration order, identifier before aliases


class NameResolver:
    """
    Maps user-typed POI phrases to catalog identifiers.

    Read-only over an immutable catalog, so a single instance can be
    shared across concurrent requests without locking.
    """

    def __init__(
        self,
        catalog: POICatalog,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        metric: SimilarityMetric = SimilarityMetric.DICE,
    ):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Match threshold must be within [0, 1], got {threshold}")

        self.catalog = catalog
        self.threshold = threshold
        self.metric = SimilarityMetric(metric)

        self._exact: dict[str, str] = {}
        candidates: list[_Candidate] = []
        for poi in catalog:
            for name in poi.names:
                normalized = normalize_text(name)
                if not normalized:
                    continue
                owner = self._exact.setdefault(normalized, poi.id)
                if owner != poi.id:
                    logger.warning(
                        f"Name '{name}' is declared by both '{owner}' and '{poi.id}'; "
                        f"exact matches go to '{owner}'"
                    )
                    continue
                candidates.append(_Candidate(normalized, poi.id, len(candidates)))
        self._candidates = tuple(candidates)

    def resolve(self, raw_text: str) -> Optional[str]:
        """Return the canonical POI id for a phrase, or None."""
        return self._match(raw_text).poi_id

    def _match(self, raw_text: str) -> ResolutionResult:
        """Resolve a phrase; the score only decides acceptance and stays internal."""
        text = normalize_text(raw_text or "")
        if not text:
            return NO_MATCH

        poi_id = self._exact.get(text)
        if poi_id is not None:
            return ResolutionResult(poi_id=poi_id, score=1.0, match_type="exact", matched_name=text)

        best: Optional[_Candidate] = None
        best_key: tuple = ()
        for candidate in self._candidates:
            score = similarity(text, candidate.name, self.metric)
            key = (score, self._is_preferred(text, candidate.name), -candidate.order)
            if best is None or key > best_key:
                best, best_key = candidate, key

        if best is None:
            return NO_MATCH

        score = best_key[0]
        if score < self.threshold:
            logger.debug(f"No POI match for '{text}' (best score {score:.3f})")
            return NO_MATCH

        logger.debug(f"Fuzzy matched '{text}' -> '{best.poi_id}' via '{best.name}' ({score:.3f})")
        return ResolutionResult(
            poi_id=best.poi_id,
            score=score,
            match_type="fuzzy",
            matched_name=best.name,
        )

    @staticmethod
    def _is_preferred(text: str, name: str) -> bool:
        """Tie-break: one string is a prefix of the other, or first tokens agree."""
        if name.startswith(text) or text.startswith(name):
            return True
        return name.split(" ", 1)[0] == text.split(" ", 1)[0]
