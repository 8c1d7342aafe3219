"""
Static POI catalog.

A POI has a canonical identifier (used in claim announcements), an ordered
list of display aliases (the first is shown in "check claims" listings),
an exclusion flag and an optional map position for proximity checks.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

Position = tuple[float, float, float]


class CatalogError(Exception):
    """Raised when a catalog definition is invalid."""

    pass


@dataclass(frozen=True)
class POI:
    """A claimable point of interest."""

    id: str
    aliases: tuple[str, ...]
    excluded: bool = False
    position: Optional[Position] = None

    @property
    def display_name(self) -> str:
        """Primary display form (first alias, or the id when there are none)."""
        return self.aliases[0] if self.aliases else self.id

    @property
    def names(self) -> tuple[str, ...]:
        """Identifier followed by every alias, in declaration order."""
        return (self.id,) + self.aliases


class POICatalog:
    """
    Immutable, ordered collection of POIs.

    Iteration and `ids` follow declaration order, which is also the order
    used when listing available POIs.
    """

    def __init__(self, pois: Iterable[POI]):
        self._pois: dict[str, POI] = {}
        for poi in pois:
            if not poi.id or not poi.id.strip():
                raise CatalogError("POI id must be a non-empty string")
            if poi.id in self._pois:
                raise CatalogError(f"Duplicate POI id: {poi.id}")
            self._pois[poi.id] = poi

        if not self._pois:
            raise CatalogError("Catalog must contain at least one POI")

        logger.debug(f"Loaded catalog with {len(self._pois)} POIs")

    def __iter__(self) -> Iterator[POI]:
        return iter(self._pois.values())

    def __len__(self) -> int:
        return len(self._pois)

    def __contains__(self, poi_id: object) -> bool:
        return poi_id in self._pois

    def get(self, poi_id: str) -> Optional[POI]:
        return self._pois.get(poi_id)

    def __getitem__(self, poi_id: str) -> POI:
        try:
            return self._pois[poi_id]
        except KeyError:
            raise CatalogError(f"Unknown POI: {poi_id}") from None

    @property
    def ids(self) -> list[str]:
        return list(self._pois)

    @property
    def excluded_ids(self) -> set[str]:
        return {poi.id for poi in self._pois.values() if poi.excluded}

    def display_name(self, poi_id: str) -> str:
        return self[poi_id].display_name
