"""
POI catalog: the static set of claimable locations.
"""

from poiclaim.catalog.poi import POI, POICatalog, CatalogError, Position
from poiclaim.catalog.defaults import DEFAULT_POIS, default_catalog
from poiclaim.catalog.loader import POIEntry, load_catalog, parse_catalog

__all__ = [
    "POI",
    "POICatalog",
    "CatalogError",
    "Position",
    "DEFAULT_POIS",
    "default_catalog",
    "POIEntry",
    "load_catalog",
    "parse_catalog",
]
