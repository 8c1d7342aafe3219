"""
Load a POI catalog from a JSON file.

File format: a list of entries, or an object with a "pois" list.

    [
        {"id": "Tisy Power Plant T4", "aliases": ["Tisy"], "position": [577.2, 501.8, 13668.6]},
        {"id": "Airdrop (Active Now)", "aliases": ["Airdrop"], "excluded": true}
    ]
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from poiclaim.catalog.defaults import default_catalog
from poiclaim.catalog.poi import POI, CatalogError, POICatalog

logger = logging.getLogger(__name__)


class POIEntry(BaseModel):
    """One catalog entry as declared in the JSON file."""

    id: str = Field(..., min_length=1, description="Canonical POI identifier")
    aliases: list[str] = Field(default_factory=list, description="Display aliases, primary first")
    excluded: bool = Field(default=False, description="Hide from 'check claims' listings")
    position: Optional[tuple[float, float, float]] = Field(
        default=None, description="World position [x, y, z] in metres"
    )

    @field_validator("aliases")
    @classmethod
    def strip_aliases(cls, v: list[str]) -> list[str]:
        aliases = [alias.strip() for alias in v]
        if any(not alias for alias in aliases):
            raise ValueError("aliases must be non-empty strings")
        return aliases

    def to_poi(self) -> POI:
        return POI(
            id=self.id.strip(),
            aliases=tuple(self.aliases),
            excluded=self.excluded,
            position=self.position,
        )


def parse_catalog(data: Any) -> POICatalog:
    """
    Build a catalog from decoded JSON data.

    Raises:
        CatalogError: If the data does not describe a valid catalog
    """
    if isinstance(data, dict):
        data = data.get("pois")
    if not isinstance(data, list):
        raise CatalogError("Catalog must be a list of POI entries or an object with a 'pois' list")

    try:
        entries = [POIEntry.model_validate(item) for item in data]
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog entry: {e}") from e

    return POICatalog(entry.to_poi() for entry in entries)


def load_catalog(path: Optional[Union[str, Path]] = None) -> POICatalog:
    """
    Load the POI catalog.

    Args:
        path: JSON catalog file. The built-in catalog is used when None.

    Raises:
        CatalogError: If the file is missing or invalid
    """
    if path is None:
        return default_catalog()

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"Catalog file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file {path} is not valid JSON: {e}") from e

    catalog = parse_catalog(data)
    logger.info(f"Loaded {len(catalog)} POIs from {path}")
    return catalog
