"""
Tests for the POI catalog and catalog loading.
"""

import json

import pytest

from poiclaim.catalog import (
    DEFAULT_POIS,
    POI,
    CatalogError,
    POICatalog,
    load_catalog,
    parse_catalog,
)


class TestPOI:
    """Tests for the POI value type."""

    def test_display_name_is_first_alias(self):
        poi = POI("Tisy Power Plant T4", ("Tisy", "Power Plant"))
        assert poi.display_name == "Tisy"

    def test_display_name_falls_back_to_id(self):
        poi = POI("Airdrop", ())
        assert poi.display_name == "Airdrop"

    def test_names_lists_id_first(self):
        poi = POI("Kamensk Heli Depot T3", ("Kamensk", "Kamensk Heli"))
        assert poi.names == ("Kamensk Heli Depot T3", "Kamensk", "Kamensk Heli")

    def test_poi_is_immutable(self):
        poi = POI("Tisy Power Plant T4", ("Tisy",))
        with pytest.raises(AttributeError):
            poi.id = "Other"


class TestPOICatalog:
    """Tests for catalog construction and lookups."""

    def test_preserves_declaration_order(self, small_catalog):
        assert small_catalog.ids == [
            "Tisy Power Plant T4",
            "Balota Warehouse T1",
            "Airdrop (Active Now)",
        ]

    def test_excluded_ids(self, small_catalog):
        assert small_catalog.excluded_ids == {"Airdrop (Active Now)"}

    def test_lookup(self, small_catalog):
        assert "Tisy Power Plant T4" in small_catalog
        assert small_catalog.get("Nope") is None
        assert small_catalog.display_name("Balota Warehouse T1") == "Balota"

    def test_unknown_id_raises(self, small_catalog):
        with pytest.raises(CatalogError):
            small_catalog["Nope"]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogError, match="Duplicate"):
            POICatalog([POI("A", ()), POI("A", ("Other",))])

    def test_empty_catalog_rejected(self):
        with pytest.raises(CatalogError):
            POICatalog([])

    def test_blank_id_rejected(self):
        with pytest.raises(CatalogError):
            POICatalog([POI("  ", ("x",))])

    def test_default_catalog(self, catalog):
        assert len(catalog) == len(DEFAULT_POIS)
        assert catalog.display_name("Tisy Power Plant T4") == "Tisy"
        assert catalog["Heli Crash (Active Now)"].position is None
        assert catalog["Tisy Power Plant T4"].position is not None


class TestLoadCatalog:
    """Tests for JSON catalog loading."""

    def test_none_returns_default(self):
        assert len(load_catalog(None)) == len(DEFAULT_POIS)

    def test_load_list_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([
            {"id": "Green Mountain", "aliases": ["Green Mtn", "GM"], "position": [3700, 400, 6000]},
            {"id": "Airdrop", "aliases": ["Drop"], "excluded": True},
        ]))

        catalog = load_catalog(path)

        assert catalog.ids == ["Green Mountain", "Airdrop"]
        assert catalog["Green Mountain"].aliases == ("Green Mtn", "GM")
        assert catalog["Green Mountain"].position == (3700.0, 400.0, 6000.0)
        assert catalog.excluded_ids == {"Airdrop"}

    def test_load_object_with_pois_key(self):
        catalog = parse_catalog({"pois": [{"id": "NWAF", "aliases": ["Airfield"]}]})
        assert catalog.ids == ["NWAF"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)

    def test_invalid_entry(self):
        with pytest.raises(CatalogError, match="Invalid catalog entry"):
            parse_catalog([{"aliases": ["no id"]}])

    def test_blank_alias_rejected(self):
        with pytest.raises(CatalogError):
            parse_catalog([{"id": "NWAF", "aliases": ["  "]}])

    def test_wrong_top_level_type(self):
        with pytest.raises(CatalogError):
            parse_catalog("NWAF")
