from __future__ import annotations

from climate_atlas.atlas import AtlasTables, ClimateAtlas
from climate_atlas.models import ClimateVariant, TravelRecord


def test_months_skip_unclassified_only_months(atlas):
    # July holds only a "Business conference" row
    assert atlas.months == ["January", "February"]


def test_variant_for_merges_informal_and_formal_names(atlas):
    assert atlas.variant_for("January", "USA") is ClimateVariant.SUMMER_WINTER
    assert atlas.variant_for("January", "United States of America") is ClimateVariant.SUMMER_WINTER
    assert atlas.variant_for("February", "Tanzania") is ClimateVariant.SUMMER
    assert atlas.variant_for("July", "Iceland") is None
    assert atlas.variant_for("Smarch", "USA") is None


def test_highlight_and_labels(atlas):
    assert atlas.highlighted("January") == {"united states of america", "finland", "chile", "argentina"}
    assert [l.display_name for l in atlas.labels("January")] == [
        "Argentina", "Chile", "Finland", "United States of America",
    ]
    assert atlas.highlighted("February") == {"united republic of tanzania"}
    assert atlas.highlighted("July") == set()


def test_feature_variant_styles_collection_names(atlas):
    assert atlas.feature_variant("January", "United States of America") is ClimateVariant.SUMMER_WINTER
    assert atlas.feature_variant("January", "Chile") is ClimateVariant.MILD
    assert atlas.feature_variant("January", "Netherlands") is None
    assert atlas.feature_variant(None, "Chile") is None


def test_month_overview_rows(atlas):
    rows = atlas.month_overview("january")
    assert [r.display_name for r in rows] == ["Argentina", "Chile", "Finland", "United States of America"]
    finland = rows[2]
    assert finland.variant is ClimateVariant.WINTER
    assert finland.climate_key == "finland"
    assert finland.centroid == (65.0, 25.0)
    d = finland.to_dict()
    assert d["variant"] == "winter" and d["centroid"] == [65.0, 25.0]
    assert atlas.month_overview("Smarch") == []


def test_rebuild_replaces_map_wholesale(atlas):
    atlas.rebuild([TravelRecord(month="March", country="Finland", category_raw="City")])
    assert atlas.months == ["March"]
    assert atlas.variant_for("January", "USA") is None
    assert atlas.variant_for("March", "Finland") is ClimateVariant.MILD


def test_overview_row_without_centroid(collection):
    atlas = ClimateAtlas(
        records=[TravelRecord(month="July", country="Holland", category_raw="City")],
        feature_collection=collection,
        tables=AtlasTables.from_config({"aliases": {"extra": {"holland": "Netherlands"}}}),
    )
    rows = atlas.month_overview("July")
    assert len(rows) == 1 and rows[0].display_name == "Netherlands"
    assert rows[0].centroid is None
    assert atlas.labels("July") == []


def test_load_geography_swaps_index(atlas):
    atlas.load_geography(None)
    assert len(atlas.features) == 0
    assert atlas.highlighted("January") == set()
    # the climate map does not depend on geography
    assert atlas.variant_for("January", "Finland") is ClimateVariant.WINTER


def test_tables_from_config_keyword_override(records, collection):
    tables = AtlasTables.from_config({"climate": {"keywords": {"mild": ["conference"]}}})
    atlas = ClimateAtlas(records=records, feature_collection=collection, tables=tables)
    assert atlas.variant_for("July", "Iceland") is ClimateVariant.MILD
    # mild group replaced, so "Trekking" no longer classifies
    assert atlas.variant_for("January", "Chile") is None


def test_tables_without_builtin_aliases(records):
    tables = AtlasTables.from_config({"aliases": {"include_builtin": False}})
    atlas = ClimateAtlas(records=records, tables=tables)
    assert atlas.variant_for("January", "USA") is ClimateVariant.SUMMER
    assert atlas.variant_for("January", "United States") is ClimateVariant.WINTER
