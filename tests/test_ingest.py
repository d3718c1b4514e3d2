from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from climate_atlas.ingest import load_feature_collection, load_travel_records, records_from_rows, run_ingest
from climate_atlas.models import TravelRecord


def test_load_travel_records_fills_missing_columns(tmp_path: Path):
    p = tmp_path / "travel.csv"
    p.write_text("month,country,category_raw\n july ,Chile / Argentina,Trekking\nMarch,,\n", encoding="utf-8")
    records = load_travel_records(p)
    assert records == [
        TravelRecord(month="July", country="Chile / Argentina", category_raw="Trekking"),
        TravelRecord(month="March"),
    ]


def test_load_travel_records_keeps_unknown_month(cfg):
    records = load_travel_records(cfg["data"]["travel_csv"])
    assert len(records) == 7
    assert [r.month for r in records][-3:] == ["July", "July", "Smarch"]
    assert records[3].country == "Tanzania (Zanzibar)"
    assert records[0].reason_he == ""


def test_extra_unquoted_fields_fold_into_last_column(tmp_path: Path, caplog):
    p = tmp_path / "travel.csv"
    p.write_text(
        "month,destination,country,category_raw,reason_he\n"
        "January,Lapland,Finland,Northern lights,aurora\n"
        "July,Rome,Italy,City,hot, humid\n"
        "May,Kyoto,Japan,Culture,\n",
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="atlas.ingest"):
        records = load_travel_records(p)
    assert len(records) == 3
    assert records[1] == TravelRecord(
        month="July", destination="Rome", country="Italy", category_raw="City", reason_he="hot, humid",
    )
    assert records[2].country == "Japan"
    assert "1 rows had more than 5 fields" in caplog.text


def test_records_from_rows_handles_none_and_nan():
    rows = [{"month": "may", "country": None, "category_raw": float("nan"), "destination": 3}]
    assert records_from_rows(rows) == [TravelRecord(month="May", destination="3")]


def test_missing_inputs_raise(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_travel_records(tmp_path / "nope.csv")
    with pytest.raises(FileNotFoundError):
        load_feature_collection(tmp_path / "nope.geojson")


@pytest.mark.parametrize("text", ["[]", '{"type": "FeatureCollection"}', "{not json"])
def test_invalid_collection_raises_value_error(tmp_path: Path, text: str):
    p = tmp_path / "bad.geojson"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_feature_collection(p)


def test_run_ingest(cfg, caplog):
    with caplog.at_level(logging.WARNING, logger="atlas.ingest"):
        art = run_ingest(cfg)
    assert art["stage"] == "ingest"
    assert art["num_records"] == 7
    assert art["num_features"] == 7
    assert json.dumps(art["feature_collection"])
    assert "1 rows have an unrecognized month" in caplog.text
