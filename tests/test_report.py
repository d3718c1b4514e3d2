from __future__ import annotations

import json
from pathlib import Path

from climate_atlas.ingest import run_ingest
from climate_atlas.models import MONTHS
from climate_atlas.report import run_report


def test_report_outputs(tmp_path: Path, cfg):
    cfg["run"]["output_dir"] = str((tmp_path / "outputs").as_posix())
    art = run_report(cfg)
    assert art["stage"] == "report"
    # January 4, February 1; the Netherlands has no centroid
    assert art["num_labels"] == 5

    overview = json.loads(Path(art["overview"]).read_text(encoding="utf-8"))
    assert list(overview) == list(MONTHS)
    assert [r["display_name"] for r in overview["January"]] == [
        "Argentina", "Chile", "Finland", "United States of America",
    ]
    assert overview["July"] == [{
        "key": "netherlands",
        "display_name": "Netherlands",
        "climate_key": "netherlands",
        "variant": "mild",
        "centroid": None,
    }]
    assert overview["March"] == []

    geo = json.loads(Path(art["geojson"]).read_text(encoding="utf-8"))
    assert geo["type"] == "FeatureCollection"
    tz = [f for f in geo["features"] if f["properties"]["month"] == "February"]
    assert len(tz) == 1
    assert tz[0]["properties"] == {
        "month": "February", "display_name": "United Republic of Tanzania", "variant": "summer",
    }
    # Point coordinates are [lng, lat]
    assert tz[0]["geometry"]["coordinates"] == [34.0, -6.0]

    summary = json.loads(Path(art["summary"]).read_text(encoding="utf-8"))
    assert summary["num_records"] == 7
    assert summary["months_with_data"] == ["January", "February", "July"]
    assert summary["highlighted_per_month"]["January"] == 4
    assert summary["records_per_category"] == {
        "beach": 2, "city": 1, "other": 1, "polar": 1, "ski": 1, "trekking": 1,
    }


def test_report_reuses_ingest_artifact(tmp_path: Path, cfg):
    cfg["run"]["output_dir"] = str((tmp_path / "outputs").as_posix())
    prev = run_ingest(cfg)
    prev["records"] = prev["records"][:1]
    art = run_report(cfg, prev=prev)
    assert art["num_labels"] == 1
