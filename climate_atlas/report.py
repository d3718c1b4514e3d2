# FILE: climate_atlas/report.py
# -------------------------------------------------------------------------------------------------
# Report: per-month climate overview + label GeoJSON
#
# Responsibilities
# ----------------
# 1) Load travel rows + countries collection (via ingest).
# 2) Build the atlas (climate map, feature index) from config-driven tables.
# 3) Write collection artifacts:
#    - Month overview JSON ............... outputs/climate_overview.json
#    - Label points GeoJSON .............. outputs/country_labels.geojson
#    - Summary JSON ...................... outputs/report_summary.json
#
# Expected Config (subset)
# ------------------------
# cfg["run"]["output_dir"]          : str
# cfg["data"]["travel_csv"]         : str
# cfg["data"]["countries_geojson"]  : str
# cfg["aliases"], cfg["climate"]    : see utils/config_loader.DEFAULT_CONFIG
# -------------------------------------------------------------------------------------------------

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .aggregate import count_by_category
from .atlas import AtlasTables, ClimateAtlas
from .ingest import run_ingest
from .models import MONTHS
from .utils.logging_utils import get_logger


def _utc_iso() -> str:
    """Return current UTC timestamp as ISO-8601 (Z) string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")


def build_overview(atlas: ClimateAtlas) -> Dict[str, List[Dict[str, Any]]]:
    """month → overview rows, every calendar month present (possibly empty)."""
    return {m: [row.to_dict() for row in atlas.month_overview(m)] for m in MONTHS}


def labels_geojson(atlas: ClimateAtlas) -> Dict[str, Any]:
    """One Point feature per (month, labelled country); coordinates are [lng, lat]."""
    features: List[Dict[str, Any]] = []
    for month in MONTHS:
        for row in atlas.month_overview(month):
            if row.centroid is None:
                continue
            lat, lng = row.centroid
            features.append({
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [lng, lat]},
                "properties": {
                    "month": month,
                    "display_name": row.display_name,
                    "variant": row.variant.value if row.variant else None,
                },
            })
    return {"type": "FeatureCollection", "features": features}


def run_report(cfg: Dict, prev: Optional[Dict] = None) -> Dict:
    """
    Build the atlas and write report artifacts.

    `prev` may carry an ingest artifact dict to avoid reloading inputs.
    """
    log = get_logger("atlas.report")
    out_dir = Path(cfg["run"]["output_dir"]).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    ingested = prev if prev and "records" in prev else run_ingest(cfg)
    atlas = ClimateAtlas(
        records=ingested["records"],
        feature_collection=ingested["feature_collection"],
        tables=AtlasTables.from_config(cfg),
    )

    overview = build_overview(atlas)
    overview_path = out_dir / "climate_overview.json"
    _write_json(overview_path, overview)

    labels = labels_geojson(atlas)
    geojson_path = out_dir / "country_labels.geojson"
    _write_json(geojson_path, labels)

    categories = count_by_category(atlas.records)
    summary = {
        "generated_at": _utc_iso(),
        "num_records": len(atlas.records),
        "num_features": len(atlas.features),
        "months_with_data": atlas.months,
        "highlighted_per_month": {m: len(rows) for m, rows in overview.items()},
        "records_per_category": {k.value: v for k, v in sorted(categories.items(), key=lambda kv: kv[0].value)},
        "artifacts": {"overview": str(overview_path), "geojson": str(geojson_path)},
    }
    summary_path = out_dir / "report_summary.json"
    _write_json(summary_path, summary)

    log.info(
        f"Report: {sum(summary['highlighted_per_month'].values())} highlighted country-months, "
        f"{len(labels['features'])} labels → {out_dir}"
    )
    return {
        "stage": "report",
        "overview": str(overview_path),
        "geojson": str(geojson_path),
        "summary": str(summary_path),
        "num_labels": len(labels["features"]),
    }
