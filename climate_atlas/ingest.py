"""
Ingest: travel CSV & countries GeoJSON → in-memory structures

This stage:
- Reads the travel-by-month sheet into immutable TravelRecord objects.
  Missing columns and blank cells become "" (rows are never rejected).
- Reads the countries FeatureCollection as a plain dict and checks its shape.

The engine itself never touches files; everything it needs is produced here.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from .models import TravelRecord, canonical_month
from .utils.logging_utils import get_logger

TRAVEL_COLUMNS = ("month", "destination", "country", "category_raw", "reason_he")


def _to_str(x: Any) -> str:
    if x is None:
        return ""
    try:
        if pd.isna(x):
            return ""
    except (TypeError, ValueError):
        pass
    return str(x).strip()


def records_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[TravelRecord]:
    """Convert dict rows (CSV-like) into TravelRecord objects."""
    records: List[TravelRecord] = []
    for row in rows:
        values = {col: _to_str(row.get(col)) for col in TRAVEL_COLUMNS}
        values["month"] = canonical_month(values["month"]) or values["month"]
        records.append(TravelRecord(**values))
    return records


def load_travel_records(path: str | Path) -> List[TravelRecord]:
    """Read the travel CSV (UTF-8, header row) into TravelRecord objects."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Travel CSV not found: {p}")
    width = len(pd.read_csv(p, nrows=0, encoding="utf-8-sig").columns)
    overflowing: List[int] = []

    def _fold_extra_fields(fields: List[str]) -> List[str]:
        # Unquoted commas in the last column ("hot, humid") end up as extra fields
        overflowing.append(len(fields))
        return fields[: width - 1] + [",".join(fields[width - 1:])]

    df = pd.read_csv(
        p,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
        engine="python",
        on_bad_lines=_fold_extra_fields,
    )
    if overflowing:
        get_logger("atlas.ingest").warning(
            f"{p.name}: {len(overflowing)} rows had more than {width} fields; "
            f"extra fields were folded into the last column"
        )
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    for col in TRAVEL_COLUMNS:
        if col not in df.columns:
            df[col] = ""
    return records_from_rows(df[list(TRAVEL_COLUMNS)].to_dict(orient="records"))


def load_feature_collection(path: str | Path) -> Dict[str, Any]:
    """Read a countries GeoJSON FeatureCollection."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Countries GeoJSON not found: {p}")
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise ValueError(f"{p} is not a FeatureCollection (expected an object with a 'features' list)")
    return data


def run_ingest(cfg: Dict) -> Dict:
    """Load both inputs named in cfg["data"]. Returns an artifact dict holding them."""
    log = get_logger("atlas.ingest")
    data_cfg = cfg["data"]

    records = load_travel_records(data_cfg["travel_csv"])
    collection = load_feature_collection(data_cfg["countries_geojson"])

    unknown_months = sum(1 for r in records if canonical_month(r.month) is None)
    if unknown_months:
        log.warning(f"Ingest: {unknown_months} rows have an unrecognized month and will be ignored")
    log.info(
        f"Ingest loaded {len(records)} travel rows and {len(collection['features'])} features "
        f"← {data_cfg['travel_csv']}, {data_cfg['countries_geojson']}"
    )
    return {
        "stage": "ingest",
        "records": records,
        "feature_collection": collection,
        "num_records": len(records),
        "num_features": len(collection["features"]),
    }
