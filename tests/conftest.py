"""
Shared pytest fixtures for Climate Atlas tests.

Writes a tiny travel CSV, a countries GeoJSON and an atlas.yaml into tmp_path,
and provides the resolved config dict via climate_atlas.utils.config_loader.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List

import pytest

from climate_atlas.atlas import AtlasTables, ClimateAtlas
from climate_atlas.models import TravelRecord
from climate_atlas.utils.config_loader import resolve_config


_MIN_ATLAS_YAML = """\
run:
  output_dir: "{OUT}"

data:
  travel_csv: "data/travel.csv"
  countries_geojson: "data/countries.geojson"

aliases:
  include_builtin: true
  extra:
    holland: "Netherlands"

logging:
  level: "INFO"
  to_file: false
"""

_TRAVEL_CSV = """\
month,destination,country,category_raw,reason_he
January,Florida Keys,USA,beach,
January,Lapland,Finland,Northern lights,
January,Patagonia,Chile / Argentina,Trekking,
February,Zanzibar,Tanzania (Zanzibar),Beach,
july,Amsterdam,Holland,City,
July,Reykjavik,Iceland,Business conference,
Smarch,Nowhere,Finland,Ski,
"""


def _square(x0: float, y0: float, size: float) -> Dict:
    ring = [[x0, y0], [x0, y0 + size], [x0 + size, y0 + size], [x0 + size, y0]]
    return {"type": "Polygon", "coordinates": [ring]}


def make_collection() -> Dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "properties": {"name": "United States of America"}, "geometry": _square(-100, 30, 10)},
            {"type": "Feature", "properties": {"name": "Finland"}, "geometry": _square(20, 60, 10)},
            {"type": "Feature", "properties": {"name": "Chile"}, "geometry": _square(-75, -40, 4)},
            {"type": "Feature", "properties": {"name": "Argentina"}, "geometry": _square(-65, -40, 6)},
            {"type": "Feature", "properties": {"name": "United Republic of Tanzania"}, "geometry": _square(30, -10, 8)},
            {"type": "Feature", "properties": {"name": "Netherlands"}, "geometry": None},
            {"type": "Feature", "properties": {"name": "Iceland"}, "geometry": _square(-24, 63, 4)},
        ],
    }


@pytest.fixture(scope="function")
def collection() -> Dict:
    return make_collection()


@pytest.fixture(scope="function")
def records() -> List[TravelRecord]:
    return [
        TravelRecord(month="January", destination="Florida Keys", country="USA", category_raw="beach"),
        TravelRecord(month="January", destination="Aspen", country="United States", category_raw="Ski & snow"),
        TravelRecord(month="January", destination="Lapland", country="Finland", category_raw="Northern lights"),
        TravelRecord(month="January", destination="Patagonia", country="Chile / Argentina", category_raw="Trekking"),
        TravelRecord(month="February", destination="Zanzibar", country="Tanzania (Zanzibar)", category_raw="Beach"),
        TravelRecord(month="July", destination="Reykjavik", country="Iceland", category_raw="Business conference"),
    ]


@pytest.fixture(scope="function")
def atlas(records, collection) -> ClimateAtlas:
    return ClimateAtlas(records=records, feature_collection=collection, tables=AtlasTables.default())


@pytest.fixture(scope="function")
def cfg_path(tmp_path: Path) -> Path:
    """Writes atlas.yaml plus data files into tmp_path and returns the YAML path."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "travel.csv").write_text(_TRAVEL_CSV, encoding="utf-8")
    (data_dir / "countries.geojson").write_text(json.dumps(make_collection()), encoding="utf-8")

    out_dir = tmp_path / "outputs"
    text = _MIN_ATLAS_YAML.replace("{OUT}", str(out_dir.as_posix()))
    p = tmp_path / "atlas.yaml"
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture(scope="function")
def cfg(cfg_path: Path) -> Dict:
    """Resolved config for cfg_path (defaults filled, data paths absolute)."""
    return resolve_config(cfg_path)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """CLI commands reinstall root handlers; put the previous ones back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
