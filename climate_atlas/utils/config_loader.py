"""
Config loader & resolver

- load_yaml(path): loads YAML into dict (requires PyYAML)
- resolve_config(path, overrides_json): loads, applies optional JSON overrides, fills defaults

We avoid hard dependencies beyond PyYAML (very common) and standard library.
"""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import yaml
except ImportError as e:
    raise ImportError(
        "PyYAML is required to load configs. Install with: pip install pyyaml"
    ) from e


DEFAULT_CONFIG: Dict[str, Any] = {
    "run": {"output_dir": "outputs"},
    "data": {
        "travel_csv": "data/travel_by_month_clean.csv",
        "countries_geojson": "data/countries.geojson",
    },
    "aliases": {"include_builtin": True, "extra": {}},
    "climate": {"keywords": {}},
    "logging": {"level": "INFO", "to_file": False, "to_json": False, "dir": "logs"},
}


def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}


def deep_merge(a: Dict, b: Dict) -> Dict:
    """Recursively merge dict b into a (returns a new dict)."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def resolve_config(path: str | Path | None, overrides_json: Optional[str] = None) -> Dict:
    """
    Load config (or start from defaults when `path` is None), apply overrides, fill defaults.

    Relative data paths are resolved against the config file's directory.
    """
    cfg = load_yaml(path) if path else {}
    if overrides_json:
        # Accept a JSON string (e.g. {"data":{"travel_csv":"other.csv"}})
        overrides = json.loads(overrides_json)
        if not isinstance(overrides, dict):
            raise ValueError("Config overrides must be a JSON object")
        cfg = deep_merge(cfg, overrides)
    # Sections absent from the file must not alias DEFAULT_CONFIG
    cfg = deep_merge(copy.deepcopy(DEFAULT_CONFIG), cfg)

    if path:
        base = Path(path).resolve().parent
        data = dict(cfg["data"])
        for key in ("travel_csv", "countries_geojson"):
            if data.get(key) and not Path(data[key]).is_absolute():
                data[key] = str((base / data[key]).as_posix())
        cfg["data"] = data
    return cfg
