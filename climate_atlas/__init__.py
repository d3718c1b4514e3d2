"""
Climate Atlas: core Python package

Reconciles free-text travel country names with the canonical names of a
countries FeatureCollection and tells, per month, which countries to highlight
and with which climate variant:

1) normalize  → comparable country keys, composite-field tokenization
2) aliases    → informal / historical names → canonical names
3) classify   → category label → climate type (and travel category)
4) aggregate  → month → country → climate summary
5) variants   → climate summary → display variant
6) geo        → highlight sets, label centroids, feature ↔ climate-key matching

`atlas.ClimateAtlas` bundles these for one dataset; `ingest`, `report` and the
Typer `cli` are the file-facing layer around it.

Author: Climate Atlas
License: MIT
"""
__version__ = "0.3.0"

__all__ = [
    "cli",
    "ingest",
    "normalize",
    "aliases",
    "classify",
    "aggregate",
    "variants",
    "geo",
    "atlas",
    "report",
]
