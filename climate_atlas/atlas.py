"""
Climate Atlas facade

Ties the pieces together the way the map screen consumes them:

1) Lookup tables (aliases, climate keyword groups) → built once (`AtlasTables`)
2) Travel records → month/country climate map (rebuilt wholesale on new data)
3) Countries collection → feature index (built once per loaded geography)
4) Per-month queries → variant, highlight set, labels, overview rows

Everything here is in-memory and side-effect free; loading files is the job of
`ingest.py`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from .aggregate import build_climate_map
from .aliases import DEFAULT_ALIASES, AliasTable, build_alias_table
from .classify import DEFAULT_CLIMATE_GROUPS, KeywordGroup, climate_groups_from_config
from .geo import (
    GeoFeatureIndex,
    build_feature_index,
    country_labels,
    find_climate_key,
    highlighted_countries,
)
from .models import MONTHS, ClimateVariant, CountryLabel, MonthCountryClimateMap, TravelRecord, canonical_month
from .variants import climate_variant_for, resolve_variant


@dataclass(frozen=True)
class AtlasTables:
    """Immutable lookup tables shared by every query."""
    aliases: AliasTable
    climate_groups: Tuple[KeywordGroup, ...] = DEFAULT_CLIMATE_GROUPS

    @classmethod
    def default(cls) -> "AtlasTables":
        return cls(aliases=build_alias_table())

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "AtlasTables":
        """Build tables from cfg["aliases"] and cfg["climate"]["keywords"]."""
        alias_cfg = cfg.get("aliases") or {}
        base = DEFAULT_ALIASES if alias_cfg.get("include_builtin", True) else {}
        aliases = build_alias_table(base, extra=alias_cfg.get("extra") or {})
        groups = climate_groups_from_config((cfg.get("climate") or {}).get("keywords"))
        return cls(aliases=aliases, climate_groups=groups)


@dataclass
class OverviewRow:
    """One highlighted country for a month, ready for styling and labelling."""
    key: str
    display_name: str
    climate_key: Optional[str]
    variant: Optional[ClimateVariant]
    centroid: Optional[Tuple[float, float]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "display_name": self.display_name,
            "climate_key": self.climate_key,
            "variant": self.variant.value if self.variant else None,
            "centroid": list(self.centroid) if self.centroid else None,
        }


@dataclass
class ClimateAtlas:
    """In-memory climate atlas over one travel dataset and one countries collection."""
    records: Sequence[TravelRecord] = ()
    feature_collection: Optional[Mapping[str, Any]] = None
    tables: AtlasTables = field(default_factory=AtlasTables.default)
    climate_map: MonthCountryClimateMap = field(init=False)
    features: GeoFeatureIndex = field(init=False)

    def __post_init__(self) -> None:
        self.records = tuple(self.records)
        self.climate_map = build_climate_map(self.records, self.tables.aliases, self.tables.climate_groups)
        self.features = build_feature_index(self.feature_collection)

    # ---------------- Rebuilds ----------------
    def rebuild(self, records: Sequence[TravelRecord]) -> None:
        """Replace the travel dataset and recompute the climate map from scratch."""
        self.records = tuple(records)
        self.climate_map = build_climate_map(self.records, self.tables.aliases, self.tables.climate_groups)

    def load_geography(self, feature_collection: Optional[Mapping[str, Any]]) -> None:
        self.feature_collection = feature_collection
        self.features = build_feature_index(feature_collection)

    # ---------------- Queries ----------------
    @property
    def months(self) -> List[str]:
        """Months that have at least one classified country, in calendar order."""
        return [m for m in MONTHS if self.climate_map.get(m)]

    def variant_for(self, month: Optional[str], country: str) -> Optional[ClimateVariant]:
        return climate_variant_for(month, country, self.climate_map, self.tables.aliases)

    def highlighted(self, month: Optional[str]) -> Set[str]:
        return highlighted_countries(month, self.climate_map, self.features, self.tables.aliases)

    def labels(self, month: Optional[str]) -> List[CountryLabel]:
        return country_labels(month, self.climate_map, self.features, self.tables.aliases)

    def feature_variant(self, month: Optional[str], feature_name: str) -> Optional[ClimateVariant]:
        """Variant that styles a feature of the collection (None = neutral style)."""
        m = canonical_month(month)
        if m is None:
            return None
        month_map = self.climate_map.get(m, {})
        key = find_climate_key(feature_name, month_map, self.tables.aliases)
        return resolve_variant(month_map.get(key)) if key is not None else None

    def month_overview(self, month: Optional[str]) -> List[OverviewRow]:
        """Highlighted features of `month` with their variant and centroid, sorted by name."""
        m = canonical_month(month)
        if m is None:
            return []
        month_map = self.climate_map.get(m, {})
        rows: List[OverviewRow] = []
        for key in self.highlighted(m):
            feat = self.features.get(key)
            if feat is None:
                continue
            climate_key = find_climate_key(feat.display_name, month_map, self.tables.aliases)
            variant = resolve_variant(month_map.get(climate_key)) if climate_key is not None else None
            rows.append(OverviewRow(
                key=key,
                display_name=feat.display_name,
                climate_key=climate_key,
                variant=variant,
                centroid=feat.centroid,
            ))
        rows.sort(key=lambda r: r.display_name)
        return rows
