"""
Geo matching: travel country keys ↔ feature names of a countries collection

The feature collection is loaded elsewhere (see `ingest.load_feature_collection`)
and handed over as a parsed GeoJSON-like dict. From it we derive a
`GeoFeatureIndex` once, then answer per-month questions:

- which features to highlight (`highlighted_countries`)
- where to put their labels (`country_labels`)
- which climate-map key styles a given feature (`find_climate_key`)

Matching is best effort. A name that fails the exact, normalized and alias
checks is simply not highlighted; that is not an error.

Complexity: `match_feature_name` scans every feature for the normalized and
alias steps, O(features) per query.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set

from .aliases import AliasTable
from .models import ClimateSummary, CountryLabel, GeoFeature, MonthCountryClimateMap, canonical_month
from .normalize import normalize_country_key
from .utils.geospatial import vertex_centroid
from .utils.logging_utils import get_logger


@dataclass(frozen=True)
class GeoFeatureIndex:
    """Normalized feature name → GeoFeature, in collection order."""
    features: Mapping[str, GeoFeature] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[GeoFeature]:
        return iter(self.features.values())

    def get(self, key: str) -> Optional[GeoFeature]:
        return self.features.get(key)


def build_feature_index(collection: Optional[Mapping[str, Any]]) -> GeoFeatureIndex:
    """
    Derive a GeoFeatureIndex from a parsed FeatureCollection.

    Features without a usable name are skipped. When two features normalize to the
    same key the later one wins.
    """
    log = get_logger("atlas.geo")
    features: Dict[str, GeoFeature] = {}
    if not collection:
        return GeoFeatureIndex(MappingProxyType(features))

    no_centroid = 0
    for feat in collection.get("features") or ():
        if not isinstance(feat, Mapping):
            continue
        props = feat.get("properties") or {}
        raw_name = props.get("name")
        name = "" if raw_name is None else str(raw_name)
        key = normalize_country_key(name)
        if not key:
            continue
        centroid = vertex_centroid(feat.get("geometry"))
        if centroid is None:
            no_centroid += 1
        features[key] = GeoFeature(key=key, display_name=name, centroid=centroid)

    log.debug("Feature index: %d named features (%d without centroid)", len(features), no_centroid)
    return GeoFeatureIndex(MappingProxyType(features))


def match_feature_name(query: str, index: GeoFeatureIndex, aliases: AliasTable) -> Optional[str]:
    """
    Resolve a country name to a feature display name.

    Tried in order, first success wins:
      (a) exact string match on display names
      (b) normalized query == normalized feature name   (linear scan)
      (c) alias-resolved query == normalized feature name (linear scan)
    """
    if not query:
        return None
    for feat in index:
        if feat.display_name == query:
            return feat.display_name

    key = normalize_country_key(query)
    if not key:
        return None
    for feat in index:
        if feat.key == key:
            return feat.display_name

    alias = aliases.lookup(key)
    if alias is None:
        return None
    for feat in index:
        if feat.key == alias:
            return feat.display_name
    return None


def highlighted_countries(
    month: Optional[str],
    climate_map: MonthCountryClimateMap,
    index: GeoFeatureIndex,
    aliases: AliasTable,
) -> Set[str]:
    """Normalized feature names reachable from any country key of `month`'s summaries."""
    m = canonical_month(month)
    if m is None:
        return set()
    out: Set[str] = set()
    for country_key in climate_map.get(m, {}):
        name = match_feature_name(country_key, index, aliases)
        if name is not None:
            out.add(normalize_country_key(name))
    return out


def country_labels(
    month: Optional[str],
    climate_map: MonthCountryClimateMap,
    index: GeoFeatureIndex,
    aliases: AliasTable,
) -> List[CountryLabel]:
    """Label placements for the month's highlighted features, sorted by display name."""
    labels: List[CountryLabel] = []
    for key in highlighted_countries(month, climate_map, index, aliases):
        feat = index.get(key)
        if feat is None or feat.centroid is None:
            continue
        labels.append(CountryLabel(display_name=feat.display_name, centroid=feat.centroid))
    labels.sort(key=lambda l: l.display_name)
    return labels


def find_climate_key(
    feature_name: str,
    month_map: Mapping[str, ClimateSummary],
    aliases: AliasTable,
) -> Optional[str]:
    """
    Climate-map key that styles a feature: exact key, then normalized, then alias-resolved.
    """
    if not feature_name or not month_map:
        return None
    if feature_name in month_map:
        return feature_name

    key = normalize_country_key(feature_name)
    if not key:
        return None
    for map_key in month_map:
        if normalize_country_key(map_key) == key:
            return map_key

    alias = aliases.lookup(key)
    if alias is None:
        return None
    for map_key in month_map:
        if normalize_country_key(map_key) == alias:
            return map_key
    return None
