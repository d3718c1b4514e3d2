"""
Variant resolution: ClimateSummary → ClimateVariant (or None)

Every one of the 8 flag combinations has exactly one outcome; the pairwise
names are fixed as summer-winter, summer-mild, winter-mild.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from .aliases import AliasTable
from .models import ClimateSummary, ClimateVariant, MonthCountryClimateMap, canonical_month
from .normalize import normalize_country_key

# (has_summer, has_winter, has_mild) -> variant
_VARIANTS: Dict[Tuple[bool, bool, bool], Optional[ClimateVariant]] = {
    (False, False, False): None,
    (True, False, False): ClimateVariant.SUMMER,
    (False, True, False): ClimateVariant.WINTER,
    (False, False, True): ClimateVariant.MILD,
    (True, True, False): ClimateVariant.SUMMER_WINTER,
    (True, False, True): ClimateVariant.SUMMER_MILD,
    (False, True, True): ClimateVariant.WINTER_MILD,
    (True, True, True): ClimateVariant.MIXED,
}


def resolve_variant(summary: Optional[ClimateSummary]) -> Optional[ClimateVariant]:
    """Display variant of a summary; None when no flag is set (or no summary)."""
    if summary is None:
        return None
    return _VARIANTS[tuple(bool(f) for f in summary.flags())]


def climate_variant_for(
    month: Optional[str],
    country: str,
    climate_map: MonthCountryClimateMap,
    aliases: AliasTable,
) -> Optional[ClimateVariant]:
    """
    Variant for a (month, country) pair.

    `country` may be informal ("USA") or canonical ("United States of America");
    it is normalized and alias-resolved the same way the aggregator keyed the map.
    """
    m = canonical_month(month)
    if m is None or m not in climate_map:
        return None
    key = normalize_country_key(country)
    if not key:
        return None
    return resolve_variant(climate_map[m].get(aliases.resolve(key)))
