"""
Climate aggregation: travel records → month → country → ClimateSummary

The map is rebuilt from scratch for every dataset; summaries only accumulate
(flags are set, never cleared), so folding records in any order gives the same
result.
"""
from __future__ import annotations

from typing import Collection, Dict, Iterable, List, Optional, Sequence

from .aliases import AliasTable, build_alias_table
from .classify import DEFAULT_CLIMATE_GROUPS, CategoryKey, KeywordGroup, classify_category, classify_climate
from .models import ClimateSummary, ClimateType, MonthCountryClimateMap, TravelRecord, canonical_month
from .normalize import normalize_country_key, split_country_field
from .utils.logging_utils import get_logger


def canonical_country_keys(country_field: str, aliases: AliasTable) -> List[str]:
    """Split a raw country field and return the non-empty canonical keys, in field order."""
    keys: List[str] = []
    for token in split_country_field(country_field):
        key = normalize_country_key(token)
        if not key:
            continue
        keys.append(aliases.resolve(key))
    return keys


def fold_record(
    climate_map: MonthCountryClimateMap,
    record: TravelRecord,
    aliases: AliasTable,
    groups: Sequence[KeywordGroup] = DEFAULT_CLIMATE_GROUPS,
) -> bool:
    """
    Fold one record into `climate_map` in place.

    Returns True when the record contributed (known month, classified climate,
    at least one country key).
    """
    month = canonical_month(record.month)
    if month is None:
        return False
    climate = classify_climate(record.category_raw, groups)
    if climate == ClimateType.NONE:
        return False
    keys = canonical_country_keys(record.country, aliases)
    if not keys:
        return False
    month_map = climate_map.setdefault(month, {})
    for key in keys:
        month_map.setdefault(key, ClimateSummary()).mark(climate)
    return True


def build_climate_map(
    records: Iterable[TravelRecord],
    aliases: Optional[AliasTable] = None,
    groups: Sequence[KeywordGroup] = DEFAULT_CLIMATE_GROUPS,
) -> MonthCountryClimateMap:
    """Build the month → canonical country key → ClimateSummary map."""
    log = get_logger("atlas.aggregate")
    table = aliases if aliases is not None else build_alias_table()
    climate_map: MonthCountryClimateMap = {}
    used = skipped = 0
    for record in records:
        if fold_record(climate_map, record, table, groups):
            used += 1
        else:
            skipped += 1
    log.debug(
        "Climate map: %d records folded, %d skipped (unclassified, unknown month or no country)",
        used,
        skipped,
    )
    return climate_map


# --------------------------------------------------------------------------------------
# Record filters (month selector / category chips)
# --------------------------------------------------------------------------------------

def records_for_month(records: Iterable[TravelRecord], month: str) -> List[TravelRecord]:
    wanted = canonical_month(month)
    if wanted is None:
        return []
    return [r for r in records if canonical_month(r.month) == wanted]


def filter_by_categories(
    records: Iterable[TravelRecord],
    categories: Collection[CategoryKey],
) -> List[TravelRecord]:
    """Keep records whose travel category is in `categories`."""
    wanted = {CategoryKey(c) for c in categories}
    return [r for r in records if classify_category(r.category_raw) in wanted]


def count_by_category(records: Iterable[TravelRecord]) -> Dict[CategoryKey, int]:
    counts: Dict[CategoryKey, int] = {}
    for r in records:
        key = classify_category(r.category_raw)
        counts[key] = counts.get(key, 0) + 1
    return counts
