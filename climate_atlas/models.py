"""
Data model

Travel rows are converted into immutable `TravelRecord` objects once at load
time; everything downstream (climate map, highlight sets, labels) is derived
from them and recomputed wholesale when the dataset changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

MONTHS: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Month selector labels shown to Hebrew-speaking users
MONTH_LABELS_HE: Dict[str, str] = {
    "January": "ינואר",
    "February": "פברואר",
    "March": "מרץ",
    "April": "אפריל",
    "May": "מאי",
    "June": "יוני",
    "July": "יולי",
    "August": "אוגוסט",
    "September": "ספטמבר",
    "October": "אוקטובר",
    "November": "נובמבר",
    "December": "דצמבר",
}

_MONTH_LOOKUP = {m.lower(): m for m in MONTHS}


def canonical_month(value: Optional[str]) -> Optional[str]:
    """Return the canonical month name for `value` (case/whitespace-insensitive), else None."""
    if not value:
        return None
    return _MONTH_LOOKUP.get(value.strip().lower())


class ClimateType(str, Enum):
    SUMMER = "summer"
    WINTER = "winter"
    MILD = "mild"
    NONE = "none"


class ClimateVariant(str, Enum):
    """Display variant of a climate summary. "No override" is represented by None."""
    SUMMER = "summer"
    WINTER = "winter"
    MILD = "mild"
    SUMMER_WINTER = "summer-winter"
    SUMMER_MILD = "summer-mild"
    WINTER_MILD = "winter-mild"
    MIXED = "mixed"


@dataclass(frozen=True)
class TravelRecord:
    """One row of the travel-by-month dataset."""
    month: str
    destination: str = ""
    country: str = ""           # may be composite, e.g. "Chile / Argentina"
    category_raw: str = ""
    reason_he: str = ""


_SUMMARY_FLAGS = frozenset({"has_summer", "has_winter", "has_mild"})


@dataclass
class ClimateSummary:
    """Climate types observed for one (month, country).

    Flags only ever go from False to True; `mark` is the supported write path and
    clearing a set flag raises AttributeError.
    """
    has_summer: bool = False
    has_winter: bool = False
    has_mild: bool = False

    def __setattr__(self, name: str, value: object) -> None:
        if name in _SUMMARY_FLAGS and getattr(self, name, False) and not value:
            raise AttributeError(f"{name} is already set and cannot be cleared")
        object.__setattr__(self, name, value)

    def mark(self, climate: ClimateType) -> None:
        if climate == ClimateType.SUMMER:
            self.has_summer = True
        elif climate == ClimateType.WINTER:
            self.has_winter = True
        elif climate == ClimateType.MILD:
            self.has_mild = True

    def flags(self) -> Tuple[bool, bool, bool]:
        return (self.has_summer, self.has_winter, self.has_mild)


# month -> canonical country key -> summary
MonthCountryClimateMap = Dict[str, Dict[str, ClimateSummary]]


@dataclass(frozen=True)
class GeoFeature:
    """A named country shape reduced to what labelling and matching need."""
    key: str                                   # normalized name
    display_name: str                          # name exactly as in the feature collection
    centroid: Optional[Tuple[float, float]]    # (lat, lng); None for degenerate geometry


@dataclass(frozen=True)
class CountryLabel:
    display_name: str
    centroid: Tuple[float, float]
