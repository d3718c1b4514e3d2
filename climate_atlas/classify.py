"""
Keyword classification of free-text category labels

Two heuristics live here, both "first group wins" substring scans over an
explicit ordered table:

- `classify_climate`: label → ClimateType (winter, then summer, then mild).
- `classify_category`: label → CategoryKey (beach, ski, city, trekking, safari,
  festival, polar; otherwise other).

These are approximations of what a category means climatically, not an
authoritative classification. Substring matching is loose: "ice"
also fires on "Nice" and "sea" on "season".
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .models import ClimateType


@dataclass(frozen=True)
class KeywordGroup:
    """A label is in the group when any keyword is a substring of the case-folded label."""
    climate: ClimateType
    keywords: Tuple[str, ...]

    def matches(self, folded_label: str) -> bool:
        return any(k in folded_label for k in self.keywords)


# Order is precedence
DEFAULT_CLIMATE_GROUPS: Tuple[KeywordGroup, ...] = (
    KeywordGroup(ClimateType.WINTER, (
        "ski", "snow", "northern lights", "aurora", "ice", "winter", "polar",
    )),
    KeywordGroup(ClimateType.SUMMER, (
        "beach", "warm", "islands", "coast", "sea", "surf", "water",
    )),
    KeywordGroup(ClimateType.MILD, (
        "city", "urban", "culture", "trek", "hiking", "mountain", "safari", "wildlife", "festival",
    )),
)


def classify_climate(
    category_raw: Optional[str],
    groups: Sequence[KeywordGroup] = DEFAULT_CLIMATE_GROUPS,
) -> ClimateType:
    """
    Map a category label to a climate type; the first matching group wins.

    >>> classify_climate("Ski trip").value
    'winter'
    >>> classify_climate("Business conference").value
    'none'
    """
    folded = (category_raw or "").casefold()
    for group in groups:
        if group.matches(folded):
            return group.climate
    return ClimateType.NONE


def climate_groups_from_config(keywords: Optional[Mapping[str, Iterable[str]]]) -> Tuple[KeywordGroup, ...]:
    """
    Build climate groups from a {"winter": [...], "summer": [...], "mild": [...]} mapping.

    Missing climates keep their default keywords; precedence stays winter, summer, mild.
    Unknown climate names and non-list values (e.g. `mild: city`) raise ValueError.
    """
    if not keywords:
        return DEFAULT_CLIMATE_GROUPS
    allowed = {ClimateType.WINTER.value, ClimateType.SUMMER.value, ClimateType.MILD.value}
    unknown = set(keywords) - allowed
    if unknown:
        raise ValueError(f"Unknown climate keyword group(s): {sorted(unknown)}; expected {sorted(allowed)}")

    out = []
    for group in DEFAULT_CLIMATE_GROUPS:
        words = keywords.get(group.climate.value)
        if words is None:
            out.append(group)
            continue
        if isinstance(words, (str, bytes)) or not isinstance(words, (list, tuple)):
            raise ValueError(
                f"climate.keywords.{group.climate.value} must be a list of keywords, got {words!r}"
            )
        folded = tuple(str(w).casefold() for w in words if str(w).strip())
        out.append(KeywordGroup(group.climate, folded))
    return tuple(out)


# --------------------------------------------------------------------------------------
# Travel categories
# --------------------------------------------------------------------------------------

class CategoryKey(str, Enum):
    BEACH = "beach"
    SKI = "ski"
    CITY = "city"
    TREKKING = "trekking"
    SAFARI = "safari"
    FESTIVAL = "festival"
    POLAR = "polar"
    OTHER = "other"


# Order is precedence; OTHER has no keywords and is the fallback
CATEGORY_KEYWORDS: Dict[CategoryKey, Tuple[str, ...]] = {
    CategoryKey.BEACH: ("beach", "warm escape", "island", "water", "coast", "maldives", "caribbean", "seychelles"),
    CategoryKey.SKI: ("ski", "winter sports", "snow", "alps", "winter"),
    CategoryKey.CITY: ("city", "culture", "historical", "urban", "romance"),
    CategoryKey.TREKKING: ("trekking", "mountains", "hiking", "trail", "himalaya", "patagonia", "peru", "nepal"),
    CategoryKey.SAFARI: ("safari", "wildlife", "nature", "animals", "kenya", "tanzania", "africa"),
    CategoryKey.FESTIVAL: ("festival", "carnival", "party", "celebration", "oktoberfest", "holi"),
    CategoryKey.POLAR: ("polar", "arctic", "antarctica", "northern lights", "expedition", "ice"),
}


def classify_category(category_raw: Optional[str]) -> CategoryKey:
    """
    Map a category label to a travel category; OTHER when nothing matches.

    >>> classify_category("Beach & islands").value
    'beach'
    """
    folded = (category_raw or "").casefold()
    for key, words in CATEGORY_KEYWORDS.items():
        if any(w in folded for w in words):
            return key
    return CategoryKey.OTHER
