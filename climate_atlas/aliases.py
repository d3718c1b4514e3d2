"""
Alias table: informal / historical country names → canonical feature names

Both sides of every pair are normalized once, at construction, so a runtime
lookup is a single exact dict hit on normalized keys. Tables are immutable and
meant to be built once (see `atlas.AtlasTables`) and passed by reference.

Chains are rejected: a canonical target may never itself be an alias of
something else, which keeps resolution a single hop and makes
`resolve(resolve(x)) == resolve(x)` hold for every entry.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .normalize import normalize_country_key

# informal name -> canonical name as it appears in the countries GeoJSON
DEFAULT_ALIASES: Mapping[str, str] = MappingProxyType({
    "usa": "United States of America",
    "u s a": "United States of America",
    "united states": "United States of America",
    "united states of america": "United States of America",
    "uk": "United Kingdom",
    "great britain": "United Kingdom",
    "britain": "United Kingdom",
    "czech republic": "Czechia",
    "south korea": "Republic of Korea",
    "north korea": "Democratic People's Republic of Korea",
    "tanzania": "United Republic of Tanzania",
    "iran": "Iran (Islamic Republic of)",
    "syria": "Syrian Arab Republic",
    "russia": "Russian Federation",
    "moldova": "Republic of Moldova",
    "bolivia": "Bolivia (Plurinational State of)",
    "venezuela": "Venezuela (Bolivarian Republic of)",
    "laos": "Lao People's Democratic Republic",
    "micronesia": "Micronesia (Federated States of)",
    "congo": "Democratic Republic of the Congo",
    "republic of congo": "Republic of the Congo",
    "cape verde": "Cabo Verde",
    "eswatini": "Eswatini",
    "swaziland": "Eswatini",
    "uae": "United Arab Emirates",
    "united arab emirates": "United Arab Emirates",
    "myanmar": "Myanmar",
    "burma": "Myanmar",
    "ivory coast": "Côte d'Ivoire",
    "cote divoire": "Côte d'Ivoire",
    "north macedonia": "North Macedonia",
    "bosnia": "Bosnia and Herzegovina",
    "bahamas": "Bahamas",
    "democratic republic of congo": "Democratic Republic of the Congo",
})


@dataclass(frozen=True)
class AliasTable:
    """Read-only normalized alias → normalized canonical mapping."""
    entries: Mapping[str, str]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_country_key(key) in self.entries

    def lookup(self, token: Optional[str]) -> Optional[str]:
        """Canonical key for `token` if it is a known alias, else None."""
        key = normalize_country_key(token)
        if not key:
            return None
        return self.entries.get(key)

    def resolve(self, token: str) -> str:
        """Canonical key for `token` if it is a known alias; otherwise `token` unchanged."""
        canonical = self.lookup(token)
        return canonical if canonical is not None else token


def build_alias_table(
    pairs: Optional[Mapping[str, str]] = None,
    extra: Optional[Mapping[str, str]] = None,
) -> AliasTable:
    """
    Normalize (alias, canonical) pairs into an `AliasTable`.

    Parameters
    ----------
    pairs : Mapping[str, str], optional
        Base table; defaults to DEFAULT_ALIASES.
    extra : Mapping[str, str], optional
        Additional pairs layered on top (later entries win on the same alias key).

    Raises
    ------
    ValueError
        If a canonical target is itself an alias pointing elsewhere.
    """
    base = DEFAULT_ALIASES if pairs is None else pairs
    table: Dict[str, str] = {}
    for source in (base, extra or {}):
        for alias_key, canonical_key in _normalized_pairs(source.items()):
            table[alias_key] = canonical_key

    for alias_key, canonical_key in table.items():
        hop = table.get(canonical_key)
        if hop is not None and hop != canonical_key:
            raise ValueError(
                f"Alias chain: {alias_key!r} -> {canonical_key!r} -> {hop!r}; "
                f"point {alias_key!r} straight at {hop!r}"
            )
    return AliasTable(entries=MappingProxyType(table))


def _normalized_pairs(items: Iterable[Tuple[str, str]]) -> Iterable[Tuple[str, str]]:
    for alias, canonical in items:
        alias_key = normalize_country_key(str(alias))
        canonical_key = normalize_country_key(str(canonical))
        # an empty side would turn into a wildcard match
        if alias_key and canonical_key:
            yield alias_key, canonical_key
