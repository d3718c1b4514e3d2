"""
Country-name normalization & composite-field tokenization

Two naming vocabularies meet here: the informal country strings typed into the
travel sheet ("USA", "Chile / Argentina", "Congo (Brazzaville)") and the canonical
names carried by the geographic feature collection. Both sides are reduced to a
comparable key with `normalize_country_key`; composite travel fields are broken
into single countries with `split_country_field`.
"""
from __future__ import annotations

import re
import unicodedata
from typing import List, Optional

from .utils.text_utils import letters_only, normalize_whitespace, strip_parentheticals

# Connectors that join two names; they become word breaks, not deletions
_CONNECTOR_PAT = re.compile(r"[&+/]")

# comma, slash, semicolon, ampersand, en-dash, hyphen
_SPLIT_PAT = re.compile(r"[,/;&–-]")


def normalize_country_key(value: Optional[str]) -> str:
    """
    Canonicalize a country string into a comparison key.

    Steps: NFKD decomposition, parenthetical removal, connectors (& + /) to spaces,
    every remaining non-letter dropped, lowercase, whitespace collapsed.

    The empty string means "unmatchable" and must never be used as a wildcard.

    >>> normalize_country_key("U.S.A.")
    'usa'
    >>> normalize_country_key("Côte d'Ivoire")
    'cote divoire'
    >>> normalize_country_key("Iran (Islamic Republic of)")
    'iran'
    """
    if not value:
        return ""
    t = unicodedata.normalize("NFKD", value)
    t = strip_parentheticals(t)
    t = _CONNECTOR_PAT.sub(" ", t)
    # Lower before filtering so case mappings that emit combining marks get filtered too
    t = unicodedata.normalize("NFKD", t.lower())
    t = letters_only(t)
    return normalize_whitespace(t)


def split_country_field(value: Optional[str]) -> List[str]:
    """
    Split a composite country field into individual country tokens.

    Hyphens always split, so compound names such as "Bosnia-Herzegovina" come out
    as two tokens; the alias table carries "bosnia" for that reason.

    >>> split_country_field("Chile / Argentina")
    ['Chile', 'Argentina']
    >>> split_country_field("Tanzania (Zanzibar), Kenya")
    ['Tanzania', 'Kenya']
    """
    if not value:
        return []
    tokens: List[str] = []
    for part in _SPLIT_PAT.split(value):
        token = strip_parentheticals(part).strip()
        if token:
            tokens.append(token)
    return tokens
