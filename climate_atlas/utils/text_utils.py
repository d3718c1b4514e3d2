# climate_atlas/utils/text_utils.py
# ======================================================================================
# Climate Atlas
# Text Utilities: parenthetical stripping, letter filtering, whitespace collapse
# --------------------------------------------------------------------------------------
# Purpose
#   Small, dependency-free string helpers shared by the country-name normalizer and
#   the tokenizer. Supports:
#     • Parenthetical annotation stripping ("Iran (Islamic Republic of)" → "Iran")
#     • Whitespace collapse & trimming
#     • Letter-only filtering
#
# Design notes
#   • No network calls. Deterministic and unit-testable.
#   • No global state. All functions are pure and total over str (None → "").
#
# License
#   MIT (c) 2025 Climate Atlas contributors
# ======================================================================================

from __future__ import annotations

import re
from typing import Optional

__all__ = [
    "strip_parentheticals",
    "normalize_whitespace",
    "letters_only",
]


# --------------------------------------------------------------------------------------
# Patterns
# --------------------------------------------------------------------------------------

# Non-greedy so "A (x) B (y)" drops both annotations but keeps "B"
_PAREN_PAT = re.compile(r"\(.*?\)")

_WS_PAT = re.compile(r"\s+")


# --------------------------------------------------------------------------------------
# Cleaning & Normalization
# --------------------------------------------------------------------------------------

def strip_parentheticals(text: Optional[str], repl: str = " ") -> str:
    """
    Replace every "( ... )" annotation with `repl`.

    >>> strip_parentheticals("Bolivia (Plurinational State of)").strip()
    'Bolivia'
    """
    if not text:
        return ""
    return _PAREN_PAT.sub(repl, text)


def normalize_whitespace(text: Optional[str]) -> str:
    """
    Collapse multiple whitespace to single spaces and trim ends.

    >>> normalize_whitespace("  hello   world \\n ")
    'hello world'
    """
    if not text:
        return ""
    return _WS_PAT.sub(" ", text).strip()


def letters_only(text: Optional[str]) -> str:
    """
    Drop every character that is neither a letter nor whitespace.

    Combining marks are not letters, so decomposed accents disappear here too.

    >>> letters_only("U.S.A.")
    'USA'
    """
    if not text:
        return ""
    return "".join(ch for ch in text if ch.isalpha() or ch.isspace())
