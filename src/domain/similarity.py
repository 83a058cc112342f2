"""
Text similarity primitives shared by the import matchers.

Distances are plain Levenshtein (single-character insert, delete, substitute,
all weighted 1). No Unicode folding happens here: callers decide how much
normalization to apply before comparing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``."""
    return Levenshtein.distance(a, b)


def similarity_ratio(a: str, b: str) -> float:
    """
    Similarity on a 0-1 scale: ``1 - distance / max(len(a), len(b))``.

    Case-insensitive. Two empty strings are identical (1.0).
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a.lower(), b.lower()) / max_len


def suffix_pattern(
    suffixes: Iterable[str],
    separator: str = r"\s+",
    terminator: str = "$",
) -> re.Pattern[str]:
    """
    Compile a case-insensitive pattern matching one trailing suffix.

    Longer suffixes are tried first so "aktiebolag" wins over "ab".
    """
    ordered = sorted({s.strip().lower() for s in suffixes if s.strip()}, key=len, reverse=True)
    if not ordered:
        # Matches nothing
        return re.compile(r"(?!)")
    alternatives = "|".join(re.escape(s) for s in ordered)
    return re.compile(rf"{separator}(?:{alternatives}){terminator}", re.IGNORECASE)


def strip_suffixes(text: str, pattern: re.Pattern[str]) -> str:
    """Remove trailing suffixes until none is left."""
    while True:
        stripped = pattern.sub("", text).strip()
        if stripped == text:
            return text
        text = stripped
