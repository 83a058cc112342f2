"""
Client match component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class ClientMatchRulesPort(Protocol):
    """Port for client matching configuration."""

    def get_max_distance_ratio(self) -> float:
        """Share of the normalized name length allowed as edit distance."""
        ...

    def get_client_suffixes(self) -> tuple[str, ...]:
        """Company-form suffixes stripped before comparison."""
        ...

    def get_fuzzy_thresholds(self) -> tuple[float, float]:
        """(accept, suggest) similarity thresholds for the fuzzy level."""
        ...

    def get_token_thresholds(self) -> tuple[float, float, float]:
        """(accept, suggest, per-token) thresholds for the token level."""
        ...

    def get_suggestion_limits(self) -> tuple[int, int]:
        """(matched, manual) suggestion list sizes."""
        ...

    def get_stop_words(self) -> tuple[str, ...]:
        """Tokens ignored by token matching."""
        ...
