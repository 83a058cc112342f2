"""
Expense dedupe component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class DedupeRulesPort(Protocol):
    """Port for duplicate detection configuration."""

    def get_supplier_threshold(self) -> float:
        """Minimum fuzzy similarity for two suppliers to count as the same."""
        ...

    def get_supplier_suffixes(self) -> tuple[str, ...]:
        """Company-form suffixes stripped from supplier names."""
        ...
