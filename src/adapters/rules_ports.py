"""
Rules-backed implementations of the component rules ports.
"""

from __future__ import annotations

from src.rules.models import ClientMatchingRules, ExpenseDedupeRules


class ClientMatchRulesAdapter:
    """ClientMatchRulesPort over the client_matching rules section."""

    def __init__(self, rules: ClientMatchingRules) -> None:
        self._rules = rules

    def get_max_distance_ratio(self) -> float:
        return self._rules.max_distance_ratio

    def get_client_suffixes(self) -> tuple[str, ...]:
        return tuple(self._rules.suffixes)

    def get_fuzzy_thresholds(self) -> tuple[float, float]:
        return self._rules.fuzzy_accept, self._rules.fuzzy_suggest

    def get_token_thresholds(self) -> tuple[float, float, float]:
        return (
            self._rules.token_accept,
            self._rules.token_suggest,
            self._rules.token_similarity,
        )

    def get_suggestion_limits(self) -> tuple[int, int]:
        return self._rules.max_suggestions, self._rules.max_manual_suggestions

    def get_stop_words(self) -> tuple[str, ...]:
        return tuple(self._rules.stop_words)


class DedupeRulesAdapter:
    """DedupeRulesPort over the expense_dedupe rules section."""

    def __init__(self, rules: ExpenseDedupeRules) -> None:
        self._rules = rules

    def get_supplier_threshold(self) -> float:
        return self._rules.supplier_threshold

    def get_supplier_suffixes(self) -> tuple[str, ...]:
        return tuple(self._rules.suffixes)
