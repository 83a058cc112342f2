"""
DuplicateExpenseDetector - spot receipts that are already on file.

Functional Core - pure business logic, no I/O.

An existing expense is a duplicate of a candidate when all three hold:
- same date
- same amount (exact decimal equality)
- similar supplier (exact, containment, or fuzzy)

Supplier policy (first hit wins):
1. exact:    equal after normalization
2. contains: one normalized name contains the other
3. fuzzy:    1 - levenshtein / max_len >= threshold (default 0.7)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from src.domain.entities import DuplicateExpense, ExpenseCandidate
from src.domain.similarity import (
    collapse_whitespace,
    similarity_ratio,
    strip_suffixes,
    suffix_pattern,
)

from .models import BatchDuplicateResult, DuplicateCheckResult, MatchType, SupplierMatch

logger = logging.getLogger(__name__)

# --- Configuration ---


@dataclass(frozen=True)
class DedupeConfig:
    """Duplicate detection configuration."""

    supplier_threshold: float = 0.7
    suffixes: tuple[str, ...] = (
        "pbc",
        "ab",
        "hb",
        "kb",
        "inc",
        "llc",
        "ltd",
        "gmbh",
        "as",
        "oy",
        "a/s",
    )


DEFAULT_CONFIG = DedupeConfig()


# --- Supplier Comparison ---


@lru_cache(maxsize=16)
def _suffix_pattern(suffixes: tuple[str, ...]) -> re.Pattern[str]:
    # "Patagonia, PBC", "Apple Inc.", or a name that is only a suffix ("AB")
    return suffix_pattern(suffixes, separator=r"(?:^|,?\s+)", terminator=r"\.?$")


def normalize_supplier(name: str, config: DedupeConfig = DEFAULT_CONFIG) -> str:
    """Lowercase, collapse whitespace and drop trailing company-form suffixes."""
    text = collapse_whitespace(name.lower())
    return strip_suffixes(text, _suffix_pattern(tuple(config.suffixes)))


def is_similar_supplier(
    supplier_a: str,
    supplier_b: str,
    threshold: float | None = None,
    config: DedupeConfig = DEFAULT_CONFIG,
) -> SupplierMatch:
    """
    Decide whether two supplier names likely refer to the same business.

    ``threshold`` overrides the configured fuzzy similarity threshold.
    """
    if threshold is None:
        threshold = config.supplier_threshold

    a = normalize_supplier(supplier_a, config)
    b = normalize_supplier(supplier_b, config)

    if not a or not b:
        # Blank or only a company form: nothing to contain or fuzz against
        raw_a = collapse_whitespace(supplier_a.lower())
        if raw_a and raw_a == collapse_whitespace(supplier_b.lower()):
            return SupplierMatch(is_similar=True, match_type=MatchType.EXACT)
        return SupplierMatch(is_similar=False)

    if a == b:
        return SupplierMatch(is_similar=True, match_type=MatchType.EXACT)

    if a in b or b in a:
        return SupplierMatch(is_similar=True, match_type=MatchType.CONTAINS)

    if similarity_ratio(a, b) >= threshold:
        return SupplierMatch(is_similar=True, match_type=MatchType.FUZZY)

    return SupplierMatch(is_similar=False)


# --- Amount Comparison ---


def amounts_match(a: Decimal, b: Decimal) -> bool:
    """Exact decimal equality; trailing zeros do not matter (99 == 99.00)."""
    return Decimal(a) == Decimal(b)


# --- Duplicate Detection ---


def find_duplicate_expense(
    candidate: ExpenseCandidate,
    existing: Sequence[DuplicateExpense],
    config: DedupeConfig = DEFAULT_CONFIG,
) -> DuplicateCheckResult:
    """
    Return the first existing expense that duplicates the candidate.

    Existing expenses are scanned in input order; a miss is a result with
    is_duplicate=False, not an error.
    """
    for expense in existing:
        if expense.date != candidate.date:
            continue
        if not amounts_match(expense.amount, candidate.amount):
            continue

        supplier_match = is_similar_supplier(candidate.supplier, expense.supplier, config=config)
        if supplier_match:
            logger.info(
                "Expense %s %s %s duplicates %s (%s supplier match)",
                candidate.date,
                candidate.supplier,
                candidate.amount,
                expense.id,
                supplier_match.match_type.value,
            )
            return DuplicateCheckResult(
                is_duplicate=True,
                existing_expense=expense,
                match_type=supplier_match.match_type,
            )

    return DuplicateCheckResult(is_duplicate=False)


def find_duplicate_expenses(
    candidates: Sequence[ExpenseCandidate],
    existing: Sequence[DuplicateExpense],
    config: DedupeConfig = DEFAULT_CONFIG,
) -> list[BatchDuplicateResult]:
    """Check each candidate independently; results keep candidate order."""
    # Read once; the caller's sequence is never mutated
    existing = tuple(existing)

    results: list[BatchDuplicateResult] = []
    for index, candidate in enumerate(candidates):
        check = find_duplicate_expense(candidate, existing, config)
        results.append(
            BatchDuplicateResult(
                index=index,
                candidate=candidate,
                is_duplicate=check.is_duplicate,
                existing_expense=check.existing_expense,
                match_type=check.match_type,
            )
        )

    logger.debug(
        "Batch duplicate check: %d of %d candidates already on file",
        sum(1 for r in results if r.is_duplicate),
        len(results),
    )
    return results
