"""
Expense dedupe component input/output models.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.entities import DuplicateExpense, ExpenseCandidate

# --- Enums ---


class MatchType(str, Enum):
    """How two supplier names were found to agree."""

    EXACT = "exact"
    CONTAINS = "contains"
    FUZZY = "fuzzy"


# --- Validation Error ---


@dataclass(frozen=True)
class DedupeValidationError:
    """Duplicate check input validation error."""

    code: str
    message: str
    field: str | None = None


# --- Result Models ---


@dataclass(frozen=True)
class SupplierMatch:
    """Supplier comparison outcome. Truthy when the suppliers are similar."""

    is_similar: bool
    match_type: MatchType | None = None

    def __bool__(self) -> bool:
        return self.is_similar


@dataclass(frozen=True)
class DuplicateCheckResult:
    """Outcome of checking one candidate against existing expenses."""

    is_duplicate: bool
    existing_expense: DuplicateExpense | None = None
    match_type: MatchType | None = None


@dataclass(frozen=True)
class BatchDuplicateResult:
    """Per-candidate outcome of a batch check, in candidate order."""

    index: int
    candidate: ExpenseCandidate
    is_duplicate: bool
    existing_expense: DuplicateExpense | None = None
    match_type: MatchType | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CheckDuplicateInput:
    """Input for checking one expense."""

    candidate: Any
    existing: Sequence[Any] = ()


@dataclass(frozen=True)
class CheckDuplicatesInput:
    """Input for checking a batch of expenses against the same existing set."""

    candidates: Sequence[Any]
    existing: Sequence[Any] = ()


# --- Output Models ---


@dataclass(frozen=True)
class CheckDuplicateOutput:
    """Output for a single duplicate check."""

    result: DuplicateCheckResult | None
    errors: list[DedupeValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CheckDuplicatesOutput:
    """Output for a batch duplicate check."""

    results: tuple[BatchDuplicateResult, ...] = ()
    errors: list[DedupeValidationError] = field(default_factory=list)
    success: bool = True

    @property
    def duplicate_count(self) -> int:
        return sum(1 for r in self.results if r.is_duplicate)
