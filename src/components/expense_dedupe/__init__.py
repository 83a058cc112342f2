"""
Expense dedupe component - duplicate detection for imported expenses.
"""

from ._impl import (
    DedupeConfig,
    amounts_match,
    find_duplicate_expense,
    find_duplicate_expenses,
    is_similar_supplier,
    normalize_supplier,
)
from .component import run, run_check, run_check_batch
from .models import (
    BatchDuplicateResult,
    CheckDuplicateInput,
    CheckDuplicateOutput,
    CheckDuplicatesInput,
    CheckDuplicatesOutput,
    DedupeValidationError,
    DuplicateCheckResult,
    MatchType,
    SupplierMatch,
)
from .ports import DedupeRulesPort

__all__ = [
    # Entry points
    "run",
    "run_check",
    "run_check_batch",
    # Input models
    "CheckDuplicateInput",
    "CheckDuplicatesInput",
    # Output models
    "BatchDuplicateResult",
    "CheckDuplicateOutput",
    "CheckDuplicatesOutput",
    "DedupeValidationError",
    "DuplicateCheckResult",
    "MatchType",
    "SupplierMatch",
    # Ports
    "DedupeRulesPort",
    # Core functions
    "DedupeConfig",
    "amounts_match",
    "find_duplicate_expense",
    "find_duplicate_expenses",
    "is_similar_supplier",
    "normalize_supplier",
]
