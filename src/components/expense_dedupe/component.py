"""
Expense dedupe component - flag imported expenses already on file.

Shell Layer - validates input shape and builds config from rules.

Invariants:
- A duplicate needs the same date and amount plus a similar supplier
- The first matching existing expense wins
- Batch results keep candidate order; existing expenses are not mutated
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from src.domain.entities import DuplicateExpense, ExpenseCandidate

from ._impl import DedupeConfig, find_duplicate_expense, find_duplicate_expenses
from .models import (
    CheckDuplicateInput,
    CheckDuplicateOutput,
    CheckDuplicatesInput,
    CheckDuplicatesOutput,
    DedupeValidationError,
)
from .ports import DedupeRulesPort


def _build_config(rules: DedupeRulesPort | None) -> DedupeConfig:
    """Build dedupe config from rules port."""
    if rules is None:
        return DedupeConfig()

    return DedupeConfig(
        supplier_threshold=rules.get_supplier_threshold(),
        suffixes=rules.get_supplier_suffixes(),
    )


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _validate_existing(existing: Any) -> list[DedupeValidationError]:
    if not _is_sequence(existing):
        return [
            DedupeValidationError(
                code="existing_invalid",
                message="Existing expenses must be a sequence",
                field="existing",
            )
        ]
    if any(not isinstance(e, DuplicateExpense) for e in existing):
        return [
            DedupeValidationError(
                code="existing_expense_invalid",
                message="Every existing expense must be a DuplicateExpense record",
                field="existing",
            )
        ]
    return []


def _candidate_error(field_name: str) -> DedupeValidationError:
    return DedupeValidationError(
        code="candidate_invalid",
        message="Candidate must be an ExpenseCandidate record with date, supplier and amount",
        field=field_name,
    )


# --- Component Entry Points ---


def run_check(
    inp: CheckDuplicateInput,
    *,
    rules: DedupeRulesPort | None = None,
) -> CheckDuplicateOutput:
    """
    Check one expense against the existing ones.

    Args:
        inp: Candidate expense and existing expenses.
        rules: Optional rules port for supplier threshold and precision.

    Returns:
        CheckDuplicateOutput; a miss is a result with is_duplicate=False.
    """
    errors: list[DedupeValidationError] = []
    if not isinstance(inp.candidate, ExpenseCandidate):
        errors.append(_candidate_error("candidate"))
    errors.extend(_validate_existing(inp.existing))
    if errors:
        return CheckDuplicateOutput(result=None, errors=errors, success=False)

    result = find_duplicate_expense(inp.candidate, inp.existing, _build_config(rules))
    return CheckDuplicateOutput(result=result)


def run_check_batch(
    inp: CheckDuplicatesInput,
    *,
    rules: DedupeRulesPort | None = None,
) -> CheckDuplicatesOutput:
    """Check a batch of expenses; results are in candidate order."""
    errors: list[DedupeValidationError] = []
    if not _is_sequence(inp.candidates):
        errors.append(
            DedupeValidationError(
                code="candidates_invalid",
                message="Candidates must be a sequence",
                field="candidates",
            )
        )
    else:
        errors.extend(
            _candidate_error(f"candidates[{i}]")
            for i, c in enumerate(inp.candidates)
            if not isinstance(c, ExpenseCandidate)
        )
    errors.extend(_validate_existing(inp.existing))
    if errors:
        return CheckDuplicatesOutput(errors=errors, success=False)

    results = find_duplicate_expenses(inp.candidates, inp.existing, _build_config(rules))
    return CheckDuplicatesOutput(results=tuple(results))


def run(
    inp: CheckDuplicateInput,
    *,
    rules: DedupeRulesPort | None = None,
) -> CheckDuplicateOutput:
    """Default entry point: single duplicate check."""
    return run_check(inp, rules=rules)
