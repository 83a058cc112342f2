from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.domain.entities import Client, DuplicateExpense, ExpenseCandidate


def test_client_accepts_string_and_int_ids():
    assert Client(id="c-1", name="Spotify").id == "c-1"
    assert Client(id=7, name="Spotify").id == 7


def test_client_rejects_empty_id():
    with pytest.raises(ValidationError):
        Client(id="  ", name="Spotify")


def test_client_requires_name():
    with pytest.raises(ValidationError):
        Client(id="c-1")


def test_client_is_immutable():
    client = Client(id="c-1", name="Spotify")
    with pytest.raises(ValidationError):
        client.name = "Apple"


def test_expense_candidate_parses_iso_date_and_amount():
    expense = ExpenseCandidate(date="2025-06-15", supplier="Spotify AB", amount="99.00")
    assert expense.date == date(2025, 6, 15)
    assert expense.amount == Decimal("99.00")


def test_expense_candidate_requires_amount():
    with pytest.raises(ValidationError):
        ExpenseCandidate(date="2025-06-15", supplier="Spotify AB")


def test_expense_candidate_rejects_bad_date():
    with pytest.raises(ValidationError):
        ExpenseCandidate(date="15/06/2025", supplier="Spotify AB", amount="99")


def test_duplicate_expense_category_optional():
    expense = DuplicateExpense(id="e-1", date="2025-06-15", supplier="Spotify", amount="99")
    assert expense.category is None


def test_duplicate_expense_requires_id():
    with pytest.raises(ValidationError):
        DuplicateExpense(date="2025-06-15", supplier="Spotify", amount="99")


def test_duplicate_expense_is_a_candidate():
    expense = DuplicateExpense(id="e-1", date="2025-06-15", supplier="Spotify", amount="99")
    assert isinstance(expense, ExpenseCandidate)


@pytest.mark.parametrize("name", ["", "   "])
def test_client_rejects_blank_name(name):
    with pytest.raises(ValidationError):
        Client(id="c-1", name=name)


@pytest.mark.parametrize("supplier", ["", " \t "])
def test_expense_rejects_blank_supplier(supplier):
    with pytest.raises(ValidationError):
        ExpenseCandidate(date="2025-06-15", supplier=supplier, amount="250.50")
    with pytest.raises(ValidationError):
        DuplicateExpense(id="e-1", date="2025-06-15", supplier=supplier, amount="250.50")


def test_amount_keeps_full_precision():
    expense = ExpenseCandidate(date="2025-06-15", supplier="Spotify", amount="99.004")
    assert expense.amount == Decimal("99.004")
