from dataclasses import dataclass
from datetime import date as Date
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

# --- Identifiers ---

EntityId = str | int


def require_id(value: EntityId) -> EntityId:
    if isinstance(value, str) and not value.strip():
        raise ValueError("id must not be empty")
    return value


def require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# --- Clients ---

class Client(BaseModel):
    """Known client, as loaded from the clients table by the caller."""

    model_config = ConfigDict(frozen=True)

    id: EntityId
    name: str

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: EntityId) -> EntityId:
        return require_id(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return require_text(value)


# --- Expenses ---

class ExpenseCandidate(BaseModel):
    """Expense extracted from a scanned receipt or import file."""

    model_config = ConfigDict(frozen=True)

    date: Date
    supplier: str
    amount: Decimal

    @field_validator("supplier")
    @classmethod
    def validate_supplier(cls, value: str) -> str:
        return require_text(value)


class DuplicateExpense(ExpenseCandidate):
    """Expense already on file, the comparison side of a duplicate check."""

    id: EntityId
    category: str | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: EntityId) -> EntityId:
        return require_id(value)


# --- Rate limiting ---

@dataclass
class RateLimitEntry:
    """Counter for one identifier inside its current window."""

    count: int
    reset_at: datetime
