"""
Client match component input/output models.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.entities import Client, EntityId

# --- Enums ---


class MatchMethod(str, Enum):
    """Which level of the ranked strategy produced the result."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    TOKEN = "token"
    MANUAL = "manual"


# --- Validation Error ---


@dataclass(frozen=True)
class ClientMatchValidationError:
    """Client match input validation error."""

    code: str
    message: str
    field: str | None = None


# --- Result Models ---


@dataclass(frozen=True)
class ClientSuggestion:
    """A candidate client offered for manual review."""

    client: Client
    similarity: float


@dataclass(frozen=True)
class ClientMatchResult:
    """Outcome of ranked matching."""

    client: Client | None
    confidence: float
    suggestions: tuple[ClientSuggestion, ...] = ()
    method: MatchMethod | None = None

    @property
    def client_id(self) -> EntityId | None:
        return self.client.id if self.client is not None else None


# --- Input Models ---


@dataclass(frozen=True)
class MatchClientInput:
    """Input for matching an extracted name against known clients."""

    candidate_name: Any
    clients: Sequence[Any] = ()


# --- Output Models ---


@dataclass(frozen=True)
class MatchClientOutput:
    """Output of a single best-match lookup."""

    client: Client | None
    errors: list[ClientMatchValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class RankClientsOutput:
    """Output of ranked matching with suggestions."""

    result: ClientMatchResult | None
    errors: list[ClientMatchValidationError] = field(default_factory=list)
    success: bool = True
