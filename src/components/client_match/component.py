"""
Client match component - match invoice client names to known clients.

Shell Layer - validates input shape and builds config from rules.

Invariants:
- Result client is one of the input clients
- Blank candidate or empty client list never matches
- Ties resolve to the first client in input order
"""

from __future__ import annotations

from collections.abc import Sequence

from src.domain.entities import Client

from ._impl import ClientMatchConfig, match_client, rank_client_matches
from .models import (
    ClientMatchValidationError,
    MatchClientInput,
    MatchClientOutput,
    RankClientsOutput,
)
from .ports import ClientMatchRulesPort


def _build_config(rules: ClientMatchRulesPort | None) -> ClientMatchConfig:
    """Build client match config from rules port."""
    if rules is None:
        return ClientMatchConfig()

    fuzzy_accept, fuzzy_suggest = rules.get_fuzzy_thresholds()
    token_accept, token_suggest, token_sim = rules.get_token_thresholds()
    max_suggestions, max_manual = rules.get_suggestion_limits()
    return ClientMatchConfig(
        max_distance_ratio=rules.get_max_distance_ratio(),
        suffixes=rules.get_client_suffixes(),
        fuzzy_accept=fuzzy_accept,
        fuzzy_suggest=fuzzy_suggest,
        token_accept=token_accept,
        token_suggest=token_suggest,
        token_similarity=token_sim,
        max_suggestions=max_suggestions,
        max_manual_suggestions=max_manual,
        stop_words=rules.get_stop_words(),
    )


def _validate(inp: MatchClientInput) -> list[ClientMatchValidationError]:
    errors: list[ClientMatchValidationError] = []

    if not isinstance(inp.candidate_name, str):
        errors.append(
            ClientMatchValidationError(
                code="candidate_name_invalid",
                message="Candidate name must be a string",
                field="candidate_name",
            )
        )

    if isinstance(inp.clients, str | bytes) or not isinstance(inp.clients, Sequence):
        errors.append(
            ClientMatchValidationError(
                code="clients_invalid",
                message="Clients must be a sequence of Client records",
                field="clients",
            )
        )
    elif any(not isinstance(c, Client) for c in inp.clients):
        errors.append(
            ClientMatchValidationError(
                code="client_invalid",
                message="Every client must be a Client record",
                field="clients",
            )
        )

    return errors


# --- Component Entry Points ---


def run_match(
    inp: MatchClientInput,
    *,
    rules: ClientMatchRulesPort | None = None,
) -> MatchClientOutput:
    """
    Find the best client for an extracted name.

    Args:
        inp: Candidate name and known clients.
        rules: Optional rules port for thresholds and suffixes.

    Returns:
        MatchClientOutput with the client, or client=None when nothing is
        close enough. Malformed input yields errors and success=False.
    """
    errors = _validate(inp)
    if errors:
        return MatchClientOutput(client=None, errors=errors, success=False)

    client = match_client(inp.candidate_name, inp.clients, _build_config(rules))
    return MatchClientOutput(client=client)


def run_rank(
    inp: MatchClientInput,
    *,
    rules: ClientMatchRulesPort | None = None,
) -> RankClientsOutput:
    """Rank known clients for an extracted name, with review suggestions."""
    errors = _validate(inp)
    if errors:
        return RankClientsOutput(result=None, errors=errors, success=False)

    result = rank_client_matches(inp.candidate_name, inp.clients, _build_config(rules))
    return RankClientsOutput(result=result)


def run(
    inp: MatchClientInput,
    *,
    rules: ClientMatchRulesPort | None = None,
) -> MatchClientOutput:
    """Default entry point: best single match."""
    return run_match(inp, rules=rules)
