"""
Client match component - fuzzy matching of imported client names.
"""

from ._impl import (
    ClientMatchConfig,
    extract_tokens,
    match_client,
    max_allowed_distance,
    normalize_client_name,
    rank_client_matches,
    token_similarity,
)
from .component import run, run_match, run_rank
from .models import (
    ClientMatchResult,
    ClientMatchValidationError,
    ClientSuggestion,
    MatchClientInput,
    MatchClientOutput,
    MatchMethod,
    RankClientsOutput,
)
from .ports import ClientMatchRulesPort

__all__ = [
    # Entry points
    "run",
    "run_match",
    "run_rank",
    # Input models
    "MatchClientInput",
    # Output models
    "ClientMatchResult",
    "ClientMatchValidationError",
    "ClientSuggestion",
    "MatchClientOutput",
    "MatchMethod",
    "RankClientsOutput",
    # Ports
    "ClientMatchRulesPort",
    # Core functions
    "ClientMatchConfig",
    "extract_tokens",
    "match_client",
    "max_allowed_distance",
    "normalize_client_name",
    "rank_client_matches",
    "token_similarity",
]
