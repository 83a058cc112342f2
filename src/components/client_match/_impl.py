"""
ClientMatcher - fuzzy lookup of invoice client names.

Functional Core - pure business logic, no I/O.

Two strategies:
- match_client: single best match by edit distance, accepted when the
  distance stays within a share of the normalized name length.
- rank_client_matches: exact -> fuzzy -> token levels with suggestions,
  used by the import review screen.

Invariants:
- A returned client is always one of the clients passed in
- Ties resolve to the client seen first
- "No match" is None (or a result without a client), never an exception
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from src.domain.entities import Client
from src.domain.similarity import (
    collapse_whitespace,
    levenshtein_distance,
    similarity_ratio,
    strip_suffixes,
    suffix_pattern,
)

from .models import ClientMatchResult, ClientSuggestion, MatchMethod

logger = logging.getLogger(__name__)

# --- Configuration ---


@dataclass(frozen=True)
class ClientMatchConfig:
    """Client matching configuration."""

    max_distance_ratio: float = 0.3
    suffixes: tuple[str, ...] = ("ab", "aktiebolag", "hb", "kb")

    fuzzy_accept: float = 0.85
    fuzzy_suggest: float = 0.7
    token_accept: float = 0.7
    token_suggest: float = 0.5
    token_similarity: float = 0.8
    max_suggestions: int = 3
    max_manual_suggestions: int = 5
    stop_words: tuple[str, ...] = ("ab", "hb", "kb", "the", "i", "of", "and", "för", "och")


DEFAULT_CONFIG = ClientMatchConfig()

_TOKEN_NOISE = re.compile(r"[^a-zåäö0-9\s]")


# --- Normalization ---


@lru_cache(maxsize=16)
def _suffix_pattern(suffixes: tuple[str, ...]) -> re.Pattern[str]:
    return suffix_pattern(suffixes)


def normalize_client_name(name: str, config: ClientMatchConfig = DEFAULT_CONFIG) -> str:
    """
    Normalize a client name for comparison.

    Lowercase, collapse whitespace, then strip trailing company-form
    suffixes (" ab", " aktiebolag", " hb", " kb"). Idempotent.
    Diacritics are kept as-is.
    """
    text = collapse_whitespace(name.lower())
    return strip_suffixes(text, _suffix_pattern(tuple(config.suffixes)))


def max_allowed_distance(normalized_name: str, ratio: float = 0.3) -> int:
    """Largest edit distance still accepted for a name of this length."""
    return math.ceil(ratio * len(normalized_name))


# --- Best Match ---


def match_client(
    candidate_name: str,
    clients: Sequence[Client],
    config: ClientMatchConfig = DEFAULT_CONFIG,
) -> Client | None:
    """
    Find the closest known client for an extracted name.

    Returns None for a blank name, an empty client list, or when the best
    distance exceeds ceil(ratio * len(normalized candidate)).
    """
    if not candidate_name or not candidate_name.strip() or not clients:
        return None

    normalized = normalize_client_name(candidate_name, config)

    best: Client | None = None
    best_distance = math.inf
    for client in clients:
        distance = levenshtein_distance(normalized, normalize_client_name(client.name, config))
        if distance < best_distance:
            best_distance = distance
            best = client
            if distance == 0:
                break

    threshold = max_allowed_distance(normalized, config.max_distance_ratio)
    if best is None or best_distance > threshold:
        logger.debug(
            "No client match for %r (best distance %s > %d)",
            candidate_name,
            best_distance,
            threshold,
        )
        return None

    logger.debug(
        "Matched %r to client %s (distance %d <= %d)",
        candidate_name,
        best.id,
        best_distance,
        threshold,
    )
    return best


# --- Token Matching ---


def extract_tokens(name: str, config: ClientMatchConfig = DEFAULT_CONFIG) -> list[str]:
    """Significant words of a name: longer than two chars and not a stop word."""
    cleaned = _TOKEN_NOISE.sub("", name.lower())
    stop_words = set(config.stop_words)
    return [t for t in cleaned.split() if len(t) > 2 and t not in stop_words]


def token_similarity(a: str, b: str, config: ClientMatchConfig = DEFAULT_CONFIG) -> float:
    """Share of significant words in ``a`` with a close counterpart in ``b``."""
    tokens_a = extract_tokens(a, config)
    tokens_b = extract_tokens(b, config)
    if not tokens_a or not tokens_b:
        return 0.0

    matches = sum(
        1
        for ta in tokens_a
        if any(similarity_ratio(ta, tb) > config.token_similarity for tb in tokens_b)
    )
    return matches / max(len(tokens_a), len(tokens_b))


# --- Ranked Matching ---


def _best_index(scores: list[float]) -> int:
    best = 0
    for i, score in enumerate(scores):
        if score > scores[best]:
            best = i
    return best


def _suggest(
    clients: Sequence[Client],
    scores: list[float],
    *,
    above: float | None,
    limit: int,
    exclude: int | None = None,
) -> tuple[ClientSuggestion, ...]:
    ranked = [
        (i, score)
        for i, score in enumerate(scores)
        if i != exclude and (above is None or score > above)
    ]
    # sorted() is stable: equal scores keep input order
    ranked = sorted(ranked, key=lambda item: item[1], reverse=True)[:limit]
    return tuple(ClientSuggestion(client=clients[i], similarity=score) for i, score in ranked)


def rank_client_matches(
    candidate_name: str,
    clients: Sequence[Client],
    config: ClientMatchConfig = DEFAULT_CONFIG,
) -> ClientMatchResult:
    """
    Multi-level client matching for import review.

    1. exact: equal after normalization (confidence 1.0)
    2. fuzzy: edit-distance similarity >= fuzzy_accept
    3. token: significant-word overlap >= token_accept
    4. manual: no client, top suggestions for the user to pick from
    """
    if not clients:
        return ClientMatchResult(client=None, confidence=0.0)

    normalized = normalize_client_name(candidate_name, config)
    normalized_names = [normalize_client_name(c.name, config) for c in clients]

    # Level 1: exact
    for client, name in zip(clients, normalized_names, strict=True):
        if name == normalized:
            logger.debug("Exact client match for %r -> %s", candidate_name, client.id)
            return ClientMatchResult(client=client, confidence=1.0, method=MatchMethod.EXACT)

    # Level 2: fuzzy
    fuzzy_scores = [similarity_ratio(normalized, name) for name in normalized_names]
    best = _best_index(fuzzy_scores)
    if fuzzy_scores[best] >= config.fuzzy_accept:
        logger.debug(
            "Fuzzy client match for %r -> %s (%.2f)",
            candidate_name,
            clients[best].id,
            fuzzy_scores[best],
        )
        return ClientMatchResult(
            client=clients[best],
            confidence=fuzzy_scores[best],
            suggestions=_suggest(
                clients,
                fuzzy_scores,
                above=config.fuzzy_suggest,
                limit=config.max_suggestions,
                exclude=best,
            ),
            method=MatchMethod.FUZZY,
        )

    # Level 3: token overlap
    token_scores = [token_similarity(candidate_name, c.name, config) for c in clients]
    best_token = _best_index(token_scores)
    if token_scores[best_token] >= config.token_accept:
        logger.debug(
            "Token client match for %r -> %s (%.2f)",
            candidate_name,
            clients[best_token].id,
            token_scores[best_token],
        )
        return ClientMatchResult(
            client=clients[best_token],
            confidence=token_scores[best_token],
            suggestions=_suggest(
                clients,
                token_scores,
                above=config.token_suggest,
                limit=config.max_suggestions,
                exclude=best_token,
            ),
            method=MatchMethod.TOKEN,
        )

    # Level 4: manual review
    logger.debug("No automatic client match for %r, offering suggestions", candidate_name)
    return ClientMatchResult(
        client=None,
        confidence=0.0,
        suggestions=_suggest(
            clients,
            fuzzy_scores,
            above=None,
            limit=config.max_manual_suggestions,
        ),
        method=MatchMethod.MANUAL,
    )
