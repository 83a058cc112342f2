import logging
import math
import os
from collections.abc import Callable
from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, HTTPException, Request, status

from src.adapters.rules_ports import ClientMatchRulesAdapter, DedupeRulesAdapter
from src.app_shell.rate_limit import RateLimiter, RateLimitResult
from src.rules.loader import load_rules, resolve_rules_path
from src.rules.models import Rules

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = resolve_rules_path(self.base_dir)
        self.trust_forwarded_for = os.environ.get("GIGLEDGER_TRUST_PROXY", "1") == "1"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


def get_client_match_rules(rules: Rules = Depends(get_rules)) -> ClientMatchRulesAdapter:
    """
    Rules port for the client_match component.

    Usage:
        @router.post("/import/match-client")
        def match(body: MatchRequest, rules=Depends(get_client_match_rules)):
            return run_match(MatchClientInput(body.name, clients), rules=rules)
    """
    return ClientMatchRulesAdapter(rules.client_matching)


def get_dedupe_rules(rules: Rules = Depends(get_rules)) -> DedupeRulesAdapter:
    """Rules port for the expense_dedupe component, used like get_client_match_rules."""
    return DedupeRulesAdapter(rules.expense_dedupe)


# --- Rate limiting ---
@lru_cache
def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter shared by every request."""
    return RateLimiter(get_rules().rate_limits)


def get_client_identifier(request: Request, settings: Settings | None = None) -> str:
    """First X-Forwarded-For hop when behind a proxy, else the socket peer."""
    settings = settings or get_settings()
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limit_exceeded(result: RateLimitResult, now: datetime | None = None) -> HTTPException:
    """429 response for a rejected request."""
    headers: dict[str, str] = {}
    if result.reset_at is not None:
        now = now or datetime.now(UTC)
        retry_after = max(0, math.ceil((result.reset_at - now).total_seconds()))
        headers["Retry-After"] = str(retry_after)
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=RATE_LIMIT_MESSAGE,
        headers=headers or None,
    )


def require_rate_limit(policy: str) -> Callable[..., RateLimitResult]:
    """
    Dependency factory gating a route behind a named rate limit policy.

    Usage:
        @router.post("/import", dependencies=[Depends(require_rate_limit("import"))])
    """

    def _dependency(
        request: Request,
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> RateLimitResult:
        identifier = get_client_identifier(request)
        result = limiter.check_policy(policy, identifier)
        if not result.allowed:
            raise rate_limit_exceeded(result, now=limiter.now())
        return result

    return _dependency
