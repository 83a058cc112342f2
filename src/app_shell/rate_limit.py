"""
Fixed-window rate limiting for import and translation endpoints.

Each identifier gets a counter that resets when its window ends. Expired
entries are swept lazily from inside check(), at most once per sweep
interval. State lives in process memory: it is not shared between workers
and starts empty on restart.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from threading import Lock
from typing import Protocol

from src.domain.entities import RateLimitEntry
from src.rules.models import RateLimitRules

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = timedelta(minutes=5)


class TimePort(Protocol):
    """Protocol for time operations (enables testing with deterministic time)."""

    def now(self) -> datetime:
        """Return current UTC time."""
        ...


class SystemTimeAdapter:
    """Production time adapter using system clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: datetime | None = None

    def __bool__(self) -> bool:
        return self.allowed


class RateLimiter:
    def __init__(
        self,
        rules: RateLimitRules | None = None,
        time_port: TimePort | None = None,
    ):
        self.rules = rules if rules is not None else RateLimitRules()
        self._time = time_port if time_port is not None else SystemTimeAdapter()
        self._sweep_interval = timedelta(seconds=self.rules.sweep_interval_seconds)
        self._entries: dict[str, RateLimitEntry] = {}
        self._last_sweep = self._time.now()
        self._lock = Lock()

    def now(self) -> datetime:
        return self._time.now()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        # An empty limiter is still a limiter
        return True

    def _sweep(self, now: datetime) -> None:
        """Drop expired windows. Caller holds the lock."""
        if now - self._last_sweep < self._sweep_interval:
            return
        self._last_sweep = now

        expired = [key for key, entry in self._entries.items() if entry.reset_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Rate limiter swept %d expired entries", len(expired))

    def check(self, identifier: str, limit: int, window_ms: int) -> RateLimitResult:
        """
        Count a request against ``identifier``.

        The first request (or the first after the window ended) opens a new
        window of ``window_ms``. Rejected requests are not counted.
        """
        if limit <= 0:
            return RateLimitResult(allowed=False, remaining=0)
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")

        with self._lock:
            now = self._time.now()
            self._sweep(now)

            entry = self._entries.get(identifier)
            if entry is None or now >= entry.reset_at:
                entry = RateLimitEntry(count=1, reset_at=now + timedelta(milliseconds=window_ms))
                self._entries[identifier] = entry
                return RateLimitResult(allowed=True, remaining=limit - 1, reset_at=entry.reset_at)

            if entry.count >= limit:
                logger.warning("Rate limit exceeded for %s (limit %d)", identifier, limit)
                return RateLimitResult(allowed=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=limit - entry.count,
                reset_at=entry.reset_at,
            )

    def check_policy(self, policy: str, identifier: str) -> RateLimitResult:
        """Check against a named policy from the rules (``KeyError`` if unknown)."""
        cfg = self.rules.policies[policy]
        return self.check(f"{policy}:{identifier}", cfg.limit, cfg.window_ms)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
            self._last_sweep = self._time.now()
