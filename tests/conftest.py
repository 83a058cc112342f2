from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


class FakeTime:
    """Deterministic TimePort; advance() moves the clock forward."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def rules_path() -> Path:
    return PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def rules(rules_path: Path) -> Rules:
    """Rules loaded from the project's rules.yaml."""
    return load_rules(rules_path)
