"""
Rules loading and schema validation tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from src.rules.loader import RULES_PATH_ENV, load_rules, resolve_rules_path
from src.rules.models import RateLimitWindow, Rules


def write_rules(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestLoadRules:
    """Test rules file loading."""

    def test_project_rules_file(self, rules: Rules) -> None:
        assert rules.project.slug == "gigledger"
        assert rules.client_matching.max_distance_ratio == 0.3
        assert rules.expense_dedupe.supplier_threshold == 0.7
        assert set(rules.rate_limits.policies) == {"import", "scan", "translate"}

    def test_policy_window_in_ms(self, rules: Rules) -> None:
        assert rules.rate_limits.policies["import"].window_ms == 60_000

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0.0004, 1), (0.001, 1), (1.1, 1100), (0.0016, 2), (60, 60_000)],
    )
    def test_window_ms_never_zero(self, seconds: float, expected: int) -> None:
        assert RateLimitWindow(limit=1, window_seconds=seconds).window_ms == expected

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "missing.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("", encoding="utf-8")

        rules = load_rules(path)

        assert rules == Rules()
        assert rules.client_matching.suffixes == ["ab", "aktiebolag", "hb", "kb"]
        assert rules.rate_limits.sweep_interval_seconds == 300
        assert rules.rate_limits.policies == {}

    def test_partial_section(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"expense_dedupe": {"supplier_threshold": 0.8}})
        rules = load_rules(path)
        assert rules.expense_dedupe.supplier_threshold == 0.8
        assert "gmbh" in rules.expense_dedupe.suffixes

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("client_matching: [unclosed", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, ["not", "a", "mapping"])
        with pytest.raises(ValueError, match="mapping"):
            load_rules(path)

    def test_unknown_section_rejected(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"billing": {"enabled": True}})
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(path)

    def test_threshold_out_of_range(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"expense_dedupe": {"supplier_threshold": 1.5}})
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(path)

    def test_negative_limit_rejected(self, tmp_path: Path) -> None:
        path = write_rules(
            tmp_path,
            {"rate_limits": {"policies": {"import": {"limit": -1, "window_seconds": 60}}}},
        )
        with pytest.raises(ValueError):
            load_rules(path)

    def test_policy_name_with_colon_rejected(self, tmp_path: Path) -> None:
        path = write_rules(
            tmp_path,
            {"rate_limits": {"policies": {"a:b": {"limit": 1, "window_seconds": 60}}}},
        )
        with pytest.raises(ValueError, match="policy name"):
            load_rules(path)


class TestResolveRulesPath:
    """Test rules path resolution."""

    def test_default_is_rules_yaml_in_base_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(RULES_PATH_ENV, raising=False)
        assert resolve_rules_path(tmp_path) == tmp_path / "rules.yaml"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom.yaml"
        monkeypatch.setenv(RULES_PATH_ENV, str(custom))
        assert resolve_rules_path(tmp_path) == custom
