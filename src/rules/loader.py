import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules

logger = logging.getLogger(__name__)

RULES_PATH_ENV = "GIGLEDGER_RULES_PATH"
DEFAULT_RULES_FILE = "rules.yaml"


def resolve_rules_path(base_dir: Path | None = None) -> Path:
    """Rules path from the environment, falling back to ./rules.yaml."""
    override = os.environ.get(RULES_PATH_ENV)
    if override:
        return Path(override)
    return (base_dir or Path(os.getcwd())) / DEFAULT_RULES_FILE


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Rules file must contain a mapping at the top level")

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.info(
        "Rules loaded from %s (%d rate limit policies)",
        path,
        len(rules.rate_limits.policies),
    )
    return rules
