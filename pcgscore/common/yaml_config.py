from pathlib import Path

import yaml
from pydantic import ValidationError

from pcgscore.common.config import ConfigError, ScoringConfig


def load_scoring_config(path: str | Path = "scoring.yaml") -> ScoringConfig:
    """Load scoring configuration from a YAML file.

    Args:
        path: Path to the config YAML file

    Returns:
        ScoringConfig loaded from the `scoring` key of the file, or defaults
        if the file doesn't exist or is empty

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return ScoringConfig()
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {str(path)!r}: {e}") from e

    if data is None:
        return ScoringConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{str(path)!r} must contain a mapping at the top level")

    scoring_data = data.get("scoring") or {}
    if not isinstance(scoring_data, dict):
        raise ConfigError(f"'scoring' in {str(path)!r} must be a mapping")
    try:
        return ScoringConfig(**scoring_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid scoring configuration in {str(path)!r}: {e}") from e
