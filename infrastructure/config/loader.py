"""Configuration loading from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import AnalysisConfig
from infrastructure.constants import ANALYSIS_FILE

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = {"parsing", "stats", "confusion", "sweep", "output_root", "tracing"}


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict (an empty file is an empty dict)."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def parse_analysis_config(data: dict[str, Any]) -> AnalysisConfig:
    """
    Build an AnalysisConfig from a pre-loaded YAML dict.

    Raises:
        ValueError: On unknown top-level keys or invalid values (pydantic ValidationError)
    """
    unknown = set(data) - KNOWN_SECTIONS
    if unknown:
        raise ValueError(f"Unknown config key(s): {sorted(unknown)}. Known: {sorted(KNOWN_SECTIONS)}")

    return AnalysisConfig.model_validate(data)


def load_analysis_config(config_path: Path | None = None) -> AnalysisConfig:
    """
    Load the analysis config.

    With no path, configs/analysis.yaml is used if present, otherwise defaults.
    An explicit path must exist.
    """
    if config_path is None:
        if not ANALYSIS_FILE.exists():
            logger.debug("No %s found; using default configuration.", ANALYSIS_FILE)
            return AnalysisConfig()
        config_path = ANALYSIS_FILE

    return parse_analysis_config(_load_yaml(config_path))
