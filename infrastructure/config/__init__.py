"""
Configuration management: models, loading, and validation.

Handles:
- AnalysisConfig: Main run configuration
- Section configs: parsing, stats, confusion, sweep

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_analysis_config, parse_analysis_config
from infrastructure.config.models import (
    AnalysisConfig,
    ConfusionConfig,
    ParsingConfig,
    StatsConfig,
    SweepConfig,
)

__all__ = [
    # Main config (most commonly used)
    "AnalysisConfig",
    "load_analysis_config",
    "parse_analysis_config",
    # Sections
    "ParsingConfig",
    "StatsConfig",
    "ConfusionConfig",
    "SweepConfig",
]
