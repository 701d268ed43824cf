"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Configuration loading (YAML)
- Input reading (files, stdin) and artifact writing (CSV, JSON)
- Observability (logging, tracing)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import AnalysisConfig, load_analysis_config

__all__ = [
    "load_analysis_config",
    "AnalysisConfig",
]
