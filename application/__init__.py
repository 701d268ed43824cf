"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing one workflow per CLI command.
"""

from application.evaluation import (
    log_confusion_summary,
    log_threshold_summary,
    run_confusion,
    run_thresholds,
)
from application.features import run_matrix
from application.statistics import histogram_frame, run_entropy, run_histogram, run_stats

__all__ = [
    # Evaluation workflows
    "run_confusion",
    "run_thresholds",
    "log_confusion_summary",
    "log_threshold_summary",
    # Statistics workflows
    "run_stats",
    "run_entropy",
    "run_histogram",
    "histogram_frame",
    # Feature preparation
    "run_matrix",
]
