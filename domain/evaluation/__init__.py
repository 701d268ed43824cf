"""
Classification evaluation.

Provides:
- Confusion matrix construction from scored pairs
- Per-class TPR/FPR/FNR/TNR
- Threshold sweep (precision/recall/F1/FPR curve)
- pandas tables for all of the above

Most functions are pure (depend only on numpy, pandas, pydantic); *_and_save helpers write outputs to disk.
"""

from domain.evaluation.confusion import (
    build_confusion_matrix,
    canonical_class_key,
    confusion_matrix_stats,
    predict_class,
    resolve_decision_rule,
)
from domain.evaluation.tables import (
    class_rates_frame,
    class_rates_frame_and_save,
    confusion_matrix_frame,
    confusion_matrix_frame_and_save,
    threshold_frame,
    threshold_frame_and_save,
)
from domain.evaluation.threshold import threshold_steps, threshold_table_stats

__all__ = [
    "build_confusion_matrix",
    "canonical_class_key",
    "confusion_matrix_stats",
    "predict_class",
    "resolve_decision_rule",
    "threshold_steps",
    "threshold_table_stats",
    "confusion_matrix_frame",
    "confusion_matrix_frame_and_save",
    "class_rates_frame",
    "class_rates_frame_and_save",
    "threshold_frame",
    "threshold_frame_and_save",
]
