"""Confusion matrix and threshold sweep workflows with summary logging."""

import logging
import math
from pathlib import Path

import pandas as pd
from opik import track

from application.constants import CLASS_RATES_FILENAME, CONFUSION_MATRIX_FILENAME, THRESHOLD_CURVE_FILENAME
from domain.evaluation import (
    build_confusion_matrix,
    class_rates_frame,
    class_rates_frame_and_save,
    confusion_matrix_frame,
    confusion_matrix_frame_and_save,
    confusion_matrix_stats,
    threshold_frame,
    threshold_frame_and_save,
    threshold_table_stats,
)
from domain.parsing import parse_scored_pairs_with_report
from infrastructure.config.models import AnalysisConfig

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return "nan" if math.isnan(value) else f"{value:.4f}"


@track(
    name="Scorekit.confusion",
    type="general",
    metadata={"task": "confusion_matrix"},
    capture_input=False,
)
def run_confusion(
    cfg: AnalysisConfig,
    text: str,
    output_dir: Path | None = None,
) -> tuple[dict, pd.DataFrame, pd.DataFrame]:
    """
    Parse scored pairs, build the confusion matrix and derive per-class rates.

    Args:
        cfg: AnalysisConfig instance (confusion section is used)
        text: `score,actual` lines
        output_dir: If given, matrix and rate tables are saved there as CSV

    Returns:
        Tuple of (summary dict, confusion matrix DataFrame, class rates DataFrame)

    Raises:
        MalformedScalarError: If a two-column line holds a non-float
        ClassIndexError: If a predicted/actual class falls outside the matrix
        NonFiniteValueError: If a score or label is NaN/inf
    """
    pairs, dropped = parse_scored_pairs_with_report(text)
    logger.info("Parsed %d scored pairs (%d malformed rows dropped)", len(pairs), len(dropped))

    matrix = build_confusion_matrix(
        pairs,
        cfg.confusion.threshold,
        rule=cfg.confusion.rule,
        sizing=cfg.confusion.sizing,
    )
    rates = confusion_matrix_stats(matrix, tnr_denominator=cfg.confusion.tnr_denominator)

    summary: dict[str, object] = {
        "pairs": len(pairs),
        "dropped_rows": len(dropped),
        "threshold": cfg.confusion.threshold,
        "confusion_matrix": matrix,
        "class_rates": [r.model_dump() for r in rates],
    }

    if output_dir is not None:
        summary["confusion_matrix_path"] = str(
            confusion_matrix_frame_and_save(matrix, output_dir, CONFUSION_MATRIX_FILENAME)
        )
        summary["class_rates_path"] = str(class_rates_frame_and_save(rates, output_dir, CLASS_RATES_FILENAME))

    return summary, confusion_matrix_frame(matrix), class_rates_frame(rates)


@track(
    name="Scorekit.thresholds",
    type="general",
    metadata={"task": "threshold_sweep"},
    capture_input=False,
)
def run_thresholds(
    cfg: AnalysisConfig,
    text: str,
    output_dir: Path | None = None,
) -> tuple[dict, pd.DataFrame]:
    """
    Parse scored pairs and sweep decision thresholds.

    Returns:
        Tuple of (summary dict, threshold curve DataFrame)

    Raises:
        UnsupportedClassificationError: If non-binary labels are present and sweep.non_binary=raise
    """
    pairs, dropped = parse_scored_pairs_with_report(text)
    logger.info("Parsed %d scored pairs (%d malformed rows dropped)", len(pairs), len(dropped))

    rows = threshold_table_stats(
        pairs,
        start=cfg.sweep.start,
        stop=cfg.sweep.stop,
        step=cfg.sweep.step,
        non_binary=cfg.sweep.non_binary,
    )

    summary: dict[str, object] = {
        "pairs": len(pairs),
        "dropped_rows": len(dropped),
        "thresholds": len(rows),
        "curve": [r.model_dump() for r in rows],
    }

    if output_dir is not None:
        summary["threshold_curve_path"] = str(threshold_frame_and_save(rows, output_dir, THRESHOLD_CURVE_FILENAME))

    return summary, threshold_frame(rows)


def log_confusion_summary(summary: dict, cm_df: pd.DataFrame, rates_df: pd.DataFrame) -> None:
    """Log the confusion matrix and per-class rates in human-readable form."""
    logger.info("=== Confusion Summary ===")
    logger.info("Pairs: %d (dropped rows: %d)", summary["pairs"], summary["dropped_rows"])
    logger.info("Confusion matrix (rows=pred, cols=actual):\n%s", cm_df.to_string())

    for rec in summary["class_rates"]:
        logger.info(
            "class %d: TPR=%s FPR=%s FNR=%s TNR=%s",
            rec["label"],
            _fmt(rec["tpr"]),
            _fmt(rec["fpr"]),
            _fmt(rec["fnr"]),
            _fmt(rec["tnr"]),
        )
    logger.debug("Class rates table:\n%s", rates_df.to_string())


def log_threshold_summary(summary: dict, curve_df: pd.DataFrame) -> None:
    """Log the threshold curve and the threshold with the best F1."""
    logger.info("=== Threshold Summary ===")
    logger.info("Pairs: %d (dropped rows: %d)", summary["pairs"], summary["dropped_rows"])
    logger.info("Threshold curve:\n%s", curve_df.to_string(index=False))

    f1 = curve_df["f1"].astype(float) if not curve_df.empty else pd.Series(dtype=float)
    if f1.notna().any():
        best = curve_df.loc[f1.idxmax()]
        logger.info("Best F1: %.4f at threshold %.2f", best["f1"], best["threshold"])
    else:
        logger.info("Best F1: undefined (no positive predictions or no positive labels)")
