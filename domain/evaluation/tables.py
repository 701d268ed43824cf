"""Tabular views of confusion matrices, per-class rates and threshold curves."""

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from domain.schemas import ClassRates, ThresholdRow

RATE_COLUMNS = ["label", "tp", "fp", "fn", "tn", "tpr", "fpr", "fnr", "tnr"]
THRESHOLD_COLUMNS = ["threshold", "precision", "recall", "f1", "fpr"]


def confusion_matrix_frame(matrix: Sequence[Sequence[int]]) -> pd.DataFrame:
    """
    Confusion matrix as a DataFrame.

    Rows are predicted classes (`pred_<k>`), columns are actual classes (`actual_<k>`).
    """
    n = len(matrix)
    return pd.DataFrame(
        [list(row) for row in matrix],
        index=[f"pred_{k}" for k in range(n)],
        columns=[f"actual_{k}" for k in range(n)],
        dtype="int64",
    )


def class_rates_frame(records: Sequence[ClassRates]) -> pd.DataFrame:
    """One row per class, ordered by label. Undefined rates stay NaN."""
    if not records:
        return pd.DataFrame(columns=RATE_COLUMNS)
    df = pd.DataFrame([r.model_dump() for r in records], columns=RATE_COLUMNS)
    return df.sort_values("label").reset_index(drop=True)


def threshold_frame(rows: Sequence[ThresholdRow]) -> pd.DataFrame:
    """One row per threshold, ascending."""
    if not rows:
        return pd.DataFrame(columns=THRESHOLD_COLUMNS)
    return pd.DataFrame([r.model_dump() for r in rows], columns=THRESHOLD_COLUMNS)


def _save(df: pd.DataFrame, output_dir: Path, filename: str, index: bool) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / filename
    df.to_csv(out_path, index=index)
    return out_path


def confusion_matrix_frame_and_save(matrix: Sequence[Sequence[int]], output_dir: Path, filename: str) -> Path:
    """Build the confusion matrix table and write it as CSV (index kept)."""
    return _save(confusion_matrix_frame(matrix), output_dir, filename, index=True)


def class_rates_frame_and_save(records: Sequence[ClassRates], output_dir: Path, filename: str) -> Path:
    """Build the per-class rate table and write it as CSV."""
    return _save(class_rates_frame(records), output_dir, filename, index=False)


def threshold_frame_and_save(rows: Sequence[ThresholdRow], output_dir: Path, filename: str) -> Path:
    """Build the threshold curve table and write it as CSV."""
    return _save(threshold_frame(rows), output_dir, filename, index=False)
