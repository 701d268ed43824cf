"""Pydantic value types and policy enums shared across the domain layer."""

from enum import Enum

import pandas as pd
from pydantic import BaseModel, Field


class DecisionRule(str, Enum):
    """How a score is mapped to a predicted class row."""

    AUTO = "auto"
    THRESHOLD = "threshold"  # floor(score + (1 - t))
    ROUND = "round"  # floor(score + 0.5)
    TRUNCATE = "truncate"  # floor(score)


class ClassSizing(str, Enum):
    """How the confusion matrix dimension is derived from the input."""

    OBSERVED = "observed"  # number of distinct actual labels seen
    MAX_LABEL = "max_label"  # largest actual label + 1; predictions never grow the matrix


class TnrDenominator(str, Enum):
    """Which count sits next to TN in the TNR denominator."""

    FP = "fp"
    FN = "fn"  # legacy output compatibility


class NonBinaryPolicy(str, Enum):
    """What a binary-only operation does with labels outside {0, 1}."""

    EXCLUDE = "exclude"
    RAISE = "raise"


class SpreadStats(BaseModel):
    """Population spread of a sample."""

    stdev: float = 0.0
    variance: float = 0.0
    mean: float = 0.0


class ClassRates(BaseModel):
    """Per-class counts and rates derived from a confusion matrix."""

    label: int = Field(..., description="Class index (row/column of the matrix).")
    tp: int
    fp: int
    fn: int
    tn: int
    tpr: float = Field(..., description="TP / (TP + FN); NaN when undefined.")
    fpr: float = Field(..., description="FP / (FP + TN); NaN when undefined.")
    fnr: float = Field(..., description="FN / (FN + TP); NaN when undefined.")
    tnr: float = Field(..., description="TN / (TN + FP) (or TN + FN in legacy mode); NaN when undefined.")


class ThresholdRow(BaseModel):
    """Binary metrics at a single decision threshold."""

    threshold: float
    precision: float
    recall: float
    f1: float
    fpr: float


class FeatureMatrix(BaseModel):
    """Parsed feature rows with the held-out label column, if one was requested."""

    rows: list[list[float]] = Field(default_factory=list)
    labels: list[float] = Field(default_factory=list)

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def is_ragged(self) -> bool:
        return len({len(r) for r in self.rows}) > 1

    def to_frame(self, label_name: str = "label") -> pd.DataFrame:
        """
        Convert to a DataFrame with columns f0..fN (ragged rows are padded with NaN).

        The label column is attached only when there is exactly one label per row.
        """
        width = max((len(r) for r in self.rows), default=0)
        df = pd.DataFrame(self.rows, columns=[f"f{i}" for i in range(width)], dtype=float)
        if self.labels and len(self.labels) == len(self.rows):
            df[label_name] = self.labels
        return df
