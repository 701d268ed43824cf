"""Confusion matrix construction from scored pairs and per-class rate derivation."""

import logging
import math
from collections.abc import Sequence

import numpy as np

from domain.errors import ClassIndexError, NonFiniteValueError
from domain.schemas import ClassRates, ClassSizing, DecisionRule, TnrDenominator

logger = logging.getLogger(__name__)


def canonical_class_key(value: float) -> str:
    """
    Canonical string form of a class id, used to enumerate distinct classes.

    The value is rounded to float32 and rendered as its shortest positional decimal
    (1.0 -> "1", 0.5 -> "0.5"), so ids that differ only by float noise compare equal.
    """
    return np.format_float_positional(np.float32(value), trim="-")


def resolve_decision_rule(rule: DecisionRule, threshold: float | None, n_classes: int) -> DecisionRule:
    """
    Turn DecisionRule.AUTO into a concrete rule.

    Precedence: explicit threshold, then 0.5 rounding for exactly two classes,
    then truncation.
    """
    if rule is DecisionRule.THRESHOLD and threshold is None:
        raise ValueError("DecisionRule.THRESHOLD requires a threshold")
    if rule is not DecisionRule.AUTO:
        return rule
    if threshold is not None:
        return DecisionRule.THRESHOLD
    if n_classes == 2:
        return DecisionRule.ROUND
    return DecisionRule.TRUNCATE


def predict_class(score: float, rule: DecisionRule, threshold: float | None = None) -> int:
    """Predicted class row for a score under a concrete (non-AUTO) rule."""
    if rule is DecisionRule.THRESHOLD:
        if threshold is None:
            raise ValueError("DecisionRule.THRESHOLD requires a threshold")
        return math.floor(score + (1.0 - threshold))
    if rule is DecisionRule.ROUND:
        return math.floor(score + 0.5)
    if rule is DecisionRule.TRUNCATE:
        return math.floor(score)
    raise ValueError(f"cannot predict with unresolved rule {rule.value!r}")


def build_confusion_matrix(
    pairs: Sequence[tuple[float, float]],
    threshold: float | None = None,
    *,
    rule: DecisionRule = DecisionRule.AUTO,
    sizing: ClassSizing = ClassSizing.OBSERVED,
) -> list[list[int]]:
    """
    Count (predicted, actual) combinations into a square matrix.

    Args:
        pairs: (score, actual) pairs; actual is a class index stored as a float
        threshold: Optional decision threshold (selects DecisionRule.THRESHOLD under AUTO)
        rule: Decision rule; AUTO infers it from the threshold and class count
        sizing: OBSERVED sizes by distinct actual labels, MAX_LABEL by largest actual label + 1

    Returns:
        matrix[predicted][actual] counts; [] for empty input

    Raises:
        ClassIndexError: If a predicted or actual index falls outside the matrix
        NonFiniteValueError: On NaN/inf scores or labels
        ValueError: On THRESHOLD without a threshold
    """
    if not pairs:
        return []

    for score, actual in pairs:
        if not (math.isfinite(score) and math.isfinite(actual)):
            raise NonFiniteValueError(f"non-finite scored pair: ({score}, {actual})")

    n_observed = len({canonical_class_key(actual) for _, actual in pairs})
    concrete = resolve_decision_rule(rule, threshold, n_observed)

    cells = [(predict_class(score, concrete, threshold), math.trunc(actual)) for score, actual in pairs]

    if sizing is ClassSizing.MAX_LABEL:
        size = max(a for _, a in cells) + 1
    else:
        size = n_observed

    logger.debug("confusion matrix: %d pairs, size=%d, rule=%s", len(pairs), size, concrete.value)

    matrix = [[0] * size for _ in range(size)]
    for (predicted, actual_idx), (score, actual) in zip(cells, pairs, strict=True):
        if not 0 <= predicted < size:
            raise ClassIndexError("predicted", predicted, size, score, actual)
        if not 0 <= actual_idx < size:
            raise ClassIndexError("actual", actual_idx, size, score, actual)
        matrix[predicted][actual_idx] += 1

    return matrix


def _ratio(num: int, den: int) -> float:
    return num / den if den else float("nan")


def confusion_matrix_stats(
    matrix: Sequence[Sequence[int]],
    *,
    tnr_denominator: TnrDenominator = TnrDenominator.FP,
) -> list[ClassRates]:
    """
    Per-class TP/FP/FN/TN counts and TPR/FPR/FNR/TNR rates.

    For class i (rows = predicted, columns = actual):
      TP = m[i][i], FP = off-diagonal sum of row i, FN = off-diagonal sum of column i,
      TN = total - TP - FP - FN.

    Zero denominators give NaN. TNR uses TN / (TN + FP) unless
    tnr_denominator=TnrDenominator.FN, which reproduces TN / (TN + FN).

    Returns:
        One record per class, sorted by label
    """
    if len(matrix) == 0:
        return []

    m = np.asarray(matrix, dtype=np.int64)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"confusion matrix must be square, got shape {m.shape}")

    total = int(m.sum())
    tp_all = np.diag(m)
    fp_all = m.sum(axis=1) - tp_all
    fn_all = m.sum(axis=0) - tp_all

    stats: list[ClassRates] = []
    for i in range(m.shape[0]):
        tp, fp, fn = int(tp_all[i]), int(fp_all[i]), int(fn_all[i])
        tn = total - tp - fp - fn
        tnr_other = fp if tnr_denominator is TnrDenominator.FP else fn

        stats.append(
            ClassRates(
                label=i,
                tp=tp,
                fp=fp,
                fn=fn,
                tn=tn,
                tpr=_ratio(tp, tp + fn),
                fpr=_ratio(fp, fp + tn),
                fnr=_ratio(fn, fn + tp),
                tnr=_ratio(tn, tn + tnr_other),
            )
        )

    stats.sort(key=lambda r: r.label)
    return stats
