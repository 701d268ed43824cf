"""Threshold sweep: binary precision / recall / F1 / FPR at stepped decision thresholds."""

import logging
import math
from collections.abc import Sequence

from domain.errors import UnsupportedClassificationError
from domain.schemas import NonBinaryPolicy, ThresholdRow

logger = logging.getLogger(__name__)

DEFAULT_START = 0.05
DEFAULT_STOP = 1.0
DEFAULT_STEP = 0.05


def threshold_steps(
    start: float = DEFAULT_START,
    stop: float = DEFAULT_STOP,
    step: float = DEFAULT_STEP,
) -> list[float]:
    """
    Thresholds start, start + step, ... up to and including stop.

    Each value is computed as start + k * step and rounded to 10 decimals, so
    0.05..1.0 by 0.05 yields exactly 20 values ending at 1.0.
    """
    if step <= 0:
        raise ValueError(f"step must be > 0, got {step}")
    if start > stop:
        raise ValueError(f"start ({start}) must be <= stop ({stop})")

    n = math.floor((stop - start) / step + 1e-9)
    return [round(start + k * step, 10) for k in range(n + 1)]


def _ratio(num: float, den: float) -> float:
    return num / den if den else float("nan")


def threshold_table_stats(
    pairs: Sequence[tuple[float, float]],
    *,
    start: float = DEFAULT_START,
    stop: float = DEFAULT_STOP,
    step: float = DEFAULT_STEP,
    non_binary: NonBinaryPolicy = NonBinaryPolicy.EXCLUDE,
) -> list[ThresholdRow]:
    """
    Evaluate binary metrics at every threshold from `start` to `stop`.

    At threshold t a pair (p, a) counts as TP if p >= t and a == 1, FP if p >= t and
    a == 0, FN if p < t and a == 1, TN if p < t and a == 0.

    Args:
        pairs: (score, actual) pairs
        start, stop, step: Threshold range (inclusive of stop)
        non_binary: EXCLUDE drops pairs whose actual is not 0/1 (with a warning);
            RAISE raises UnsupportedClassificationError

    Returns:
        One ThresholdRow per threshold, ascending; undefined ratios are NaN
    """
    binary = [(p, a) for p, a in pairs if a == 0.0 or a == 1.0]
    excluded = len(pairs) - len(binary)

    if excluded:
        if non_binary is NonBinaryPolicy.RAISE:
            raise UnsupportedClassificationError(
                f"threshold sweep is binary-only; {excluded} pair(s) have labels other than 0/1"
            )
        logger.warning("threshold sweep excluded %d pair(s) with labels other than 0/1", excluded)

    rows: list[ThresholdRow] = []
    for t in threshold_steps(start, stop, step):
        tp = fp = fn = tn = 0
        for p, a in binary:
            if p >= t:
                if a == 1.0:
                    tp += 1
                else:
                    fp += 1
            elif a == 1.0:
                fn += 1
            else:
                tn += 1

        precision = _ratio(tp, tp + fp)
        recall = _ratio(tp, tp + fn)
        f1 = _ratio(2.0 * precision * recall, precision + recall)
        rows.append(
            ThresholdRow(
                threshold=t,
                precision=precision,
                recall=recall,
                f1=f1,
                fpr=_ratio(fp, fp + tn),
            )
        )

    return rows
