"""Descriptive statistics over a sample sequence."""

from collections.abc import Sequence

import numpy as np

from domain.errors import EmptyInputError, NonFiniteValueError
from domain.schemas import SpreadStats


def mean(xs: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sample."""
    if len(xs) == 0:
        return 0.0
    return float(np.mean(np.asarray(xs, dtype=float)))


def median(xs: Sequence[float]) -> float:
    """
    Middle element of the sorted sample, without interpolation.

    - empty -> 0.0
    - one element -> that element
    - two elements -> xs[0] + xs[1] / 2.0 (kept for output compatibility; not an average)
    - otherwise -> sorted(xs)[len(xs) // 2] (upper-middle for even lengths)

    The input is not modified.
    """
    n = len(xs)
    if n == 0:
        return 0.0
    if n == 1:
        return float(xs[0])
    if n == 2:
        return float(xs[0] + xs[1] / 2.0)

    ordered = sorted(float(x) for x in xs)
    return ordered[n // 2]


def mode(xs: Sequence[float], precision: int = 1) -> float:
    """
    Most frequent value after quantization to 1/precision.

    Each value is scaled by `precision` and truncated toward zero into an integer
    bucket. The bucket with the highest count wins; ties go to the smallest bucket.

    Args:
        xs: Sample values (must be finite)
        precision: Buckets per unit, >= 1 (e.g. 100 -> two decimal places)

    Returns:
        Winning bucket divided by precision

    Raises:
        EmptyInputError: If xs is empty
        NonFiniteValueError: If xs holds NaN/inf, or scaling by precision overflows
        ValueError: If precision < 1
    """
    if precision < 1:
        raise ValueError(f"precision must be >= 1, got {precision}")

    arr = np.asarray(xs, dtype=float)
    if arr.size == 0:
        raise EmptyInputError("cannot compute mode of zero numbers")
    if not np.all(np.isfinite(arr)):
        raise NonFiniteValueError("cannot compute mode of non-finite values")

    # buckets stay float64; an int64 cast would wrap for magnitudes >= 2**63
    with np.errstate(over="ignore"):
        buckets = np.trunc(arr * precision)
    if not np.all(np.isfinite(buckets)):
        raise NonFiniteValueError(f"values overflow when scaled by precision={precision}")

    values, counts = np.unique(buckets, return_counts=True)
    # np.unique sorts ascending and argmax takes the first maximum
    best = values[int(np.argmax(counts))]
    return float(best) / precision


def stdev_var_mean(xs: Sequence[float]) -> SpreadStats:
    """Population standard deviation, population variance and mean; all 0.0 for fewer than 2 values."""
    if len(xs) <= 1:
        return SpreadStats()

    arr = np.asarray(xs, dtype=float)
    var = float(np.var(arr))
    return SpreadStats(stdev=float(np.sqrt(var)), variance=var, mean=float(np.mean(arr)))


def describe(xs: Sequence[float], precision: int = 1) -> dict[str, float | int | None]:
    """Summary record used by the `stats` command. Mode is None for an empty sample."""
    spread = stdev_var_mean(xs)
    return {
        "count": len(xs),
        "mean": mean(xs),
        "median": median(xs),
        "mode": mode(xs, precision) if len(xs) else None,
        "stdev": spread.stdev,
        "variance": spread.variance,
    }
