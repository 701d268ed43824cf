"""Byte-value histogram and Shannon entropy."""

import numpy as np

N_BYTE_VALUES = 256


def _byte_counts(data: bytes) -> np.ndarray:
    return np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=N_BYTE_VALUES)


def byte_histogram(data: bytes) -> list[float]:
    """Frequency of each byte value 0..255 divided by len(data); all zeros for empty input."""
    if len(data) == 0:
        return [0.0] * N_BYTE_VALUES
    counts = _byte_counts(data)
    return (counts / len(data)).astype(float).tolist()


def entropy(data: bytes) -> float:
    """Shannon entropy of the byte distribution in bits (0.0 .. 8.0)."""
    if len(data) == 0:
        return 0.0

    counts = _byte_counts(data)
    freq = counts[counts > 0] / len(data)
    return float(-np.sum(freq * np.log2(freq)))
