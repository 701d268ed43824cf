"""
Sample and byte-level statistics.

Provides:
- Mean, median, quantized mode, population spread
- Byte histograms and Shannon entropy
"""

from domain.statistics.byte_distribution import byte_histogram, entropy
from domain.statistics.descriptive import describe, mean, median, mode, stdev_var_mean

__all__ = [
    "mean",
    "median",
    "mode",
    "stdev_var_mean",
    "describe",
    "byte_histogram",
    "entropy",
]
