"""
Numeric parsing of delimited text.

All functions in this module are pure (no file I/O).
"""

from domain.parsing.numeric import (
    ScoredPair,
    parse_delimited,
    parse_matrix,
    parse_scored_pairs,
    parse_scored_pairs_with_report,
    parse_vector,
)

__all__ = [
    "ScoredPair",
    "parse_vector",
    "parse_scored_pairs",
    "parse_scored_pairs_with_report",
    "parse_matrix",
    "parse_delimited",
]
