"""
Domain layer: Numeric parsing and metric computation with no I/O.

Contains:
- schemas: Pydantic value types and policy enums
- errors: Error taxonomy for parsing and metrics
- parsing: Delimited text -> vectors, scored pairs, feature matrices
- statistics: Descriptive statistics, byte histograms, entropy
- evaluation: Confusion matrices, per-class rates, threshold sweeps
"""

from domain.errors import (
    ClassIndexError,
    EmptyInputError,
    InputReadError,
    MalformedRow,
    MalformedScalarError,
    NonFiniteValueError,
    ScorekitError,
    UnsupportedClassificationError,
)
from domain.schemas import (
    ClassRates,
    ClassSizing,
    DecisionRule,
    FeatureMatrix,
    NonBinaryPolicy,
    SpreadStats,
    ThresholdRow,
    TnrDenominator,
)

__all__ = [
    "ClassRates",
    "ClassSizing",
    "DecisionRule",
    "FeatureMatrix",
    "NonBinaryPolicy",
    "SpreadStats",
    "ThresholdRow",
    "TnrDenominator",
    "ScorekitError",
    "MalformedScalarError",
    "MalformedRow",
    "EmptyInputError",
    "NonFiniteValueError",
    "InputReadError",
    "ClassIndexError",
    "UnsupportedClassificationError",
]
