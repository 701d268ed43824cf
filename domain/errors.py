"""Error taxonomy for parsing and metric computation."""

from dataclasses import dataclass


class ScorekitError(Exception):
    """Base class for all errors raised by the domain layer."""


class MalformedScalarError(ScorekitError, ValueError):
    """A field that must be numeric did not parse. Fatal for the current input."""

    def __init__(self, line: str, line_index: int, column_index: int | None = None) -> None:
        self.line = line
        self.line_index = line_index
        self.column_index = column_index
        where = f"line {line_index}" if column_index is None else f"line {line_index}, column {column_index}"
        super().__init__(f"error converting to float: {line!r} at {where}")


class EmptyInputError(ScorekitError, ValueError):
    """A reduction that has no defined value for zero samples was given zero samples."""


class NonFiniteValueError(ScorekitError, ValueError):
    """A NaN or infinite value reached a computation that needs finite numbers."""


class InputReadError(ScorekitError):
    """The input could not be read or decoded."""


class ClassIndexError(ScorekitError, IndexError):
    """A predicted or actual class index falls outside the confusion matrix."""

    def __init__(self, kind: str, index: int, size: int, score: float, actual: float) -> None:
        self.kind = kind
        self.index = index
        self.size = size
        super().__init__(
            f"{kind} class index {index} out of range for {size}x{size} matrix (score={score}, actual={actual})"
        )


class UnsupportedClassificationError(ScorekitError):
    """A binary-only operation received labels other than 0 and 1."""


@dataclass(frozen=True)
class MalformedRow:
    """A pair-parsing line dropped because it did not have exactly two columns."""

    line: str
    line_index: int
    column_count: int
