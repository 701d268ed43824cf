"""
Delimited text -> numeric vectors, scored pairs and feature matrices.

All functions are pure: they take already-read text and never touch files or stdin.
Malformed scalars in vectors/matrices are fatal (MalformedScalarError); malformed
rows in pair input are dropped with a warning.
"""

import logging

from domain.errors import MalformedRow, MalformedScalarError
from domain.schemas import FeatureMatrix

logger = logging.getLogger(__name__)

ScoredPair = tuple[float, float]


def _parse_float(token: str) -> float:
    """Parse a trimmed float literal. Digit-group underscores are not accepted."""
    token = token.strip()
    if "_" in token:
        raise ValueError(f"invalid float literal: {token!r}")
    return float(token)


def _is_blank(line: str) -> bool:
    return not line.strip()


def parse_delimited(text: str, sep: str = ",") -> list[float]:
    """
    Split a single string on `sep` and parse every token as a float.

    Raises:
        MalformedScalarError: On the first token that is not a float (column_index set).
    """
    out: list[float] = []
    for col, token in enumerate(text.split(sep)):
        try:
            out.append(_parse_float(token))
        except ValueError as e:
            raise MalformedScalarError(text, 0, column_index=col) from e
    return out


def parse_vector(text: str, has_header: bool = False) -> list[float]:
    """
    Parse one float per line.

    Args:
        text: Newline-delimited input
        has_header: Skip line 0

    Returns:
        Values in input order (blank lines skipped)

    Raises:
        MalformedScalarError: With the offending line and its 0-based line index
    """
    data: list[float] = []

    for index, line in enumerate(text.split("\n")):
        if index == 0 and has_header:
            continue
        if _is_blank(line):
            continue

        try:
            data.append(_parse_float(line))
        except ValueError as e:
            raise MalformedScalarError(line, index) from e

    return data


def parse_scored_pairs_with_report(text: str) -> tuple[list[ScoredPair], list[MalformedRow]]:
    """
    Parse `score,actual` lines, returning the valid pairs and the dropped rows.

    A line without exactly two columns is dropped and logged as a warning.
    A column that does not parse as a float is fatal.

    Raises:
        MalformedScalarError: If either column of a two-column line is not a float
    """
    pairs: list[ScoredPair] = []
    dropped: list[MalformedRow] = []

    for index, line in enumerate(text.split("\n")):
        if _is_blank(line):
            continue

        cols = line.split(",")
        if len(cols) != 2:
            logger.warning("invalid column count for scored pair at line %d: %r", index, line)
            dropped.append(MalformedRow(line=line, line_index=index, column_count=len(cols)))
            continue

        values: list[float] = []
        for col, token in enumerate(cols):
            try:
                values.append(_parse_float(token))
            except ValueError as e:
                raise MalformedScalarError(line, index, column_index=col) from e

        pairs.append((values[0], values[1]))

    return pairs, dropped


def parse_scored_pairs(text: str) -> list[ScoredPair]:
    """Parse `score,actual` lines; see parse_scored_pairs_with_report for the error policy."""
    pairs, _ = parse_scored_pairs_with_report(text)
    return pairs


def parse_matrix(text: str, label_col: int | None = None, has_header: bool = False) -> FeatureMatrix:
    """
    Parse comma-delimited rows into features, holding out `label_col` as labels.

    Rows are processed independently: no width check is made across rows, so a
    ragged input produces ragged feature rows.

    Args:
        text: Newline-delimited, comma-separated input
        label_col: 0-based column index to hold out (None keeps every column as a feature)
        has_header: Skip line 0

    Returns:
        FeatureMatrix with rows and labels

    Raises:
        MalformedScalarError: With the line, line index and column index of the bad field
    """
    rows: list[list[float]] = []
    labels: list[float] = []

    for index, line in enumerate(text.split("\n")):
        if index == 0 and has_header:
            continue
        if _is_blank(line):
            continue

        row: list[float] = []
        for col, token in enumerate(line.split(",")):
            try:
                value = _parse_float(token)
            except ValueError as e:
                raise MalformedScalarError(line, index, column_index=col) from e

            if col == label_col:
                labels.append(value)
            else:
                row.append(value)

        rows.append(row)

    if label_col is not None and len(labels) != len(rows):
        logger.warning(
            "label column %d present in %d of %d rows; labels are not aligned with rows",
            label_col,
            len(labels),
            len(rows),
        )

    return FeatureMatrix(rows=rows, labels=labels)
