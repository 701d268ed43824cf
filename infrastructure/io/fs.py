"""Filesystem and standard-input readers."""

import sys
from pathlib import Path

from domain.errors import InputReadError


def ensure_exists(path: Path, what: str) -> None:
    """
    Check that a path exists, raise FileNotFoundError if not.

    Args:
        path: Path to check
        what: Description of what this path represents (for error message)

    Raises:
        FileNotFoundError: If path does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing {what} at: {path}")


def read_input_text(path: Path | None) -> str:
    """
    Read UTF-8 text from `path`, or from standard input when path is None.

    Lines read from stdin are re-joined with '\\n', so the result always uses
    '\\n' line endings and ends with one when non-empty.

    Raises:
        FileNotFoundError: If path does not exist
        InputReadError: If the input is not valid UTF-8 or cannot be read
    """
    where = str(path) if path is not None else "<stdin>"
    try:
        if path is not None:
            ensure_exists(path, "input file")
            return path.read_text(encoding="utf-8")
        return "".join(line.rstrip("\r\n") + "\n" for line in sys.stdin)
    except UnicodeDecodeError as e:
        raise InputReadError(f"failed to read input {where}: not valid UTF-8 ({e})") from e
    except IsADirectoryError as e:
        raise InputReadError(f"failed to read input {where}: {e}") from e


def read_input_bytes(path: Path | None) -> bytes:
    """Read raw bytes from `path`, or all of standard input when path is None."""
    if path is not None:
        ensure_exists(path, "input file")
        try:
            return path.read_bytes()
        except IsADirectoryError as e:
            raise InputReadError(f"failed to read input {path}: {e}") from e

    return sys.stdin.buffer.read()
