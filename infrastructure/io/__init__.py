"""I/O utilities: input readers and artifact writers."""

from infrastructure.io.artifacts import write_json, write_table
from infrastructure.io.fs import ensure_exists, read_input_bytes, read_input_text

__all__ = [
    "ensure_exists",
    "read_input_text",
    "read_input_bytes",
    "write_table",
    "write_json",
]
