"""Artifact writers for result tables and summaries."""

import json
import math
from pathlib import Path
from typing import Any

import pandas as pd


def write_table(df: pd.DataFrame, path: Path, index: bool = False) -> Path:
    """
    Write a DataFrame based on file extension.

    Supported formats:
    - CSV: .csv
    - JSON: .json (records orient)

    Raises:
        ValueError: If file format is not supported
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        df.to_csv(path, index=index)
    elif suffix == ".json":
        df.to_json(path, orient="records", indent=2)
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .csv, .json")
    return path


def _json_safe(value: Any) -> Any:
    """Replace NaN/inf floats (not valid JSON) with None, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def write_json(payload: dict[str, Any], path: Path) -> Path:
    """Write a summary dict as indented JSON; undefined rates become null."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(_json_safe(payload), f, ensure_ascii=False, indent=2, default=str)
    return path
