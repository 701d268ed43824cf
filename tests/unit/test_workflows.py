import json
import math
from pathlib import Path

import pandas as pd
import pytest

from application import run_confusion, run_entropy, run_histogram, run_matrix, run_stats, run_thresholds
from application.constants import (
    CLASS_RATES_FILENAME,
    CONFUSION_MATRIX_FILENAME,
    FEATURES_FILENAME,
    HISTOGRAM_FILENAME,
    THRESHOLD_CURVE_FILENAME,
)
from domain.errors import ClassIndexError, InputReadError, MalformedScalarError, UnsupportedClassificationError
from infrastructure.config import parse_analysis_config
from infrastructure.config.models import AnalysisConfig
from infrastructure.io import read_input_bytes, read_input_text, write_json

PAIRS_TEXT = "0.9,1\n0.1,0\nbad_row\n0.6,1\n0.4,0\n"


def test_run_stats_uses_header_and_precision() -> None:
    cfg = parse_analysis_config({"parsing": {"has_header": True}, "stats": {"mode_precision": 10}})

    summary = run_stats(cfg, "x\n1.21\n1.25\n3.3\n")

    assert summary["count"] == 3
    assert summary["mode"] == pytest.approx(1.2)
    assert summary["median"] == pytest.approx(1.25)


def test_run_stats_malformed_line_propagates() -> None:
    with pytest.raises(MalformedScalarError):
        run_stats(AnalysisConfig(), "1\nnot-a-number\n")


def test_run_entropy() -> None:
    summary = run_entropy(b"aaaa")

    assert summary == {"bytes": 4, "entropy_bits": 0.0}


def test_run_histogram_saves_table(tmp_path: Path) -> None:
    summary, df = run_histogram(b"abca", tmp_path)

    assert summary["distinct_byte_values"] == 3
    assert len(df) == 256
    saved = pd.read_csv(tmp_path / HISTOGRAM_FILENAME)
    assert saved["frequency"].sum() == pytest.approx(1.0)


def test_run_confusion_builds_tables_and_files(tmp_path: Path) -> None:
    summary, cm_df, rates_df = run_confusion(AnalysisConfig(), PAIRS_TEXT, tmp_path)

    assert summary["pairs"] == 4
    assert summary["dropped_rows"] == 1
    assert summary["confusion_matrix"] == [[2, 0], [0, 2]]
    assert cm_df.loc["pred_1", "actual_1"] == 2
    assert rates_df["tpr"].tolist() == [1.0, 1.0]
    assert (tmp_path / CONFUSION_MATRIX_FILENAME).exists()
    assert (tmp_path / CLASS_RATES_FILENAME).exists()


def test_run_confusion_with_configured_threshold() -> None:
    cfg = parse_analysis_config({"confusion": {"threshold": 0.7}})

    summary, _, _ = run_confusion(cfg, PAIRS_TEXT)

    assert summary["confusion_matrix"] == [[2, 1], [0, 1]]


def test_run_confusion_out_of_range_class_propagates() -> None:
    with pytest.raises(ClassIndexError):
        run_confusion(AnalysisConfig(), "0.1,0\n2.0,2\n")


def test_run_thresholds_curve(tmp_path: Path) -> None:
    summary, curve_df = run_thresholds(AnalysisConfig(), PAIRS_TEXT, tmp_path)

    assert summary["thresholds"] == 20
    assert len(curve_df) == 20
    assert (tmp_path / THRESHOLD_CURVE_FILENAME).exists()


def test_run_thresholds_custom_range() -> None:
    cfg = parse_analysis_config({"sweep": {"start": 0.1, "stop": 0.5, "step": 0.1}})

    _, curve_df = run_thresholds(cfg, PAIRS_TEXT)

    assert curve_df["threshold"].tolist() == [0.1, 0.2, 0.3, 0.4, 0.5]


def test_run_thresholds_strict_binary() -> None:
    cfg = parse_analysis_config({"sweep": {"non_binary": "raise"}})

    with pytest.raises(UnsupportedClassificationError):
        run_thresholds(cfg, "0.9,1\n0.5,2\n")


def test_run_matrix_saves_features(tmp_path: Path) -> None:
    cfg = parse_analysis_config({"parsing": {"has_header": True, "label_col": 0}})

    summary, fm, df = run_matrix(cfg, "y,a,b\n1,0.5,0.25\n0,1.5,2\n", tmp_path)

    assert fm.labels == [1.0, 0.0]
    assert fm.rows == [[0.5, 0.25], [1.5, 2.0]]
    assert summary["ragged"] is False
    assert list(df.columns) == ["f0", "f1", "label"]
    assert (tmp_path / FEATURES_FILENAME).exists()


# ------------------------------------------------------------------
# I/O helpers
# ------------------------------------------------------------------


def test_read_input_from_file(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"1\n2\n")

    assert read_input_text(path) == "1\n2\n"
    assert read_input_bytes(path) == b"1\n2\n"


def test_read_input_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_input_text(tmp_path / "nope.txt")


def test_read_input_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "pairs.csv"
    path.write_bytes(b"0.5,1\n\xff\xfe,0\n")

    with pytest.raises(InputReadError, match="not valid UTF-8"):
        read_input_text(path)


def test_write_json_replaces_nan_with_null(tmp_path: Path) -> None:
    path = write_json({"tpr": float("nan"), "rows": [{"fpr": math.inf}, {"fpr": 0.5}]}, tmp_path / "s.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"tpr": None, "rows": [{"fpr": None}, {"fpr": 0.5}]}
