"""
CLI entrypoint for scorekit.

Each subcommand:
- loads configs/analysis.yaml (or --config) and applies CLI overrides
- creates a per-run output folder under outputs/ (unless --no-save)
- reads its input from --input or standard input
- runs the matching application workflow and saves its tables
- writes summary.json and logs a human-readable summary

Fatal errors (invalid config or overrides, unreadable input, malformed scalars,
non-finite values, empty mode input, out-of-range classes)
are logged and turned into exit status 1.
"""

import argparse
import json
import logging
import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from application import (
    log_confusion_summary,
    log_threshold_summary,
    run_confusion,
    run_entropy,
    run_histogram,
    run_matrix,
    run_stats,
    run_thresholds,
)
from application.constants import CONFIG_SNAPSHOT_FILENAME, LOG_FILENAME, SUMMARY_FILENAME
from domain.errors import ScorekitError
from domain.schemas import ClassSizing, DecisionRule, NonBinaryPolicy, TnrDenominator
from infrastructure.config import AnalysisConfig, load_analysis_config
from infrastructure.io import read_input_bytes, read_input_text, write_json
from infrastructure.observability import (
    configure_logging,
    configure_tracing,
    get_log_context,
    make_run_tag,
    set_log_context,
)

logger = logging.getLogger(__name__)

LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _common_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--config", type=str, default=None, help="Path to analysis.yaml (default: configs/analysis.yaml)")
    p.add_argument("--input", type=str, default=None, help="Input file (default: read standard input)")
    p.add_argument("--output-dir", type=str, default=None, help="Override output_root from config")
    p.add_argument("--no-save", action="store_true", help="Do not create a run folder or write artifacts")
    p.add_argument("--console-level", type=str, default="INFO", choices=LEVELS, help="Console log level")
    p.add_argument("--file-level", type=str, default="DEBUG", choices=LEVELS, help="File log level")
    p.add_argument("--trace", action="store_true", help="Send opik traces for this run")
    return p


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    common = _common_parser()
    p = argparse.ArgumentParser(description="Numeric statistics and classification metrics toolkit")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("stats", parents=[common], help="Mean/median/mode/stdev of one value per line")
    s.add_argument("--header", action="store_true", help="Skip the first line")
    s.add_argument("--precision", type=int, default=None, help="Mode buckets per unit (e.g. 100)")

    sub.add_parser("entropy", parents=[common], help="Shannon entropy of a byte stream")
    sub.add_parser("histogram", parents=[common], help="Normalized byte histogram")

    c = sub.add_parser("confusion", parents=[common], help="Confusion matrix and per-class rates from score,actual")
    c.add_argument("--threshold", type=float, default=None, help="Decision threshold")
    c.add_argument("--rule", type=str, default=None, choices=[r.value for r in DecisionRule])
    c.add_argument("--sizing", type=str, default=None, choices=[s.value for s in ClassSizing])
    c.add_argument("--tnr-denominator", type=str, default=None, choices=[t.value for t in TnrDenominator])

    t = sub.add_parser("thresholds", parents=[common], help="Precision/recall/F1/FPR threshold sweep")
    t.add_argument("--start", type=float, default=None)
    t.add_argument("--stop", type=float, default=None)
    t.add_argument("--step", type=float, default=None)
    t.add_argument("--non-binary", type=str, default=None, choices=[n.value for n in NonBinaryPolicy])

    m = sub.add_parser("matrix", parents=[common], help="Parse a feature matrix with a held-out label column")
    m.add_argument("--header", action="store_true", help="Skip the first line")
    m.add_argument("--label-col", type=int, default=None, help="0-based label column index")

    return p.parse_args(argv)


def apply_overrides(cfg: AnalysisConfig, args: argparse.Namespace) -> AnalysisConfig:
    """Merge CLI flags into the loaded config and re-validate."""
    data = cfg.model_dump()

    if getattr(args, "header", False):
        data["parsing"]["has_header"] = True
    if getattr(args, "label_col", None) is not None:
        data["parsing"]["label_col"] = args.label_col
    if getattr(args, "precision", None) is not None:
        data["stats"]["mode_precision"] = args.precision

    for flag, key in (("threshold", "threshold"), ("rule", "rule"), ("sizing", "sizing")):
        if getattr(args, flag, None) is not None:
            data["confusion"][key] = getattr(args, flag)
    if getattr(args, "tnr_denominator", None) is not None:
        data["confusion"]["tnr_denominator"] = args.tnr_denominator

    for key in ("start", "stop", "step", "non_binary"):
        if getattr(args, key, None) is not None:
            data["sweep"][key] = getattr(args, key)

    if args.output_dir is not None:
        data["output_root"] = Path(args.output_dir)
    if args.trace:
        data["tracing"] = True

    return AnalysisConfig.model_validate(data)


def _cmd_stats(cfg: AnalysisConfig, input_path: Path | None, run_dir: Path | None) -> dict:
    return run_stats(cfg, read_input_text(input_path))


def _cmd_entropy(cfg: AnalysisConfig, input_path: Path | None, run_dir: Path | None) -> dict:
    return run_entropy(read_input_bytes(input_path))


def _cmd_histogram(cfg: AnalysisConfig, input_path: Path | None, run_dir: Path | None) -> dict:
    summary, _ = run_histogram(read_input_bytes(input_path), run_dir)
    return summary


def _cmd_confusion(cfg: AnalysisConfig, input_path: Path | None, run_dir: Path | None) -> dict:
    summary, cm_df, rates_df = run_confusion(cfg, read_input_text(input_path), run_dir)
    log_confusion_summary(summary, cm_df, rates_df)
    return summary


def _cmd_thresholds(cfg: AnalysisConfig, input_path: Path | None, run_dir: Path | None) -> dict:
    summary, curve_df = run_thresholds(cfg, read_input_text(input_path), run_dir)
    log_threshold_summary(summary, curve_df)
    return summary


def _cmd_matrix(cfg: AnalysisConfig, input_path: Path | None, run_dir: Path | None) -> dict:
    summary, _, _ = run_matrix(cfg, read_input_text(input_path), run_dir)
    return summary


COMMANDS: dict[str, Callable[[AnalysisConfig, Path | None, Path | None], dict]] = {
    "stats": _cmd_stats,
    "entropy": _cmd_entropy,
    "histogram": _cmd_histogram,
    "confusion": _cmd_confusion,
    "thresholds": _cmd_thresholds,
    "matrix": _cmd_matrix,
}


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        cfg = load_analysis_config(Path(args.config) if args.config else None)
        cfg = apply_overrides(cfg, args)
    except (ValueError, FileNotFoundError) as e:
        # pydantic.ValidationError is a ValueError
        logger.error("invalid configuration: %s", e)
        return 1
    configure_tracing(cfg.tracing)

    # ---- Per-run output folder ----
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_id = f"{ts}_{args.command}"
    run_dir: Path | None = None if args.no_save else cfg.output_root / run_id

    if run_dir is not None:
        run_dir.mkdir(parents=True, exist_ok=True)

    configure_logging(
        log_file=(run_dir / LOG_FILENAME) if run_dir is not None else None,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )
    set_log_context(run_id_full=run_id, command=args.command)

    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))
    if run_dir is not None:
        logger.info("Run output directory: %s", run_dir)
        (run_dir / CONFIG_SNAPSHOT_FILENAME).write_text(
            json.dumps(cfg.model_dump(mode="json"), ensure_ascii=False, indent=2, default=str),
            encoding="utf-8",
        )

    input_path = Path(args.input) if args.input else None
    try:
        summary = COMMANDS[args.command](cfg, input_path, run_dir)
    except (ScorekitError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    summary["context"] = get_log_context()
    if run_dir is not None:
        summary_path = write_json(summary, run_dir / SUMMARY_FILENAME)
        logger.info("Saved summary to %s", summary_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
