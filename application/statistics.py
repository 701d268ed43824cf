"""Sample statistics and byte-distribution workflows."""

import logging
from pathlib import Path

import pandas as pd
from opik import track

from application.constants import BYTE_COL, FREQUENCY_COL, HISTOGRAM_FILENAME
from domain.parsing import parse_vector
from domain.statistics import byte_histogram, describe, entropy
from infrastructure.config.models import AnalysisConfig
from infrastructure.io import write_table

logger = logging.getLogger(__name__)


@track(
    name="Scorekit.stats",
    type="general",
    metadata={"task": "descriptive_statistics"},
    capture_input=False,
)
def run_stats(cfg: AnalysisConfig, text: str) -> dict:
    """
    Parse one value per line and compute count/mean/median/mode/stdev/variance.

    Raises:
        MalformedScalarError: If a line is not a float
    """
    xs = parse_vector(text, has_header=cfg.parsing.has_header)
    logger.info("Parsed %d values", len(xs))

    summary = describe(xs, precision=cfg.stats.mode_precision)
    logger.info(
        "mean=%.6f median=%.6f mode=%s stdev=%.6f variance=%.6f",
        summary["mean"],
        summary["median"],
        summary["mode"],
        summary["stdev"],
        summary["variance"],
    )
    return summary


@track(
    name="Scorekit.entropy",
    type="general",
    metadata={"task": "byte_entropy"},
    capture_input=False,
)
def run_entropy(data: bytes) -> dict:
    """Shannon entropy (bits) of a byte buffer."""
    value = entropy(data)
    logger.info("Entropy: %.6f bits over %d bytes", value, len(data))
    return {"bytes": len(data), "entropy_bits": value}


def histogram_frame(data: bytes) -> pd.DataFrame:
    """256-row table of byte value and normalized frequency."""
    return pd.DataFrame({BYTE_COL: range(256), FREQUENCY_COL: byte_histogram(data)})


@track(
    name="Scorekit.histogram",
    type="general",
    metadata={"task": "byte_histogram"},
    capture_input=False,
)
def run_histogram(data: bytes, output_dir: Path | None = None) -> tuple[dict, pd.DataFrame]:
    """
    Normalized byte histogram, optionally saved as CSV under output_dir.

    Returns:
        Tuple of (summary dict, histogram DataFrame)
    """
    df = histogram_frame(data)
    summary: dict[str, object] = {
        "bytes": len(data),
        "distinct_byte_values": int((df[FREQUENCY_COL] > 0).sum()),
    }

    if output_dir is not None:
        path = write_table(df, output_dir / HISTOGRAM_FILENAME)
        summary["histogram_path"] = str(path)
        logger.info("Saved byte histogram to %s", path)

    logger.info("Histogram: %d bytes, %d distinct values", summary["bytes"], summary["distinct_byte_values"])
    return summary, df
