"""Feature matrix preparation for an external training / prediction consumer."""

import logging
from pathlib import Path

import pandas as pd
from opik import track

from application.constants import FEATURES_FILENAME, LABEL_COL
from domain.parsing import parse_matrix
from domain.schemas import FeatureMatrix
from infrastructure.config.models import AnalysisConfig
from infrastructure.io import write_table

logger = logging.getLogger(__name__)


@track(
    name="Scorekit.matrix",
    type="general",
    metadata={"task": "feature_matrix"},
    capture_input=False,
)
def run_matrix(
    cfg: AnalysisConfig,
    text: str,
    output_dir: Path | None = None,
) -> tuple[dict, FeatureMatrix, pd.DataFrame]:
    """
    Parse a comma-delimited matrix, holding out cfg.parsing.label_col as labels.

    Returns:
        Tuple of (summary dict, FeatureMatrix, DataFrame view of the matrix)

    Raises:
        MalformedScalarError: If any field is not a float
    """
    fm = parse_matrix(text, label_col=cfg.parsing.label_col, has_header=cfg.parsing.has_header)
    df = fm.to_frame(label_name=LABEL_COL)

    widths = sorted({len(r) for r in fm.rows})
    summary: dict[str, object] = {
        "rows": fm.n_rows,
        "labels": len(fm.labels),
        "feature_widths": widths,
        "ragged": fm.is_ragged,
        "label_col": cfg.parsing.label_col,
    }
    logger.info("Parsed feature matrix: %d rows, %d labels, widths=%s", fm.n_rows, len(fm.labels), widths)
    if fm.is_ragged:
        logger.warning("Feature rows have differing widths %s; passed through unchanged", widths)

    if output_dir is not None:
        path = write_table(df, output_dir / FEATURES_FILENAME)
        summary["features_path"] = str(path)
        logger.info("Saved feature matrix to %s", path)

    return summary, fm, df
