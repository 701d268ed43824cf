"""Application-level constants."""

# Output filenames
SUMMARY_FILENAME = "summary.json"
CONFIG_SNAPSHOT_FILENAME = "config.resolved.json"
CONFUSION_MATRIX_FILENAME = "confusion_matrix.csv"
CLASS_RATES_FILENAME = "class_rates.csv"
THRESHOLD_CURVE_FILENAME = "threshold_curve.csv"
HISTOGRAM_FILENAME = "byte_histogram.csv"
FEATURES_FILENAME = "features.csv"
LOG_FILENAME = "run.log"

# Column names
BYTE_COL = "byte"
FREQUENCY_COL = "frequency"
LABEL_COL = "label"
