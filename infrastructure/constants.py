from pathlib import Path

# Repo-root conventional directories/files (overrideable via CLI flags)
CONFIG_DIR = Path("configs")
ANALYSIS_FILE = CONFIG_DIR / "analysis.yaml"

OUTPUT_ROOT = Path("outputs")
