import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# Paths
DATA_DIR = Path(os.getenv("HYPERPLOT_DATA_DIR", str(_PROJECT_ROOT / "data")))

# Catalog (plots + manual entries)
CATALOG_PATH = DATA_DIR / "catalog.json"

# Plot metadata (listed / exported / overrides)
PLOT_META_PATH = DATA_DIR / "plot_meta.json"

# Last seen
LAST_SEEN_PATH = DATA_DIR / "last_seen.json"
LAST_SEEN_MAX = int(os.getenv("HYPERPLOT_LAST_SEEN_MAX", "20"))

# Matching
ASSUME_SQM_FOR_UNKNOWN = os.getenv("HYPERPLOT_ASSUME_SQM", "").strip().lower() in ("1", "true", "yes")
