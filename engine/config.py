"""
Runtime configuration.

Every setting is a module-level constant read once at import. A `.env` file
in the project root is loaded first, so any of the COURSE_SEARCH_* variables
below can be overridden there or in the environment.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

DATA_DIR     = Path(os.getenv("COURSE_SEARCH_DATA_DIR", _PROJECT_ROOT / "data"))
COURSES_FILE = DATA_DIR / "courses.json"

LOG_DIR  = Path(os.getenv("COURSE_SEARCH_LOG_DIR", _PROJECT_ROOT / "logs"))
LOG_FILE = LOG_DIR / "app.log"

# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

MAX_RESULTS = 50

# Advisory only; does not affect what is computed.
CACHE_CONTROL = "public, max-age=60, stale-while-revalidate=30"

# ---------------------------------------------------------------------------
# Server / client
# ---------------------------------------------------------------------------

API_HOST = os.getenv("COURSE_SEARCH_HOST", "0.0.0.0")
API_PORT = int(os.getenv("COURSE_SEARCH_PORT", "8000"))
API_URL  = os.getenv("COURSE_SEARCH_API_URL", "http://localhost:8000")

DEBOUNCE_SECONDS = 0.3
REQUEST_TIMEOUT  = float(os.getenv("COURSE_SEARCH_TIMEOUT", "30"))
