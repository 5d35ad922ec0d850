"""
GPTK Records - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.  A ``.env`` file next to this
module is loaded first, so local overrides don't need exported vars.
"""

from __future__ import annotations
import os
from pathlib import Path

import dotenv


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR   = Path(__file__).resolve().parent

dotenv.load_dotenv(BASE_DIR / ".env")

UPLOAD_DIR = Path(os.environ.get("GPTK_UPLOAD_DIR", BASE_DIR / "uploads"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("GPTK_DB", f"sqlite:///{BASE_DIR / 'gptk_records.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("GPTK_HOST", "0.0.0.0")
PORT   = int(os.environ.get("GPTK_PORT", "5000"))
DEBUG  = os.environ.get("GPTK_DEBUG", "0") == "1"
SECRET = os.environ.get("GPTK_SECRET", "gptk-dev-key-change-in-prod")
LOG_LEVEL = os.environ.get("GPTK_LOG_LEVEL", "INFO").upper()

# ── Uploads ────────────────────────────────────────────────────────────
MAX_UPLOAD_BYTES = int(os.environ.get("GPTK_MAX_UPLOAD_MB", "5")) * 1024 * 1024
CSV_EXTENSIONS   = frozenset({".csv"})
CSV_MIMETYPES    = frozenset({"text/csv", "application/vnd.ms-excel"})

# ── Import defaults ────────────────────────────────────────────────────
# Applied when the optional column is missing or blank in an upload.
DEFAULT_PROGRAM     = os.environ.get("GPTK_DEFAULT_PROGRAM", "Computer Science")
DEFAULT_INSTITUTION = os.environ.get("GPTK_DEFAULT_INSTITUTION",
                                     "Government Polytechnic Kampli")
DEFAULT_EXAM_YEAR   = int(os.environ.get("GPTK_DEFAULT_EXAM_YEAR", "2024"))
IMPORT_PROGRESS_EVERY = 50

# ── Queries ────────────────────────────────────────────────────────────
SEARCH_MIN_QUERY      = 2
SEARCH_LIMIT          = 50
RECENT_STUDENTS_LIMIT = 5
