"""
CSV Importer - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("IMPORTER_DB", f"sqlite:///{BASE_DIR / 'importer.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("IMPORTER_HOST", "0.0.0.0")
PORT   = int(os.environ.get("IMPORTER_PORT", "5000"))
DEBUG  = os.environ.get("IMPORTER_DEBUG", "0") == "1"
SECRET = os.environ.get("IMPORTER_SECRET", "importer-dev-key-change-in-prod")
LOG_LEVEL = os.environ.get("IMPORTER_LOG_LEVEL", "INFO").upper()

# Uploads larger than this are rejected with 413 before parsing
MAX_UPLOAD_BYTES = int(os.environ.get("IMPORTER_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# ── Import engine ──────────────────────────────────────────────────────
# Abort a run after this many inserts fail back-to-back
MAX_CONSECUTIVE_FAILURES = int(os.environ.get("IMPORTER_MAX_CONSECUTIVE_FAILURES", "5"))

DEFAULT_SKIP_DUPLICATES = os.environ.get("IMPORTER_SKIP_DUPLICATES", "1") == "1"

# First entry is the canonical (template) format
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",     # 2025-10-13
    "%m/%d/%Y",     # 10/13/2025
    "%d %b %Y",     # 13 Oct 2025
    "%d %B %Y",     # 13 October 2025
)

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
