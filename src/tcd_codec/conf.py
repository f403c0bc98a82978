"""tcd_codec - format constants and runtime switches."""

import os
from pathlib import Path

# =============================================================================
# FILE FORMAT
# =============================================================================

# Single-byte code page shared by encode and decode. Not configurable.
TCD_ENCODING = "cp1252"

BYTE_ORDER = "<"

BYTE_SENTINEL = 0xFF
WORD_SENTINEL = 0xFFFF

MAX_LENGTH = 0xFFFFFFFF
MAX_RECORDS = 0xFFFF
MAX_ID = 0xFFFF

DEFAULT_ID = 0
DEFAULT_TEXT = "New string"
DEFAULT_FILENAME = "TString.tcd"

# =============================================================================
# LOGGING
# =============================================================================


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


LOG_ENABLED = _env_flag("TCD_LOG")
LOG_FILE = Path(os.environ["TCD_LOG_FILE"]) if os.environ.get("TCD_LOG_FILE") else None
