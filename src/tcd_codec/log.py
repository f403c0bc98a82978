"""
tcd_codec - Logging Module
Timestamped diagnostic lines on stderr, optionally mirrored to a file.
"""
import sys
from datetime import datetime

from . import conf

_enabled = conf.LOG_ENABLED
first_line = True


def enable(flag: bool = True) -> None:
    """Turn logging on or off for the rest of the process."""
    global _enabled
    _enabled = flag


def tcd_log(message: str) -> None:
    """Write a log line to stderr (and LOG_FILE if configured) when enabled."""
    global first_line
    if not _enabled:
        return
    if first_line:
        first_line = False
        tcd_log("--- New tcd_codec Session ---")
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_line = f"[{timestamp}] {message}\n"
    sys.stderr.write(log_line)
    if conf.LOG_FILE is None:
        return
    # A broken log file must not fail the operation being logged.
    try:
        conf.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(conf.LOG_FILE, "a", encoding="utf-8") as f:
            f.write(log_line)
    except OSError as ex:
        sys.stderr.write(f"[{timestamp}] cannot append to {conf.LOG_FILE}: {ex}\n")
