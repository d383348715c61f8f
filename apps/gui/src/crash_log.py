from __future__ import annotations

import sys
import traceback
from datetime import datetime
from pathlib import Path

APP_NAME = "NoteShift"
CRASH_LOG_FILENAME = "crash.log"


def default_crash_log_dir() -> Path:
    # Same directory QStandardPaths.AppDataLocation resolves to once main() scopes it.
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_NAME / APP_NAME
    if sys.platform.startswith("win"):
        return home / "AppData" / "Roaming" / APP_NAME / APP_NAME
    return home / ".local" / "share" / APP_NAME / APP_NAME


def write_crash_log(log_dir: Path, label: str, exc_info) -> None:
    """Append a traceback to ``crash.log``; falls back to stderr if the directory is unwritable."""
    exctype, value, tb = exc_info
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        with open(log_dir / CRASH_LOG_FILENAME, "a", encoding="utf-8") as f:
            f.write(f"[{datetime.now()}] {label} (argv: {' '.join(sys.argv[1:]) or '-'}):\n")
            traceback.print_exception(exctype, value, tb, file=f)
            f.write("\n")
    except OSError:
        traceback.print_exception(exctype, value, tb)
