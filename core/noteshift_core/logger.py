"""Dictionary and session log lines.

The desktop window installs a handler that appends to its log pane. With no
handler installed, lines go to stdout.
"""
from __future__ import annotations

from typing import Callable, Optional

LOG_PREFIX = "[dictionary]"

_log_handler: Optional[Callable[[str], None]] = None


def set_log_handler(handler: Callable[[str], None] | None) -> None:
    global _log_handler
    _log_handler = handler


def log_dictionary(message: str) -> None:
    if not message:
        return
    line = f"{LOG_PREFIX} {message}"
    if _log_handler:
        _log_handler(line)
    else:
        print(line)
