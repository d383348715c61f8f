from __future__ import annotations

from datetime import date, timedelta
import re

ONSET_UNITS = {
    "d": ("day", 1),
    "w": ("week", 7),
    "m": ("month", 30),
    "y": ("year", 365),
}

PRESCRIPTIONS = {
    "0": " without medications",
    "1": " mg 1 tab p.o. q.d.",
    "2": " mg 1 tab p.o. b.i.d.",
    "3": " mg 1 tab p.o. t.i.d.",
    "4": " with medications",
}

_onset_re = re.compile(r"(\d+)([dwmy]):\(")
_prescription_re = re.compile(r":>([0-4])")


def expand_onset(text: str, today: date) -> str:
    """Rewrite ``3d:(`` style onset shorthand into ``(onset 3-day ago <date>)``."""

    def _replace(match: re.Match) -> str:
        amount = int(match.group(1))
        unit, days = ONSET_UNITS[match.group(2)]
        onset = today - timedelta(days=amount * days)
        return f"(onset {amount}-{unit} ago {onset.isoformat()})"

    return _onset_re.sub(_replace, text)


def expand_prescription(text: str) -> str:
    return _prescription_re.sub(lambda match: PRESCRIPTIONS[match.group(1)], text)


def finalize_note(text: str, today: date) -> str:
    return expand_prescription(expand_onset(text, today))
