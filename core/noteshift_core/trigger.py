from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Optional


class MatchPolicy(Enum):
    FIRST_OCCURRENCE = "first"
    ANCHORED_END = "end"


@dataclass(frozen=True)
class TriggerMatch:
    start: int
    end: int
    raw_key: str


class TriggerDetector:
    """Finds a completed trigger (``:word`` followed by whitespace) in a buffer.

    A sentinel that is not yet followed by whitespace is still being typed and
    never matches. With ``FIRST_OCCURRENCE`` the earliest completed trigger in
    the whole text wins, independent of where the edit happened. With
    ``ANCHORED_END`` only a trigger ending exactly at the cursor (or at the end
    of the text when no cursor is given) matches.
    """

    _trigger_re = re.compile(r":\s*(\w+)\s+")
    _anchored_re = re.compile(r":\s*(\w+)\s+\Z")

    def __init__(self, policy: MatchPolicy = MatchPolicy.FIRST_OCCURRENCE) -> None:
        self._policy = policy

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    def detect(self, text: str, cursor_hint: Optional[int] = None) -> Optional[TriggerMatch]:
        if not text:
            return None
        if self._policy is MatchPolicy.ANCHORED_END:
            return self._detect_anchored(text, cursor_hint)
        match = self._trigger_re.search(text)
        if match is None:
            return None
        return TriggerMatch(start=match.start(), end=match.end(), raw_key=match.group(1))

    def _detect_anchored(self, text: str, cursor_hint: Optional[int]) -> Optional[TriggerMatch]:
        end = len(text) if cursor_hint is None else max(0, min(cursor_hint, len(text)))
        head = text[:end]
        # A trigger ending at the cursor always starts at the last sentinel.
        sentinel = head.rfind(":")
        if sentinel < 0:
            return None
        match = self._anchored_re.search(head, sentinel)
        if match is None:
            return None
        return TriggerMatch(start=match.start(), end=match.end(), raw_key=match.group(1))
