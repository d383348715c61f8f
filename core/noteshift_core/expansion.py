from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from noteshift_core.aggregate import Field
from noteshift_core.cache import DictionaryCache
from noteshift_core.entries import TRIGGER_SEPARATOR, normalize_key
from noteshift_core.trigger import TriggerDetector


class EditKind(Enum):
    USER_EDIT = "user"
    ENGINE_REWRITE = "engine"


@dataclass(frozen=True)
class EditEvent:
    field_index: int
    text: str
    kind: EditKind = EditKind.USER_EDIT
    cursor: Optional[int] = None


@dataclass(frozen=True)
class Expansion:
    text: str
    caret: int
    key: str
    expansion: str


class ExpansionEngine:
    """Rewrites one completed trigger per user edit.

    The engine never mutates a field itself; callers apply the returned text
    and tag the resulting notification as ``ENGINE_REWRITE`` so that it is not
    scanned again.
    """

    def __init__(self, detector: Optional[TriggerDetector] = None) -> None:
        self._detector = detector or TriggerDetector()

    @property
    def detector(self) -> TriggerDetector:
        return self._detector

    def on_change(self, field: Field, cache: DictionaryCache) -> Optional[str]:
        result = self.expand(field.content, cache)
        return result.text if result else None

    def handle(self, event: EditEvent, field: Field, cache: DictionaryCache) -> Optional[Expansion]:
        if event.kind is EditKind.ENGINE_REWRITE:
            return None
        return self.expand(field.content, cache, event.cursor)

    def expand(
        self,
        text: str,
        cache: DictionaryCache,
        cursor_hint: Optional[int] = None,
    ) -> Optional[Expansion]:
        match = self._detector.detect(text, cursor_hint)
        if match is None:
            return None
        key = normalize_key(match.raw_key)
        expansion = cache.lookup(key)
        if not expansion:
            return None
        inserted = expansion + TRIGGER_SEPARATOR
        rewritten = text[: match.start] + inserted
        return Expansion(
            text=rewritten,
            caret=match.start + len(inserted),
            key=key,
            expansion=expansion,
        )
