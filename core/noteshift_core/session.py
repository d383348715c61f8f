from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from noteshift_core.actions import (
    ActionResult,
    ClearFields,
    ExitApp,
    ManageDictionary,
    NoteAction,
    SaveBackup,
    SubmitNote,
)
from noteshift_core.admin import DictionaryAdmin
from noteshift_core.aggregate import DEFAULT_FIELD_TITLES, Aggregator, Field, build_fields
from noteshift_core.cache import DictionaryCache
from noteshift_core.expansion import EditEvent, EditKind, ExpansionEngine
from noteshift_core.logger import log_dictionary
from noteshift_core.seed import seed_store
from noteshift_core.store import SqliteDictionaryStore, StoreError
from noteshift_core.transforms import finalize_note
from noteshift_core.trigger import MatchPolicy, TriggerDetector

EditListener = Callable[[EditEvent], None]


@dataclass(frozen=True)
class EditOutcome:
    field_index: int
    content: str
    caret: Optional[int]
    expanded: bool
    preview: str


class NoteSession:
    """Owns the dictionary, the note fields and the derived preview for one note.

    A single store/cache pair lives here and is handed to every consumer, so
    the manager dialog and the typing path always see the same dictionary.
    """

    def __init__(
        self,
        store: SqliteDictionaryStore,
        *,
        titles: Sequence[str] = DEFAULT_FIELD_TITLES,
        policy: MatchPolicy = MatchPolicy.FIRST_OCCURRENCE,
    ) -> None:
        self._store = store
        self._cache = DictionaryCache()
        self._admin = DictionaryAdmin(store, self._cache)
        self._engine = ExpansionEngine(TriggerDetector(policy))
        self._aggregator = Aggregator()
        self._fields: List[Field] = build_fields(titles)
        self._listeners: List[EditListener] = []

    @property
    def store(self) -> SqliteDictionaryStore:
        return self._store

    @property
    def cache(self) -> DictionaryCache:
        return self._cache

    @property
    def admin(self) -> DictionaryAdmin:
        return self._admin

    @property
    def fields(self) -> Sequence[Field]:
        return tuple(self._fields)

    @property
    def preview(self) -> str:
        return self._aggregator.preview

    def open(self, *, seed: bool = True) -> bool:
        """Seed and load the dictionary; returns False if the store is unavailable."""
        try:
            if seed:
                seed_store(self._store)
            self._cache.refresh(self._store)
        except StoreError as exc:
            log_dictionary(f"Dictionary unavailable, expansion disabled: {exc}")
            return False
        log_dictionary(f"Loaded {len(self._cache)} entries from {self._store.path}")
        return True

    def close(self) -> None:
        self._store.close()

    def subscribe(self, listener: EditListener) -> None:
        self._listeners.append(listener)

    def field(self, index: int) -> Field:
        for field in self._fields:
            if field.index == index:
                return field
        raise IndexError(f"No field with index {index}")

    def apply_edit(self, index: int, text: str, cursor: Optional[int] = None) -> EditOutcome:
        field = self.field(index)
        field.content = text
        event = EditEvent(field_index=index, text=text, kind=EditKind.USER_EDIT, cursor=cursor)
        self._dispatch(event)

        caret = cursor
        result = self._engine.handle(event, field, self._cache)
        if result is not None:
            field.content = result.text
            caret = result.caret
            self._dispatch(
                EditEvent(
                    field_index=index,
                    text=result.text,
                    kind=EditKind.ENGINE_REWRITE,
                    cursor=result.caret,
                )
            )

        preview = self._aggregator.recompute(self._fields)
        return EditOutcome(
            field_index=index,
            content=field.content,
            caret=caret,
            expanded=result is not None,
            preview=preview,
        )

    def clear(self) -> str:
        for field in self._fields:
            field.content = ""
        return self._aggregator.recompute(self._fields)

    def perform(self, action: NoteAction) -> ActionResult:
        if isinstance(action, ClearFields):
            self.clear()
            return ActionResult(kind=action.kind, handled=True, text=self.preview)
        if isinstance(action, SaveBackup):
            path = Path(action.path)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(self.preview, encoding="utf-8")
            except OSError as exc:
                raise StoreError(f"Could not write backup {path}: {exc}") from exc
            return ActionResult(kind=action.kind, handled=True, text=self.preview, path=path)
        if isinstance(action, SubmitNote):
            text = finalize_note(self.preview, action.today)
            return ActionResult(kind=action.kind, handled=True, text=text)
        if isinstance(action, (ManageDictionary, ExitApp)):
            return ActionResult(kind=action.kind, handled=False)
        raise ValueError(f"Unknown note action: {action!r}")

    def _dispatch(self, event: EditEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
