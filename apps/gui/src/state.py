from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Signal

from noteshift_core import (
    ActionResult,
    AppSettings,
    EditOutcome,
    Entry,
    NoteAction,
    NoteSession,
    SqliteDictionaryStore,
    load_app_settings,
    save_app_settings,
)

DATABASE_FILENAME = "abbreviations.db"
BACKUP_FILENAME = "note_backup.txt"


class NoteState(QObject):
    previewChanged = Signal(str)
    dictionaryChanged = Signal(object)
    availabilityChanged = Signal(bool)

    def __init__(self, settings_path: Path) -> None:
        super().__init__()
        self._settings_path = settings_path
        self._settings = AppSettings()
        self._session: Optional[NoteSession] = None
        self._available = False

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    @property
    def session(self) -> NoteSession:
        if self._session is None:
            raise RuntimeError("Note session is not open.")
        return self._session

    @property
    def available(self) -> bool:
        return self._available

    def load_settings(self) -> None:
        if self._settings_path.exists():
            self._settings = load_app_settings(self._settings_path)
        else:
            self._settings = AppSettings()
            self.save_settings()

    def save_settings(self) -> None:
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)
        save_app_settings(self._settings, self._settings_path)

    def database_path(self) -> Path:
        if self._settings.database_path:
            return Path(self._settings.database_path).expanduser()
        return self._settings_path.parent / DATABASE_FILENAME

    def backup_path(self) -> Path:
        if self._settings.backup_dir:
            return Path(self._settings.backup_dir).expanduser() / BACKUP_FILENAME
        return self._settings_path.parent / BACKUP_FILENAME

    def open_session(self) -> bool:
        self.close_session()
        store = SqliteDictionaryStore(self.database_path())
        self._session = NoteSession(
            store,
            titles=self._settings.field_titles,
            policy=self._settings.resolved_match_policy(),
        )
        self._available = self._session.open(seed=self._settings.seed_defaults)
        self.availabilityChanged.emit(self._available)
        self.dictionaryChanged.emit(self._session.cache.snapshot())
        return self._available

    def close_session(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def apply_edit(self, index: int, text: str, cursor: Optional[int] = None) -> EditOutcome:
        outcome = self.session.apply_edit(index, text, cursor)
        self.previewChanged.emit(outcome.preview)
        return outcome

    def perform(self, action: NoteAction) -> ActionResult:
        result = self.session.perform(action)
        self.previewChanged.emit(self.session.preview)
        return result

    def upsert_entry(self, key: str, expansion: str) -> Entry:
        entry = self.session.admin.upsert(key, expansion)
        self._mark_available()
        self.dictionaryChanged.emit(self.session.cache.snapshot())
        return entry

    def delete_entry(self, key: str) -> None:
        self.session.admin.delete(key)
        self._mark_available()
        self.dictionaryChanged.emit(self.session.cache.snapshot())

    def import_legacy(self, path: Path) -> int:
        count = self.session.admin.import_legacy(path)
        self._mark_available()
        self.dictionaryChanged.emit(self.session.cache.snapshot())
        return count

    def _mark_available(self) -> None:
        if self._available:
            return
        self._available = self.session.cache.loaded
        if self._available:
            self.availabilityChanged.emit(True)
