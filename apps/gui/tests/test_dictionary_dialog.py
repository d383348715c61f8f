from __future__ import annotations

import os
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

import dialogs
from dialogs import DictionaryManagerDialog
from state import NoteState


def _app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def _state(tmp_path: Path) -> NoteState:
    state = NoteState(tmp_path / "settings.json")
    state.load_settings()
    state.open_session()
    return state


def test_add_update_refreshes_shared_cache(tmp_path: Path) -> None:
    _app()
    state = _state(tmp_path)
    dialog = DictionaryManagerDialog(state)

    dialog.key_edit.setText(":bp")
    dialog.expansion_edit.setText("Blood Pressure")
    dialog._save_entry()

    assert state.session.cache.lookup(":bp ") == "Blood Pressure"
    assert dialog.entries_model.row_for_key(":bp ") >= 0
    outcome = state.apply_edit(0, "check :bp ")
    assert outcome.content == "check Blood Pressure "
    state.close_session()


def test_find_filter_matches_key_or_expansion(tmp_path: Path) -> None:
    _app()
    state = _state(tmp_path)
    dialog = DictionaryManagerDialog(state)

    dialog.find_edit.setText("diabetes")

    assert [entry.key for entry in dialog.entries_model.entries()] == [":dm "]
    state.close_session()


def test_find_button_fills_expansion(tmp_path: Path) -> None:
    _app()
    state = _state(tmp_path)
    dialog = DictionaryManagerDialog(state)

    dialog.key_edit.setText(":HTN")
    dialog._find_entry()
    assert dialog.expansion_edit.text() == "Hypertension"

    dialog.key_edit.setText(":nothing")
    dialog._find_entry()
    assert dialog.expansion_edit.text() == ""
    assert "No expansion" in dialog.status_label.text()
    state.close_session()


def test_delete_removes_entry_after_confirmation(tmp_path: Path) -> None:
    _app()
    state = _state(tmp_path)
    dialog = DictionaryManagerDialog(state)
    dialog._confirm_delete = lambda key: True

    dialog.key_edit.setText(":htn")
    dialog._delete_entry()

    assert state.session.cache.lookup(":htn ") is None
    assert dialog.entries_model.row_for_key(":htn ") == -1
    state.close_session()


def test_invalid_entry_is_reported_and_not_saved(tmp_path: Path, monkeypatch) -> None:
    _app()
    warnings: list[str] = []
    monkeypatch.setattr(
        dialogs.QMessageBox,
        "warning",
        lambda parent, title, text: warnings.append(text),
    )
    state = _state(tmp_path)
    dialog = DictionaryManagerDialog(state)
    before = len(state.session.cache)

    dialog.key_edit.setText(":bp")
    dialog.expansion_edit.setText("")
    dialog._save_entry()

    assert len(warnings) == 1
    assert dialog.status_label.text() == warnings[0]
    assert len(state.session.cache) == before
    state.close_session()


def test_table_follows_dictionary_changes_made_elsewhere(tmp_path: Path) -> None:
    _app()
    state = _state(tmp_path)
    dialog = DictionaryManagerDialog(state)
    assert dialog.entries_model.row_for_key(":bp ") == -1

    state.upsert_entry(":bp", "Blood Pressure")
    assert dialog.entries_model.row_for_key(":bp ") >= 0

    state.delete_entry(":bp")
    assert dialog.entries_model.row_for_key(":bp ") == -1
    state.close_session()
