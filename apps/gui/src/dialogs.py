from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
)

from noteshift_core import StoreError, ValidationError, trigger_word
from models import EntriesTableModel
from state import NoteState


class DictionaryManagerDialog(QDialog):
    """Find, add, update and delete abbreviations in the shared dictionary."""

    def __init__(self, state: NoteState, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Abbreviation Manager")
        self.setSizeGripEnabled(True)
        self.resize(640, 480)
        self.state = state
        self.state.dictionaryChanged.connect(self._reload_entries)

        self.find_edit = QLineEdit()
        self.find_edit.setPlaceholderText("Filter by abbreviation or expansion")
        self.find_edit.setClearButtonEnabled(True)
        self.find_edit.textChanged.connect(self._reload_entries)

        self.entries_model = EntriesTableModel()
        self.entries_table = QTableView()
        self.entries_table.setModel(self.entries_model)
        self.entries_table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.entries_table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.entries_table.verticalHeader().setVisible(False)
        header = self.entries_table.horizontalHeader()
        header.setSectionResizeMode(EntriesTableModel.COLUMN_KEY, QHeaderView.ResizeToContents)
        header.setSectionResizeMode(EntriesTableModel.COLUMN_EXPANSION, QHeaderView.Stretch)
        self.entries_table.selectionModel().currentRowChanged.connect(self._on_row_changed)

        self.key_edit = QLineEdit()
        self.key_edit.setPlaceholderText(":htn")
        self.expansion_edit = QLineEdit()
        self.status_label = QLabel()
        self.status_label.setWordWrap(True)

        form = QFormLayout()
        form.setFieldGrowthPolicy(QFormLayout.ExpandingFieldsGrow)
        form.addRow("Abbreviation", self.key_edit)
        form.addRow("Expansion", self.expansion_edit)

        self.find_button = QPushButton("Find")
        self.find_button.clicked.connect(self._find_entry)
        self.save_button = QPushButton("Add/Update")
        self.save_button.clicked.connect(self._save_entry)
        self.delete_button = QPushButton("Delete")
        self.delete_button.clicked.connect(self._delete_entry)
        self.import_button = QPushButton("Import Legacy...")
        self.import_button.clicked.connect(self._import_legacy)

        buttons = QHBoxLayout()
        buttons.addWidget(self.find_button)
        buttons.addWidget(self.save_button)
        buttons.addWidget(self.delete_button)
        buttons.addStretch(1)
        buttons.addWidget(self.import_button)

        button_box = QDialogButtonBox(QDialogButtonBox.Close)
        button_box.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(self.find_edit)
        layout.addWidget(self.entries_table, 1)
        layout.addLayout(form)
        layout.addLayout(buttons)
        layout.addWidget(self.status_label)
        layout.addWidget(button_box)

        self._reload_entries()

    def _reload_entries(self, *_args) -> None:
        try:
            entries = self.state.session.admin.search(self.find_edit.text())
        except StoreError as exc:
            self._show_error("Could not load abbreviations", exc)
            return
        self.entries_model.set_entries(entries)

    def _on_row_changed(self, current, _previous) -> None:
        entry = self.entries_model.entry_at(current.row())
        if entry is None:
            return
        self.key_edit.setText(":" + trigger_word(entry.key))
        self.expansion_edit.setText(entry.expansion)

    def _find_entry(self) -> None:
        key = self.key_edit.text()
        try:
            expansion = self.state.session.admin.find(key)
        except (ValidationError, StoreError) as exc:
            self._show_error("Could not find abbreviation", exc)
            return
        if expansion is None:
            self.expansion_edit.clear()
            self._set_status(f"No expansion for '{key.strip()}'.")
            return
        self.expansion_edit.setText(expansion)
        self._set_status("")

    def _save_entry(self) -> None:
        try:
            entry = self.state.upsert_entry(self.key_edit.text(), self.expansion_edit.text())
        except (ValidationError, StoreError) as exc:
            self._show_error("Could not save abbreviation", exc)
            return
        self._select_key(entry.key)
        self._set_status(f"Saved '{entry.key.strip()}'.")

    def _delete_entry(self) -> None:
        key = self.key_edit.text().strip()
        if not key:
            return
        if not self._confirm_delete(key):
            return
        try:
            self.state.delete_entry(key)
        except (ValidationError, StoreError) as exc:
            self._show_error("Could not delete abbreviation", exc)
            return
        self.key_edit.clear()
        self.expansion_edit.clear()
        self._set_status(f"Deleted '{key}'.")

    def _import_legacy(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Import Legacy Abbreviations",
            str(Path.home()),
            "Source files (*.java *.txt);;All files (*)",
        )
        if not path:
            return
        try:
            count = self.state.import_legacy(Path(path))
        except StoreError as exc:
            self._show_error("Could not import abbreviations", exc)
            return
        self._set_status(f"Imported {count} abbreviations.")

    def _select_key(self, key: str) -> None:
        row = self.entries_model.row_for_key(key)
        if row < 0:
            return
        self.entries_table.selectRow(row)

    def _confirm_delete(self, key: str) -> bool:
        choice = QMessageBox.question(
            self,
            "Delete Abbreviation",
            f"Delete '{key}' from the dictionary?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        return choice == QMessageBox.Yes

    def _set_status(self, message: str) -> None:
        self.status_label.setText(message)

    def _show_error(self, title: str, exc: Exception) -> None:
        self._set_status(str(exc))
        QMessageBox.warning(self, title, str(exc))
