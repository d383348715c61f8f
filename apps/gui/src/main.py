from __future__ import annotations

import os
import sys
import time
from datetime import date
from pathlib import Path
from typing import Callable, Optional

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, "..", "..", ".."))
CORE_ROOT = os.path.join(REPO_ROOT, "core")
GUI_ROOT = os.path.join(REPO_ROOT, "apps", "gui", "src")
for path in (CORE_ROOT, GUI_ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from PySide6.QtCore import QByteArray, QCoreApplication, QSettings, QStandardPaths, Qt, QTimer
from PySide6.QtGui import QAction, QColor, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QSplitter,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from noteshift_core import (
    ActionResult,
    ClearFields,
    EditOutcome,
    ExitApp,
    ManageDictionary,
    NoteAction,
    NoteActionKind,
    SaveBackup,
    StoreError,
    SubmitNote,
    set_log_handler,
)

from crash_log import write_crash_log
from dialogs import DictionaryManagerDialog
from state import NoteState

LOG_COLOR_DICTIONARY = "#2E6BD6"
LOG_COLOR_ERROR = "#C73C3C"


class MainWindow(QMainWindow):
    def __init__(self, state: Optional[NoteState] = None) -> None:
        super().__init__()
        self.setWindowTitle("NoteShift")
        self._ui_settings = QSettings()
        self._applying_rewrite = False

        self.log_edit = QTextEdit()
        self.log_edit.setReadOnly(True)
        set_log_handler(lambda message: self._append_log(message, color=QColor(LOG_COLOR_DICTIONARY)))

        if state is None:
            state = NoteState(_settings_path())
            state.load_settings()
            state.open_session()
        self.state = state
        self.state.availabilityChanged.connect(self._on_availability_changed)

        self.field_edits: dict[int, QPlainTextEdit] = {}
        self.preview_edit = QPlainTextEdit()
        self.preview_edit.setReadOnly(True)
        self.preview_edit.setPlaceholderText("Note preview")
        self.state.previewChanged.connect(self.preview_edit.setPlainText)

        self.status_label = QLabel()

        fields_panel = QScrollArea()
        fields_panel.setWidgetResizable(True)
        fields_panel.setWidget(self._build_fields_panel())

        right_panel = QSplitter(Qt.Vertical)
        right_panel.addWidget(self.preview_edit)
        right_panel.addWidget(self._build_log_panel())
        right_panel.setStretchFactor(0, 1)
        self._right_splitter = right_panel

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(fields_panel)
        splitter.addWidget(right_panel)
        splitter.setStretchFactor(1, 1)
        self._splitter = splitter

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(splitter, 1)
        layout.addLayout(self._build_button_row())
        layout.addWidget(self.status_label)
        self.setCentralWidget(central)

        self._build_menu()
        self._restore_window_state()
        self._on_availability_changed(self.state.available)
        self.preview_edit.setPlainText(self.state.session.preview)

    def _build_fields_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)
        for field in self.state.session.fields:
            editor = QPlainTextEdit()
            editor.setPlaceholderText(field.title)
            editor.setTabChangesFocus(True)
            editor.setMinimumHeight(60)
            editor.textChanged.connect(lambda index=field.index: self._on_field_edited(index))
            self.field_edits[field.index] = editor
            layout.addWidget(QLabel(field.title))
            layout.addWidget(editor)
        layout.addStretch(1)
        return panel

    def _build_log_panel(self) -> QWidget:
        title = QLabel("Log")
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(title)
        layout.addWidget(self.log_edit)
        panel = QWidget()
        panel.setLayout(layout)
        return panel

    def _build_button_row(self) -> QHBoxLayout:
        row = QHBoxLayout()
        buttons: list[tuple[str, Callable[[], NoteAction]]] = [
            ("Clear", ClearFields),
            ("Save Backup", lambda: SaveBackup(path=self.state.backup_path())),
            ("Submit", lambda: SubmitNote(today=date.today())),
            ("Abbreviations", ManageDictionary),
            ("Exit", ExitApp),
        ]
        self.action_buttons: dict[str, QPushButton] = {}
        for label, factory in buttons:
            button = QPushButton(label)
            button.clicked.connect(lambda _checked=False, factory=factory: self._trigger_action(factory()))
            row.addWidget(button)
            self.action_buttons[label] = button
        row.addStretch(1)
        return row

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        save_action = QAction("Save Backup", self)
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(lambda: self._trigger_action(SaveBackup(path=self.state.backup_path())))
        submit_action = QAction("Submit", self)
        submit_action.setShortcut("Ctrl+Return")
        submit_action.triggered.connect(lambda: self._trigger_action(SubmitNote(today=date.today())))
        exit_action = QAction("Exit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(lambda: self._trigger_action(ExitApp()))
        file_menu.addAction(save_action)
        file_menu.addAction(submit_action)
        file_menu.addSeparator()
        file_menu.addAction(exit_action)

        dictionary_menu = self.menuBar().addMenu("Dictionary")
        manage_action = QAction("Manage Abbreviations...", self)
        manage_action.triggered.connect(lambda: self._trigger_action(ManageDictionary()))
        dictionary_menu.addAction(manage_action)

    def _on_field_edited(self, index: int) -> None:
        if self._applying_rewrite:
            return
        editor = self.field_edits[index]
        scanned = editor.toPlainText()
        position = _index_from_utf16(scanned, editor.textCursor().position())
        outcome = self.state.apply_edit(index, scanned, position)
        if outcome.expanded:
            # The document must not be rewritten from inside its own change signal.
            QTimer.singleShot(0, lambda: self._apply_rewrite(index, scanned, outcome))

    def _apply_rewrite(self, index: int, scanned: str, outcome: EditOutcome) -> None:
        if self.field_edits[index].toPlainText() != scanned:
            return
        self._write_field(index, outcome.content, caret=outcome.caret)

    def _write_field(self, index: int, text: str, *, caret: Optional[int] = None) -> None:
        editor = self.field_edits[index]
        self._applying_rewrite = True
        try:
            editor.setPlainText(text)
            if caret is not None:
                cursor = editor.textCursor()
                cursor.setPosition(_utf16_offset(text, min(caret, len(text))))
                editor.setTextCursor(cursor)
        finally:
            self._applying_rewrite = False

    def _sync_fields(self) -> None:
        for field in self.state.session.fields:
            if self.field_edits[field.index].toPlainText() != field.content:
                self._write_field(field.index, field.content)

    def _trigger_action(self, action: NoteAction) -> Optional[ActionResult]:
        try:
            result = self.state.perform(action)
        except StoreError as exc:
            self._append_log(str(exc), color=QColor(LOG_COLOR_ERROR))
            QMessageBox.warning(self, "NoteShift", str(exc))
            return None
        self._handle_result(result)
        return result

    def _handle_result(self, result: ActionResult) -> None:
        kind = result.kind
        if kind is NoteActionKind.CLEAR:
            self._sync_fields()
            self._set_status("Note cleared.")
        elif kind is NoteActionKind.SAVE_BACKUP:
            self._append_log(f"[note] Backup written to {result.path}")
            self._set_status(f"Backup saved to {result.path}")
        elif kind is NoteActionKind.SUBMIT:
            QApplication.clipboard().setText(result.text or "")
            self._append_log("[note] Note copied to clipboard")
            self._set_status("Note copied to clipboard.")
        elif kind is NoteActionKind.MANAGE_DICTIONARY:
            self._open_dictionary_manager()
        elif kind is NoteActionKind.EXIT:
            self.close()

    def _open_dictionary_manager(self) -> None:
        dialog = DictionaryManagerDialog(self.state, self)
        dialog.exec()
        dialog.deleteLater()

    def _on_availability_changed(self, available: bool) -> None:
        if available:
            self._set_status(f"Dictionary: {self.state.database_path()}")
        else:
            self._set_status("Dictionary unavailable, abbreviations will not expand.")

    def _set_status(self, message: str) -> None:
        self.status_label.setText(message)

    def _append_log(self, message: str, *, color: Optional[QColor] = None) -> None:
        if not message:
            return
        cursor = self.log_edit.textCursor()
        cursor.movePosition(QTextCursor.End)
        fmt = QTextCharFormat()
        if color:
            fmt.setForeground(color)
        cursor.setCharFormat(fmt)
        cursor.insertText(message + "\n")
        self.log_edit.setTextCursor(cursor)
        self.log_edit.ensureCursorVisible()

    def _restore_window_state(self) -> None:
        geometry = self._ui_settings.value("main_window/geometry", type=QByteArray)
        if geometry:
            self.restoreGeometry(geometry)
        else:
            self.resize(1100, 700)
        splitter_state = self._ui_settings.value("main_window/splitter", type=QByteArray)
        if splitter_state:
            self._splitter.restoreState(splitter_state)
        else:
            self._splitter.setSizes([480, 620])
        right_splitter_state = self._ui_settings.value("main_window/right_splitter", type=QByteArray)
        if right_splitter_state:
            self._right_splitter.restoreState(right_splitter_state)
        else:
            self._right_splitter.setSizes([480, 220])

    def _save_window_state(self) -> None:
        self._ui_settings.setValue("main_window/geometry", self.saveGeometry())
        self._ui_settings.setValue("main_window/splitter", self._splitter.saveState())
        self._ui_settings.setValue("main_window/right_splitter", self._right_splitter.saveState())

    def closeEvent(self, event) -> None:
        self._save_window_state()
        set_log_handler(None)
        self.state.close_session()
        super().closeEvent(event)


def _utf16_offset(text: str, index: int) -> int:
    """Qt cursor positions count UTF-16 code units, Python indexes count code points."""
    return len(text[:index].encode("utf-16-le")) // 2


def _index_from_utf16(text: str, offset: int) -> int:
    units = 0
    for index, char in enumerate(text):
        if units >= offset:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)


def _app_data_dir() -> Path:
    base_dir = Path(QStandardPaths.writableLocation(QStandardPaths.AppDataLocation))
    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def _startup_log_paths() -> list[Path]:
    paths: list[Path] = []
    try:
        paths.append(_app_data_dir() / "startup_timing.log")
    except OSError:
        pass
    return paths


def _settings_path() -> Path:
    return _app_data_dir() / "settings.json"


def main() -> None:
    # AppDataLocation must be scoped to NoteShift before any logging.
    QCoreApplication.setOrganizationName("NoteShift")
    QCoreApplication.setApplicationName("NoteShift")
    startup_logs = _startup_log_paths()
    start_time = time.perf_counter()
    last_time = start_time

    def log_startup(label: str) -> None:
        nonlocal last_time
        now = time.perf_counter()
        delta_ms = (now - last_time) * 1000.0
        total_ms = (now - start_time) * 1000.0
        last_time = now
        message = f"[startup] {label} (+{delta_ms:.1f} ms, total {total_ms:.1f} ms)"
        for path in startup_logs:
            try:
                with open(path, "a", encoding="utf-8") as handle:
                    handle.write(message + "\n")
            except OSError:
                continue
        print(message)

    log_startup("main() begin")
    if "--print-data-dir" in sys.argv:
        print(f"[NoteShift] AppDataLocation={_app_data_dir()}")
        print(f"[NoteShift] Startup log paths={startup_logs}")
        return

    def exception_hook(exctype, value, tb):
        write_crash_log(_app_data_dir(), "Crash", (exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)
    sys.excepthook = exception_hook
    log_startup("exception hook installed")

    app = QApplication(sys.argv)
    log_startup("QApplication created")
    window = MainWindow()
    log_startup("MainWindow constructed")
    window.show()
    log_startup("window shown")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
