from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from noteshift_core import Entry, trigger_word


class EntriesTableModel(QAbstractTableModel):
    COLUMN_KEY = 0
    COLUMN_EXPANSION = 1

    def __init__(self, entries: Optional[list[Entry]] = None) -> None:
        super().__init__()
        self._entries = entries or []

    def set_entries(self, entries: list[Entry]) -> None:
        self.beginResetModel()
        self._entries = list(entries)
        self.endResetModel()

    def entries(self) -> list[Entry]:
        return list(self._entries)

    def entry_at(self, row: int) -> Optional[Entry]:
        if row < 0 or row >= len(self._entries):
            return None
        return self._entries[row]

    def row_for_key(self, key: str) -> int:
        for row, entry in enumerate(self._entries):
            if entry.key == key:
                return row
        return -1

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._entries)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return 0 if parent.isValid() else 2

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):
        if orientation != Qt.Horizontal or role != Qt.DisplayRole:
            return None
        return {
            self.COLUMN_KEY: "Abbreviation",
            self.COLUMN_EXPANSION: "Expansion",
        }.get(section)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid():
            return None
        entry = self._entries[index.row()]
        column = index.column()
        if role == Qt.UserRole:
            return entry
        if role == Qt.ToolTipRole:
            if column == self.COLUMN_KEY:
                return f"Type '{entry.key}' in any field"
            if column == self.COLUMN_EXPANSION:
                return entry.expansion
        if role in (Qt.DisplayRole, Qt.EditRole):
            if column == self.COLUMN_KEY:
                return ":" + trigger_word(entry.key)
            if column == self.COLUMN_EXPANSION:
                return entry.expansion
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        if not index.isValid():
            return Qt.ItemIsEnabled
        return Qt.ItemIsSelectable | Qt.ItemIsEnabled
