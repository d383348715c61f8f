from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable, Mapping, Optional

from noteshift_core.entries import Entry, validate_entry, validate_key

TABLE_NAME = "abbreviations"
MEMORY_PATH = ":memory:"


class StoreError(RuntimeError):
    pass


class SqliteDictionaryStore:
    """Trigger -> expansion pairs persisted in a single SQLite table.

    Keys are normalized before every write, so ``htn``, ``:htn`` and
    ``:HTN `` all address the same row. Failures of the underlying database
    surface as :class:`StoreError`; nothing is ever silently dropped.
    """

    def __init__(self, path: str | Path, *, table: str = TABLE_NAME) -> None:
        self._path = str(path)
        self._table = table
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def path(self) -> str:
        return self._path

    def open(self) -> None:
        if self._conn is not None:
            return
        try:
            if self._path != MEMORY_PATH:
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._path)
            conn.row_factory = sqlite3.Row
            with conn:
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {self._table} ("
                    "key TEXT PRIMARY KEY, "
                    "value TEXT NOT NULL)"
                )
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Could not open dictionary at {self._path}: {exc}") from exc
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "SqliteDictionaryStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def upsert(self, key: str, expansion: str) -> None:
        entry = validate_entry(key, expansion)
        self.upsert_many([entry])

    def upsert_many(self, entries: Iterable[Entry]) -> None:
        validated = [validate_entry(entry.key, entry.expansion) for entry in entries]
        if not validated:
            return
        conn = self._connection()
        try:
            with conn:
                conn.executemany(
                    f"INSERT OR REPLACE INTO {self._table} (key, value) VALUES (?, ?)",
                    [(entry.key, entry.expansion) for entry in validated],
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Could not write {len(validated)} entries: {exc}") from exc

    def delete(self, key: str) -> None:
        canonical = validate_key(key)
        conn = self._connection()
        try:
            with conn:
                conn.execute(f"DELETE FROM {self._table} WHERE key = ?", (canonical,))
        except sqlite3.Error as exc:
            raise StoreError(f"Could not delete {canonical!r}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        canonical = validate_key(key)
        conn = self._connection()
        try:
            row = conn.execute(
                f"SELECT value FROM {self._table} WHERE key = ? LIMIT 1",
                (canonical,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Could not read {canonical!r}: {exc}") from exc
        return str(row["value"]) if row else None

    def load_all(self) -> dict[str, str]:
        conn = self._connection()
        try:
            rows = conn.execute(f"SELECT key, value FROM {self._table} ORDER BY key").fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Could not load dictionary: {exc}") from exc
        return {str(row["key"]): str(row["value"]) for row in rows}

    def count(self) -> int:
        conn = self._connection()
        try:
            row = conn.execute(f"SELECT COUNT(*) AS total FROM {self._table}").fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Could not count dictionary entries: {exc}") from exc
        return int(row["total"])

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.open()
        return self._conn


def entries_from_mapping(mapping: Mapping[str, str]) -> list[Entry]:
    return [Entry(key=key, expansion=value) for key, value in mapping.items()]
