from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from noteshift_core.cache import DictionaryCache
from noteshift_core.entries import Entry, ValidationError, validate_entry
from noteshift_core.logger import log_dictionary
from noteshift_core.store import SqliteDictionaryStore, StoreError

_legacy_line_re = re.compile(r'^\s*replacements\.put\(\s*"([^"]*)"\s*,\s*"([^"]*)"\s*\)')


class DictionaryAdmin:
    """Management operations on the dictionary.

    Every mutation goes to the store first and then reloads the cache, so
    expansion in open fields sees the change on the next keystroke. Errors
    are logged and re-raised for the management UI to report.
    """

    def __init__(self, store: SqliteDictionaryStore, cache: DictionaryCache) -> None:
        self._store = store
        self._cache = cache

    def upsert(self, key: str, expansion: str) -> Entry:
        entry = validate_entry(key, expansion)
        try:
            self._store.upsert(entry.key, entry.expansion)
        except StoreError as exc:
            log_dictionary(f"Save failed for {entry.key!r}: {exc}")
            raise
        log_dictionary(f"Saved {entry.key!r} -> {entry.expansion!r}")
        self.refresh()
        return entry

    def delete(self, key: str) -> None:
        try:
            self._store.delete(key)
        except StoreError as exc:
            log_dictionary(f"Delete failed for {key!r}: {exc}")
            raise
        log_dictionary(f"Deleted {key!r}")
        self.refresh()

    def load_all(self) -> dict[str, str]:
        try:
            return self._store.load_all()
        except StoreError as exc:
            log_dictionary(f"Load failed: {exc}")
            raise

    def refresh(self) -> None:
        try:
            self._cache.refresh(self._store)
        except StoreError as exc:
            log_dictionary(f"Refresh failed, keeping {len(self._cache)} cached entries: {exc}")
            raise

    def find(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def search(self, text: str) -> List[Entry]:
        needle = (text or "").strip().lower()
        entries = [Entry(key=key, expansion=value) for key, value in self.load_all().items()]
        if needle:
            entries = [
                entry
                for entry in entries
                if needle in entry.key.lower() or needle in entry.expansion.lower()
            ]
        return sorted(entries, key=lambda entry: entry.key)

    def import_legacy(self, path: str | Path) -> int:
        """Import ``replacements.put("key", "value")`` lines from an old export."""
        try:
            payload = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            log_dictionary(f"Import failed for {path}: {exc}")
            raise StoreError(f"Could not read legacy file {path}: {exc}") from exc
        entries: List[Entry] = []
        for line_no, line in enumerate(payload.splitlines(), start=1):
            match = _legacy_line_re.match(line)
            if not match:
                continue
            try:
                entries.append(validate_entry(match.group(1), match.group(2)))
            except ValidationError as exc:
                log_dictionary(f"Skipped legacy line {line_no}: {exc}")
        try:
            self._store.upsert_many(entries)
        except StoreError as exc:
            log_dictionary(f"Import failed for {path}: {exc}")
            raise
        log_dictionary(f"Imported {len(entries)} entries from {path}")
        self.refresh()
        return len(entries)
