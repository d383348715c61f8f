from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Protocol

from noteshift_core.entries import normalize_key


class DictionarySource(Protocol):
    def load_all(self) -> dict[str, str]: ...


class DictionaryCache:
    """Keystroke-time view of the dictionary store.

    The content is an immutable mapping swapped in whole on ``refresh``; a
    failed refresh leaves the previous mapping in place. Until the first
    successful refresh the cache is unloaded and every lookup misses.
    """

    def __init__(self) -> None:
        self._entries: Optional[Mapping[str, str]] = None

    @property
    def loaded(self) -> bool:
        return self._entries is not None

    def lookup(self, key: str) -> Optional[str]:
        entries = self._entries
        if entries is None:
            return None
        return entries.get(normalize_key(key))

    def refresh(self, store: DictionarySource) -> None:
        fresh = store.load_all()
        self._entries = MappingProxyType(dict(fresh))

    def snapshot(self) -> dict[str, str]:
        return dict(self._entries or {})

    def __len__(self) -> int:
        return len(self._entries or {})
