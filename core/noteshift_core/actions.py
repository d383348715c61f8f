from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class NoteActionKind(Enum):
    CLEAR = "clear"
    SAVE_BACKUP = "save_backup"
    SUBMIT = "submit"
    MANAGE_DICTIONARY = "manage_dictionary"
    EXIT = "exit"


@dataclass(frozen=True)
class ClearFields:
    kind = NoteActionKind.CLEAR


@dataclass(frozen=True)
class SaveBackup:
    path: Path
    kind = NoteActionKind.SAVE_BACKUP


@dataclass(frozen=True)
class SubmitNote:
    today: date
    kind = NoteActionKind.SUBMIT


@dataclass(frozen=True)
class ManageDictionary:
    kind = NoteActionKind.MANAGE_DICTIONARY


@dataclass(frozen=True)
class ExitApp:
    kind = NoteActionKind.EXIT


NoteAction = Union[ClearFields, SaveBackup, SubmitNote, ManageDictionary, ExitApp]


@dataclass(frozen=True)
class ActionResult:
    kind: NoteActionKind
    handled: bool
    text: Optional[str] = None
    path: Optional[Path] = None
