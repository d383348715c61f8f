from noteshift_core.actions import (
    ActionResult,
    ClearFields,
    ExitApp,
    ManageDictionary,
    NoteAction,
    NoteActionKind,
    SaveBackup,
    SubmitNote,
)
from noteshift_core.admin import DictionaryAdmin
from noteshift_core.aggregate import DEFAULT_FIELD_TITLES, Aggregator, Field, build_fields
from noteshift_core.cache import DictionaryCache
from noteshift_core.entries import (
    Entry,
    ValidationError,
    normalize_key,
    trigger_word,
    validate_entry,
    validate_key,
)
from noteshift_core.expansion import EditEvent, EditKind, Expansion, ExpansionEngine
from noteshift_core.logger import log_dictionary, set_log_handler
from noteshift_core.seed import DEFAULT_ENTRIES, seed_store
from noteshift_core.session import EditOutcome, NoteSession
from noteshift_core.settings import AppSettings, load_app_settings, save_app_settings
from noteshift_core.store import SqliteDictionaryStore, StoreError
from noteshift_core.transforms import expand_onset, expand_prescription, finalize_note
from noteshift_core.trigger import MatchPolicy, TriggerDetector, TriggerMatch

__all__ = [
    "ActionResult",
    "AppSettings",
    "Aggregator",
    "ClearFields",
    "DEFAULT_ENTRIES",
    "DEFAULT_FIELD_TITLES",
    "DictionaryAdmin",
    "DictionaryCache",
    "EditEvent",
    "EditKind",
    "EditOutcome",
    "Entry",
    "ExitApp",
    "Expansion",
    "ExpansionEngine",
    "Field",
    "ManageDictionary",
    "MatchPolicy",
    "NoteAction",
    "NoteActionKind",
    "NoteSession",
    "SaveBackup",
    "SqliteDictionaryStore",
    "StoreError",
    "SubmitNote",
    "TriggerDetector",
    "TriggerMatch",
    "ValidationError",
    "build_fields",
    "expand_onset",
    "expand_prescription",
    "finalize_note",
    "load_app_settings",
    "log_dictionary",
    "normalize_key",
    "save_app_settings",
    "seed_store",
    "set_log_handler",
    "trigger_word",
    "validate_entry",
    "validate_key",
]
