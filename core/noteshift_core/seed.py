from __future__ import annotations

from typing import Mapping

from noteshift_core.logger import log_dictionary
from noteshift_core.store import SqliteDictionaryStore, entries_from_mapping

DEFAULT_ENTRIES: Mapping[str, str] = {
    ":cc ": "Chief Complaint",
    ":pi ": "Present Illness",
    ":ros ": "Review of Systems",
    ":pmh ": "Past Medical History",
    ":s ": "Subjective",
    ":o ": "Objective",
    ":pe ": "Physical Exam",
    ":a ": "Assessment",
    ":p ": "Plan",
    ":cmt ": "Comment",
    ":dx ": "Diagnosis",
    ":tx ": "Treatment",
    ":rx ": "Prescription",
    ":hpi ": "History of Present Illness",
    ":fhx ": "Family History",
    ":shx ": "Social History",
    ":allergies ": "Allergies",
    ":meds ": "Medications",
    ":vs ": "Vital Signs",
    ":cva ": "Cerebrovascular Accident",
    ":mi ": "Myocardial Infarction",
    ":dm ": "Diabetes Mellitus",
    ":htn ": "Hypertension",
    ":cad ": "Coronary Artery Disease",
}


def seed_store(store: SqliteDictionaryStore, entries: Mapping[str, str] = DEFAULT_ENTRIES) -> int:
    """Insert the built-in entries into an empty store; returns how many were written."""
    if store.load_all():
        return 0
    store.upsert_many(entries_from_mapping(entries))
    log_dictionary(f"Seeded {len(entries)} default entries.")
    return len(entries)
