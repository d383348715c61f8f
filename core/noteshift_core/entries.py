from __future__ import annotations

from dataclasses import dataclass
import re

TRIGGER_SENTINEL = ":"
TRIGGER_SEPARATOR = " "

_word_re = re.compile(r"\w+\Z")


class ValidationError(ValueError):
    pass


@dataclass(frozen=True)
class Entry:
    key: str
    expansion: str


def normalize_key(raw: str) -> str:
    """Return the canonical ``:word `` form of a trigger key.

    Idempotent: normalizing an already canonical key returns it unchanged.
    """
    text = str(raw or "").strip()
    if text.startswith(TRIGGER_SENTINEL):
        text = text[len(TRIGGER_SENTINEL):].lstrip()
    return f"{TRIGGER_SENTINEL}{text.lower()}{TRIGGER_SEPARATOR}"


def trigger_word(key: str) -> str:
    return normalize_key(key)[len(TRIGGER_SENTINEL):-len(TRIGGER_SEPARATOR)]


def validate_key(raw: str) -> str:
    key = normalize_key(raw)
    word = trigger_word(key)
    if not word:
        raise ValidationError("Trigger key is empty.")
    if not _word_re.match(word):
        raise ValidationError(f"Trigger key may only contain letters, digits or underscores: {raw!r}")
    return key


def validate_entry(key: str, expansion: str) -> Entry:
    canonical = validate_key(key)
    if not expansion:
        raise ValidationError(f"Expansion for {canonical!r} is empty.")
    return Entry(key=canonical, expansion=str(expansion))
