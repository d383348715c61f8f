from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

DEFAULT_FIELD_TITLES = (
    "CC>",
    "PI>",
    "ROS>",
    "PMH>",
    "S>",
    "O>",
    "Physical Exam>",
    "A>",
    "P>",
    "Comment>",
)


@dataclass
class Field:
    title: str
    content: str = ""
    index: int = 0


def build_fields(titles: Sequence[str] = DEFAULT_FIELD_TITLES) -> List[Field]:
    return [Field(title=title, index=index) for index, title in enumerate(titles)]


class Aggregator:
    """Concatenates every non-blank field into the note preview."""

    def __init__(self) -> None:
        self._preview = ""

    @property
    def preview(self) -> str:
        return self._preview

    def recompute(self, fields: Iterable[Field]) -> str:
        parts: List[str] = []
        for field in sorted(fields, key=lambda item: item.index):
            body = field.content.strip()
            if not body:
                continue
            parts.append(f"{field.title} {body}\n\n")
        self._preview = "".join(parts).rstrip()
        return self._preview
