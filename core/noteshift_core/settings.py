from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from noteshift_core.aggregate import DEFAULT_FIELD_TITLES
from noteshift_core.trigger import MatchPolicy


@dataclass(frozen=True)
class AppSettings:
    database_path: Optional[str] = None
    field_titles: Sequence[str] = DEFAULT_FIELD_TITLES
    seed_defaults: bool = True
    match_policy: str = MatchPolicy.FIRST_OCCURRENCE.value  # first, end
    backup_dir: Optional[str] = None
    version: int = 1

    def resolved_match_policy(self) -> MatchPolicy:
        try:
            return MatchPolicy(self.match_policy)
        except ValueError:
            return MatchPolicy.FIRST_OCCURRENCE


def load_app_settings(path: str | Path) -> AppSettings:
    payload = Path(path).read_text(encoding="utf-8")
    data = json.loads(payload)
    return settings_from_dict(data)


def save_app_settings(settings: AppSettings, path: str | Path) -> None:
    data = settings_to_dict(settings)
    payload = json.dumps(data, indent=2, sort_keys=True)
    Path(path).write_text(payload, encoding="utf-8")


def settings_from_dict(data: Mapping[str, Any]) -> AppSettings:
    titles = tuple(str(title) for title in data.get("field_titles", []) if str(title).strip())
    return AppSettings(
        database_path=data.get("database_path"),
        field_titles=titles or DEFAULT_FIELD_TITLES,
        seed_defaults=bool(data.get("seed_defaults", True)),
        match_policy=str(data.get("match_policy", MatchPolicy.FIRST_OCCURRENCE.value)),
        backup_dir=data.get("backup_dir"),
        version=int(data.get("version", 1)),
    )


def settings_to_dict(settings: AppSettings) -> dict[str, Any]:
    data: dict[str, Any] = {
        "version": settings.version,
        "database_path": settings.database_path,
        "field_titles": list(settings.field_titles),
        "seed_defaults": settings.seed_defaults,
        "match_policy": settings.match_policy,
        "backup_dir": settings.backup_dir,
    }
    trimmed = {key: value for key, value in data.items() if value not in (None, [], {})}
    return trimmed
