from __future__ import annotations
from typing import Iterable, Optional
import yaml


class ExerciseCatalog:
    """Resolve exercise names and ids against a fixed list of exercises."""

    def __init__(self, exercises: Iterable[dict] = ()) -> None:
        self._names: dict[str, str] = {}
        self._ids: dict[str, str] = {}
        self._patterns: dict[str, str] = {}
        for item in exercises:
            ex_id = str(item["id"])
            name = str(item["name"])
            self._names[ex_id] = name
            self._ids.setdefault(name, ex_id)
            if item.get("pattern"):
                self._patterns[ex_id] = str(item["pattern"])

    @classmethod
    def from_yaml(cls, path: str) -> "ExerciseCatalog":
        """Load a catalog from a YAML list of ``{id, name, pattern}`` items."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or []
        if isinstance(data, dict):
            data = data.get("exercises", [])
        return cls(data)

    def resolve_id_by_name(self, name: str) -> Optional[str]:
        return self._ids.get(name)

    def resolve_name_by_id(self, exercise_id: str) -> str:
        return self._names.get(exercise_id, exercise_id)

    def pattern_for_name(self, name: str) -> Optional[str]:
        """Return the movement pattern of ``name`` (case-insensitive)."""
        wanted = name.lower()
        for ex_id, ex_name in self._names.items():
            if ex_name.lower() == wanted:
                return self._patterns.get(ex_id)
        return None
