"""Key-value storage for the persisted high score."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

HIGH_SCORE_KEY = "snake_highscore"


class ScoreStore(Protocol):
    """Integer key-value store used for the high score."""

    def get(self, key: str) -> int | None: ...

    def set(self, key: str, value: int) -> None: ...


class MemoryStore:
    """In-process store, handy for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, int] | None = None):
        self.values: dict[str, int] = dict(initial or {})

    def get(self, key: str) -> int | None:
        return self.values.get(key)

    def set(self, key: str, value: int) -> None:
        self.values[key] = value


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    Unreadable or unwritable files never abort a game: reads degrade
    to "absent" and writes to a no-op, both with a printed warning.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Could not read {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> int | None:
        value = self._read_all().get(key)
        try:
            return int(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    def set(self, key: str, value: int) -> None:
        data = self._read_all()
        data[key] = int(value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            print(f"Could not write {self.path}: {e}")


def load_high_score(store: ScoreStore) -> int:
    """Read the stored high score, treating absence as 0."""
    value = store.get(HIGH_SCORE_KEY)
    return max(0, value) if value is not None else 0
