"""
JSON-file persistence for Bubble Shooter progress.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from ...core.services import PersistenceInterface


class JsonFilePersistence(PersistenceInterface):
    """
    Stores ``last_difficulty`` and ``last_score`` in a small JSON file.

    Read and write failures are reported and otherwise ignored; a broken or
    missing save file behaves like a fresh install.
    """

    def __init__(self, path: Union[str, Path] = "saves/bubble_shooter.json"):
        self.path = Path(path)
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"[Persistence] Could not read {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _get_int(self, key: str) -> int:
        try:
            return int(self._data.get(key, 0))
        except (TypeError, ValueError):
            return 0

    def get_last_difficulty(self) -> int:
        return self._get_int("last_difficulty")

    def get_last_score(self) -> int:
        return self._get_int("last_score")

    def save_progress(self, difficulty: int, score: int) -> None:
        self._data["last_difficulty"] = difficulty
        self._data["last_score"] = score
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            print(f"[Persistence] Could not write {self.path}: {e}")
