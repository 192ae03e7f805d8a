"""Persistent key-value storage for GST Calc.

A single JSON object file stands in for browser local storage:
- String values under string keys
- Corrupt or missing files read as empty
- Whole-file rewrite on every set (last writer wins)
"""

import json
from pathlib import Path
from typing import Dict, Optional

from .history import (
    DecodedHistory,
    HistoryList,
    history_from_json,
    history_to_json,
)

HISTORY_KEY = "gst_calculator_history"


class KeyValueStore:
    """String key-value store backed by a JSON file."""

    def __init__(self, storage_file: Path):
        """Initialize with the path of the backing file."""
        self.storage_file = Path(storage_file)

    def _read_all(self) -> Dict[str, str]:
        if not self.storage_file.exists():
            return {}

        try:
            with open(self.storage_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError, UnicodeDecodeError):
            return {}

        if not isinstance(data, dict):
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        """Return the stored value for key, or None."""
        value = self._read_all().get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value)

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        data = self._read_all()
        data[key] = value

        self.storage_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.storage_file, "w") as f:
            json.dump(data, f, indent=2)


class HistoryStore:
    """Loads and saves the history list under HISTORY_KEY."""

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY):
        self.store = store
        self.key = key

    def load(self) -> DecodedHistory:
        """Read the persisted history."""
        return history_from_json(self.store.get(self.key))

    def save(self, history: HistoryList) -> None:
        """Persist the whole history list."""
        self.store.set(self.key, history_to_json(history))
