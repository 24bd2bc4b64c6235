"""JSON-backed preference store for non-sensitive settings."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

DEFAULT_PREFERENCES_PATH = os.path.join(os.path.expanduser("~"), ".linkup_client", "app-settings.json")


class PreferenceStore:
    def __init__(self, path: str = DEFAULT_PREFERENCES_PATH) -> None:
        self.path = path
        self._data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if not os.path.exists(self.path):
            self._data = {}
            return
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
            self._data = payload if isinstance(payload, dict) else {}
        except (json.JSONDecodeError, OSError) as exc:
            logging.warning("Failed to read preferences %s: %s", self.path, exc)
            self._data = {}

    def save(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(self._data, handle, ensure_ascii=False, indent=2)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        value = self._data.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.save()

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self.save()

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def clear(self) -> None:
        self._data = {}
        self.save()
