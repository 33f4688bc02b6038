"""Helper utilities for tests."""

from typing import Dict, List, Optional

from db.errors import StorageUnavailableError

STORAGE_KEY = "legoTimePlannerCategories"


class MemoryStore:
    """In-memory stand-in for SharedStore.

    Args:
        values: Initial key-value contents.
        unavailable: When True, every access raises StorageUnavailableError.
    """

    def __init__(self, values: Optional[Dict[str, str]] = None, unavailable=False):
        self.values = dict(values or {})
        self.unavailable = unavailable
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self.values[key] = value
        self.writes += 1

    def remove(self, key: str) -> bool:
        self._check()
        return self.values.pop(key, None) is not None

    def keys(self) -> List[str]:
        self._check()
        return sorted(self.values.keys())

    def _check(self):
        if self.unavailable:
            raise StorageUnavailableError("shared storage is not configured")


class RecordingWidgetCenter:
    """Widget center double that counts refresh requests."""

    def __init__(self):
        self.reloads = 0

    def reload_all_timelines(self) -> bool:
        self.reloads += 1
        return True
