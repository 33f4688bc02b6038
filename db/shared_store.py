"""Shared key-value store for the planner and the widget.

Each app group gets one JSON object file mapping string keys to string
values. Both processes open the same file; a write replaces the whole
file atomically so a reader never sees a half-written value.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from config import Config
from db.errors import StorageUnavailableError


class SharedStore:
    """Key-value store scoped to an app group.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the shared store.

        Args:
            config: Config object containing the shared directory and app group id.
        """
        self.config = config

    def get_store_path(self) -> Path:
        """Get the path of the backing file.

        Returns:
            Path: shared_dir/app_group_id.json
        """
        return self.config.shared_store_path

    def get(self, key: str) -> Optional[str]:
        """Read the value stored under key.

        Returns:
            The stored string, or None if the key has never been written.

        Raises:
            StorageUnavailableError: If the shared region can't be read.
        """
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageUnavailableError: If the shared region can't be written.
        """
        values = self._read_all()
        values[key] = value
        self._write_all(values)

    def remove(self, key: str) -> bool:
        """Delete key from the store.

        Returns:
            True if the key existed, False otherwise.
        """
        values = self._read_all()
        if key not in values:
            return False
        del values[key]
        self._write_all(values)
        return True

    def keys(self) -> List[str]:
        """List all keys in the store, sorted."""
        return sorted(self._read_all().keys())

    def _read_all(self) -> Dict[str, str]:
        path = self.get_store_path()
        if not path.exists():
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageUnavailableError(
                f"Cannot read shared store for '{self.config.app_group_id}': {e}"
            ) from e

        if not isinstance(data, dict):
            raise StorageUnavailableError(
                f"Shared store for '{self.config.app_group_id}' is not a key-value object"
            )
        return data

    def _write_all(self, values: Dict[str, str]) -> None:
        path = self.get_store_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(values, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot write shared store for '{self.config.app_group_id}': {e}"
            ) from e
