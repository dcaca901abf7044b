"""
Storage backends for the Prompt Pocket store.

A storage backend is a durable key-value map of JSON-compatible values.
The store engine reads and writes whole snapshots through it.
"""

import copy
import json
import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from pocket.exceptions import StorageError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class StoragePort(ABC):
    """Key-value persistence used by the store engine."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        pass


class MemoryStorage(StoragePort):
    """In-process storage. Values are deep-copied in and out like a real snapshot."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class StorageManager(StoragePort):
    """
    Persists each key as a JSON file in a data directory.

    Handles atomic writes to prevent data corruption.
    """

    def __init__(self, data_dir: Path) -> None:
        """
        Initialize the StorageManager with a data directory.

        Args:
            data_dir: Directory holding one <key>.json file per key.
        """
        self.data_dir = Path(data_dir)
        self._ensure_data_dir()

    def _ensure_data_dir(self) -> None:
        """Create the data directory if it doesn't exist."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create data directory {self.data_dir}: {e}")

    def _key_path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key: '{key}'")
        return self.data_dir / f"{key}.json"

    def _atomic_write(self, file_path: Path, data: Any) -> None:
        """Write data to a JSON file atomically to prevent corruption.

        Args:
            file_path: Path to the file to write.
            data: JSON-compatible data to write.

        Raises:
            StorageError: If writing to file fails.
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.data_dir, prefix=".tmp_pocket_", suffix=".json"
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as temp_file:
                json.dump(data, temp_file, indent=2, ensure_ascii=False)
            os.replace(temp_path, file_path)
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to write to {file_path}: {e}")

    def get(self, key: str) -> Optional[Any]:
        """Load the JSON value stored under key."""
        file_path = self._key_path(key)
        if not file_path.exists():
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to load {file_path.name}: {e}")
        except RecursionError:
            raise StorageError(f"Failed to load {file_path.name}: data is nested too deeply")

    def set(self, key: str, value: Any) -> None:
        """Save a JSON-compatible value under key."""
        file_path = self._key_path(key)
        logger.debug("Writing %s", file_path)
        self._atomic_write(file_path, value)

    def delete(self, key: str) -> None:
        """Remove the file backing key."""
        file_path = self._key_path(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {file_path.name}: {e}")
