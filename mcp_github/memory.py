# =============================================================================
# GitHub MCP Server - Memory Store
# =============================================================================
"""
Flat key-value memory persisted as a single JSON object in one file.

Every call reads the whole file and, for writes, rewrites it entirely.
Concurrent writers can lose each other's updates; the last write wins.
The file location is passed in at construction.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class MemoryStoreError(Exception):
    """
    Raised when the memory file cannot be read or written.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MemoryStore:
    """
    Key-value memory backed by a JSON file.

    Attributes:
        path: Location of the JSON file. A missing file is an empty memory.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise MemoryStoreError(f"Error reading memory: {e}") from e
        if not isinstance(data, dict):
            raise MemoryStoreError(
                f"Error reading memory: {self.path} does not hold a JSON object"
            )
        return data

    def _save(self, memory: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(memory, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise MemoryStoreError(f"Error saving memory: {e}") from e

    def remember(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        memory = self._load()
        memory[key] = value
        self._save(memory)
        logger.debug(f"Remembered '{key}'")

    def recall(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None."""
        return self._load().get(key)

    def recall_all(self) -> dict[str, str]:
        return self._load()

    def forget(self, key: str) -> None:
        """Remove ``key``; forgetting an unknown key is not an error."""
        memory = self._load()
        memory.pop(key, None)
        self._save(memory)
        logger.debug(f"Forgot '{key}'")

    def forget_all(self) -> None:
        self._save({})
        logger.info("Memory cleared")
