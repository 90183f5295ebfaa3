"""Key-value backends holding knowledge base snapshots."""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Abstract base class for a string key-value persistence backend.

    Knowledge base snapshots are written under a single key, so backends
    only need whole-value get and set.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key (str): Storage key.

        Returns:
            Optional[str]: The stored value, or None if the key is absent.

        Raises:
            StorageError: If the backend cannot be read.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageError: If the backend cannot be written.
        """
        pass


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value


class FileKeyValueStore(KeyValueStore):
    """Key-value store keeping one UTF-8 file per key under a root directory."""

    def __init__(self, root_dir: str | Path) -> None:
        self._root_dir = Path(root_dir)

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError("Invalid storage key", {"key": key})
        return self._root_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(
                f"Failed to read {path}: {e}", {"key": key}
            ) from e

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._root_dir.mkdir(parents=True, exist_ok=True)
            # Readers see either the old or the new value, never a partial one
            fd, tmp_name = tempfile.mkstemp(dir=self._root_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(
                f"Failed to write {path}: {e}", {"key": key}
            ) from e
        logger.debug(f"Wrote {len(value)} chars to {path}")
