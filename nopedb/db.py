from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .disk_store import DiskJsonDocumentStore
from .settings import DatabaseSettings, load_settings
from .storage import UNSET, ClearOptions, StorageManager

logger = logging.getLogger(__name__)


class NopeDB:
    """
    A JSON file database addressed by separator-delimited keys.

    Every operation is queued when it is called and returns an awaitable
    future. Operations run one at a time, in call order, against the file
    on disk. Call them from a running event loop.

        db = NopeDB(path="data.json", separator="_")
        await db.set("user_1", {"settings": {"theme": "dark"}})
        await db.get("user_1_settings_theme")  # "dark"
    """

    def __init__(
        self,
        path: str | None = None,
        *,
        spaces: int | None = None,
        separator: str | None = None,
        settings: DatabaseSettings | None = None,
    ) -> None:
        if settings is None:
            settings = load_settings(path=path, spaces=spaces, separator=separator)
        self._settings = settings

        store = DiskJsonDocumentStore(settings.file, indent=settings.spaces)
        store.ensure_exists()
        self._storage = StorageManager(store, separator=settings.separator, spaces=settings.spaces)
        logger.debug("STORE OPEN: %s (separator=%r)", settings.file, settings.separator)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "NopeDB":
        return cls(settings=settings)

    @property
    def settings(self) -> DatabaseSettings:
        return self._settings

    @property
    def file(self) -> Path:
        return self._settings.file

    def add(self, key: str, value: Any = UNSET) -> asyncio.Future[int | float]:
        """Adds value to the number at key and returns the new total."""
        return self._storage.add(key, value)

    def all(self) -> asyncio.Future[dict[str, Any]]:
        return self._storage.all()

    def clear(self, options: ClearOptions | Mapping[str, Any] | None = None) -> asyncio.Future[bool]:
        """Empties the database. Requires options={"confirm": True}."""
        return self._storage.clear(options)

    def delete(self, key: str) -> asyncio.Future[bool]:
        return self._storage.delete(key)

    def get(self, key: str) -> asyncio.Future[Any]:
        """Returns the value at key, or None when it is not set."""
        return self._storage.get(key)

    def has(self, key: str) -> asyncio.Future[bool]:
        return self._storage.has(key)

    def push(self, key: str, value: Any = UNSET) -> asyncio.Future[list[Any]]:
        """Appends value to the list at key and returns the updated list."""
        return self._storage.push(key, value)

    def set(self, key: str, value: Any = UNSET) -> asyncio.Future[Any]:
        return self._storage.set(key, value)

    def subtract(self, key: str, value: Any = UNSET) -> asyncio.Future[int | float]:
        return self._storage.subtract(key, value)

    def backup(self, file_path: str | Path) -> asyncio.Future[bool]:
        """Writes a copy of the current document to file_path (must end in .json)."""
        return self._storage.backup(file_path)

    def load_backup(self, file_path: str | Path) -> asyncio.Future[bool]:
        """Replaces the whole document with the contents of file_path."""
        return self._storage.load_backup(file_path)

    # --- Aliases ---

    def fetch(self, key: str) -> asyncio.Future[Any]:
        return self.get(key)

    def remove(self, key: str) -> asyncio.Future[bool]:
        return self.delete(key)

    def reset(self, options: ClearOptions | Mapping[str, Any] | None = None) -> asyncio.Future[bool]:
        return self.clear(options)

    loadBackup = load_backup
