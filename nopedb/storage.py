from __future__ import annotations

import asyncio
import functools
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, StrictBool, ValidationError

from .disk_store import write_document
from .errors import (
    MESSAGES,
    BackupError,
    ConfirmationRequiredError,
    DatabaseError,
    MissingValueError,
    TypeMismatchError,
)
from .interfaces import DocumentStore
from .json_store import read_json
from .keypath import NOT_FOUND, resolve, resolve_and_delete, resolve_and_set, validate_key
from .queue import Job, OperationQueue

logger = logging.getLogger(__name__)

# Marks an argument the caller did not pass at all (None is a legal JSON value).
UNSET: Any = object()


class ClearOptions(BaseModel):
    confirm: StrictBool = False


def is_number(value: Any) -> bool:
    # bool is a subclass of int in Python
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _clear_confirmed(options: ClearOptions | Mapping[str, Any] | None) -> bool:
    if isinstance(options, ClearOptions):
        return options.confirm is True
    if not isinstance(options, Mapping):
        return False
    try:
        return ClearOptions.model_validate(dict(options)).confirm is True
    except ValidationError:
        return False


def _check_backup_path(file_path: Any, *, require_extension: bool) -> Path:
    if not file_path or not isinstance(file_path, (str, Path)):
        raise BackupError(MESSAGES["invalid_backup_path"])
    if require_extension and not str(file_path).endswith(".json"):
        raise BackupError(MESSAGES["backup_extension"])
    return Path(file_path)


def queued(build: Callable[..., Job]) -> Callable[..., asyncio.Future[Any]]:
    """
    Turn a job builder into a queued operation.

    The builder validates its arguments and returns the job. Validation
    failures come back as an already-failed future, so every operation
    reports errors the same way: when its result is awaited.
    """

    @functools.wraps(build)
    def operation(self: StorageManager, *args: Any, **kwargs: Any) -> asyncio.Future[Any]:
        try:
            job = build(self, *args, **kwargs)
        except DatabaseError as e:
            return self._queue.reject(e)
        return self._queue.submit(job)

    return operation


class StorageManager:
    """
    Queued read/modify/write operations over one JSON document.

    Every public operation validates its arguments and submits one job to
    the OperationQueue at call time, returning an awaitable future. A job
    loads the whole document, applies a key path operation and, when it
    changed something, saves the whole document. File I/O runs in a worker
    thread so the event loop is not blocked.
    """

    def __init__(self, store: DocumentStore, *, separator: str = ".", spaces: int = 2) -> None:
        self._store = store
        self._separator = separator
        self._spaces = spaces
        self._queue = OperationQueue()

    async def _read(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.load)

    async def _write(self, doc: dict[str, Any]) -> None:
        await asyncio.to_thread(self._store.save, doc)

    def _key(self, key: Any) -> str:
        return validate_key(key, self._separator)

    @queued
    def set(self, key: str, value: Any = UNSET) -> Job:
        key = self._key(key)
        if value is UNSET:
            raise MissingValueError(MESSAGES["undefined_value"])

        async def job() -> Any:
            doc = await self._read()
            resolve_and_set(doc, key, value, self._separator)
            await self._write(doc)
            logger.debug("STORE SET: key=%s", key)
            return value

        return job

    @queued
    def get(self, key: str) -> Job:
        key = self._key(key)

        async def job() -> Any:
            doc = await self._read()
            found = resolve(doc, key, self._separator)
            return None if found is NOT_FOUND else found

        return job

    @queued
    def has(self, key: str) -> Job:
        key = self._key(key)

        async def job() -> bool:
            doc = await self._read()
            found = resolve(doc, key, self._separator)
            # absent and explicit null are the same thing to callers
            return found is not NOT_FOUND and found is not None

        return job

    @queued
    def add(self, key: str, value: Any = UNSET) -> Job:
        if value is not UNSET and not is_number(value):
            raise TypeMismatchError(MESSAGES["must_be_a_number"])
        return self._accumulate(key, value)

    @queued
    def subtract(self, key: str, value: Any = UNSET) -> Job:
        if value is not UNSET and not is_number(value):
            raise TypeMismatchError(MESSAGES["must_be_a_number"])
        return self._accumulate(key, value if value is UNSET else -value)

    def _accumulate(self, key: str, delta: Any) -> Job:
        key = self._key(key)
        if delta is UNSET:
            raise MissingValueError(MESSAGES["undefined_value"])

        async def job() -> int | float:
            doc = await self._read()
            current = resolve(doc, key, self._separator)
            if current is NOT_FOUND or current is None:
                current = 0
            elif not is_number(current):
                raise TypeMismatchError(MESSAGES["data_not_a_number"])
            total = current + delta
            resolve_and_set(doc, key, total, self._separator)
            await self._write(doc)
            logger.debug("STORE ADD: key=%s delta=%s total=%s", key, delta, total)
            return total

        return job

    @queued
    def push(self, key: str, value: Any = UNSET) -> Job:
        key = self._key(key)
        if value is UNSET:
            raise MissingValueError(MESSAGES["undefined_value"])

        async def job() -> list[Any]:
            doc = await self._read()
            items = resolve(doc, key, self._separator)
            if items is NOT_FOUND or items is None:
                items = []
            elif not isinstance(items, list):
                raise TypeMismatchError(MESSAGES["must_be_array"])
            items.append(value)
            resolve_and_set(doc, key, items, self._separator)
            await self._write(doc)
            logger.debug("STORE PUSH: key=%s size=%d", key, len(items))
            return items

        return job

    @queued
    def delete(self, key: str) -> Job:
        key = self._key(key)

        async def job() -> bool:
            doc = await self._read()
            if not resolve_and_delete(doc, key, self._separator):
                return False
            await self._write(doc)
            logger.debug("STORE DELETE: key=%s", key)
            return True

        return job

    @queued
    def all(self) -> Job:
        return self._read

    @queued
    def clear(self, options: ClearOptions | Mapping[str, Any] | None = None) -> Job:
        confirmed = _clear_confirmed(options)

        async def job() -> bool:
            if not confirmed:
                raise ConfirmationRequiredError(MESSAGES["clear_confirm"])
            await self._write({})
            logger.info("STORE CLEAR: document emptied")
            return True

        return job

    @queued
    def backup(self, file_path: str | Path) -> Job:
        target = _check_backup_path(file_path, require_extension=True)

        async def job() -> bool:
            doc = await self._read()
            await asyncio.to_thread(write_document, target, doc, indent=self._spaces)
            logger.info("BACKUP: wrote snapshot to %s", target)
            return True

        return job

    @queued
    def load_backup(self, file_path: str | Path) -> Job:
        source = _check_backup_path(file_path, require_extension=False)

        async def job() -> bool:
            try:
                doc = await asyncio.to_thread(read_json, source)
            except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("BACKUP LOAD: failed to read %s: %r", source, e)
                raise BackupError(f"Failed to read or parse backup file: {source}") from e
            if not isinstance(doc, dict):
                raise BackupError(f"Backup file does not contain a JSON object: {source}")
            await self._write(doc)
            logger.info("BACKUP LOAD: restored document from %s", source)
            return True

        return job
