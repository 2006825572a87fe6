from __future__ import annotations

import asyncio
import copy
from typing import Any

import pytest

from nopedb.errors import ConfirmationRequiredError, InvalidKeyError, ParseError, TypeMismatchError
from nopedb.storage import StorageManager


class MemoryDocumentStore:
    """Keeps the document in memory and records every save."""

    def __init__(self, doc: dict[str, Any] | None = None) -> None:
        self.doc = doc or {}
        self.saves = 0
        self.loads = 0

    def load(self) -> dict[str, Any]:
        self.loads += 1
        return copy.deepcopy(self.doc)

    def save(self, doc: dict[str, Any]) -> None:
        self.saves += 1
        self.doc = copy.deepcopy(doc)


class BrokenDocumentStore(MemoryDocumentStore):
    def load(self) -> dict[str, Any]:
        raise ParseError("corrupt")


def test_reads_do_not_write():
    store = MemoryDocumentStore({"a": {"b": 1}})
    manager = StorageManager(store)

    async def _run():
        assert await manager.get("a.b") == 1
        assert await manager.has("a.c") is False
        assert await manager.all() == {"a": {"b": 1}}

    asyncio.run(_run())
    assert store.loads == 3
    assert store.saves == 0


def test_every_operation_rereads_the_document():
    store = MemoryDocumentStore()
    manager = StorageManager(store)

    async def _run():
        await manager.set("x", 1)
        store.doc = {"x": 41}  # changed behind the manager's back
        return await manager.add("x", 1)

    assert asyncio.run(_run()) == 42


def test_failed_or_noop_tasks_do_not_write():
    store = MemoryDocumentStore({"name": "alice"})
    manager = StorageManager(store)

    async def _run():
        with pytest.raises(TypeMismatchError):
            await manager.add("name", 1)
        with pytest.raises(TypeMismatchError):
            await manager.push("name", 1)
        with pytest.raises(ConfirmationRequiredError):
            await manager.clear({"confirm": False})
        assert await manager.delete("missing") is False

    asyncio.run(_run())
    assert store.saves == 0
    assert store.doc == {"name": "alice"}


def test_key_errors_happen_before_any_io():
    store = MemoryDocumentStore()
    manager = StorageManager(store, separator="/")

    async def _run():
        with pytest.raises(InvalidKeyError):
            await manager.set("a//b", 1)

    asyncio.run(_run())
    assert store.loads == 0


def test_load_errors_reach_only_their_caller():
    manager = StorageManager(BrokenDocumentStore())

    async def _run():
        return await asyncio.gather(manager.get("a"), manager.all(), return_exceptions=True)

    results = asyncio.run(_run())
    assert all(isinstance(r, ParseError) for r in results)
