from __future__ import annotations

import logging
from typing import Any, NoReturn

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, StrictBool

from nopedb import (
    BackupError,
    ConfirmationRequiredError,
    DatabaseError,
    DatabaseIOError,
    InvalidConfigError,
    InvalidKeyError,
    MissingValueError,
    NopeDB,
    ParseError,
    TypeMismatchError,
    get_settings,
)

router = APIRouter(prefix="/store", tags=["store"])
logger = logging.getLogger(__name__)

# Created at import time; tests reload this module after pointing NOPEDB_PATH at a temp file.
SETTINGS = get_settings()
DB = NopeDB.from_settings(SETTINGS)

STATUS_BY_ERROR: list[tuple[type[DatabaseError], int]] = [
    (InvalidKeyError, 400),
    (MissingValueError, 400),
    (InvalidConfigError, 400),
    (BackupError, 400),
    (ConfirmationRequiredError, 412),
    (TypeMismatchError, 409),
    (ParseError, 500),
    (DatabaseIOError, 500),
]


class ValueBody(BaseModel):
    value: Any


class ClearBody(BaseModel):
    confirm: StrictBool = False


class BackupBody(BaseModel):
    path: str


def _raise_http(e: DatabaseError) -> NoReturn:
    status = next((code for kind, code in STATUS_BY_ERROR if isinstance(e, kind)), 500)
    if status >= 500:
        logger.warning("STORE HTTP: %s: %s", type(e).__name__, e)
    raise HTTPException(status_code=status, detail=str(e)) from e


@router.get("")
async def read_all() -> dict[str, Any]:
    try:
        return await DB.all()
    except DatabaseError as e:
        _raise_http(e)


@router.get("/keys/{key}")
async def read_key(key: str) -> dict[str, Any]:
    try:
        value = await DB.get(key)
    except DatabaseError as e:
        _raise_http(e)
    if value is None:
        raise HTTPException(status_code=404, detail=f"key not found: {key}")
    return {"key": key, "value": value}


@router.get("/keys/{key}/exists")
async def key_exists(key: str) -> dict[str, Any]:
    try:
        return {"key": key, "exists": await DB.has(key)}
    except DatabaseError as e:
        _raise_http(e)


@router.put("/keys/{key}")
async def write_key(key: str, body: ValueBody) -> dict[str, Any]:
    try:
        return {"key": key, "value": await DB.set(key, body.value)}
    except DatabaseError as e:
        _raise_http(e)


@router.delete("/keys/{key}")
async def delete_key(key: str) -> dict[str, Any]:
    try:
        return {"key": key, "deleted": await DB.delete(key)}
    except DatabaseError as e:
        _raise_http(e)


@router.post("/keys/{key}/add")
async def add_to_key(key: str, body: ValueBody) -> dict[str, Any]:
    try:
        return {"key": key, "value": await DB.add(key, body.value)}
    except DatabaseError as e:
        _raise_http(e)


@router.post("/keys/{key}/subtract")
async def subtract_from_key(key: str, body: ValueBody) -> dict[str, Any]:
    try:
        return {"key": key, "value": await DB.subtract(key, body.value)}
    except DatabaseError as e:
        _raise_http(e)


@router.post("/keys/{key}/push")
async def push_to_key(key: str, body: ValueBody) -> dict[str, Any]:
    try:
        return {"key": key, "value": await DB.push(key, body.value)}
    except DatabaseError as e:
        _raise_http(e)


@router.post("/clear")
async def clear_store(body: ClearBody) -> dict[str, Any]:
    try:
        return {"cleared": await DB.clear({"confirm": body.confirm})}
    except DatabaseError as e:
        _raise_http(e)


@router.post("/backup")
async def backup_store(body: BackupBody) -> dict[str, Any]:
    try:
        return {"ok": await DB.backup(body.path)}
    except DatabaseError as e:
        _raise_http(e)


@router.post("/backup/load")
async def load_backup(body: BackupBody) -> dict[str, Any]:
    try:
        return {"ok": await DB.load_backup(body.path)}
    except DatabaseError as e:
        _raise_http(e)
