from __future__ import annotations

from .db import NopeDB
from .errors import (
    BackupError,
    ConfirmationRequiredError,
    DatabaseError,
    DatabaseIOError,
    InvalidConfigError,
    InvalidKeyError,
    MissingValueError,
    ParseError,
    TypeMismatchError,
)
from .settings import DatabaseSettings, get_settings, load_settings
from .storage import ClearOptions, StorageManager

__all__ = [
    "NopeDB",
    "DatabaseSettings",
    "get_settings",
    "load_settings",
    "ClearOptions",
    "StorageManager",
    "DatabaseError",
    "InvalidConfigError",
    "InvalidKeyError",
    "MissingValueError",
    "TypeMismatchError",
    "ParseError",
    "ConfirmationRequiredError",
    "BackupError",
    "DatabaseIOError",
]
