from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, field_validator

from .errors import InvalidConfigError

PUNCTUATION_RE = re.compile(r"""^[!"#%&'*,./?@^_|~-]$""")

DEFAULT_SPACES = 2
DEFAULT_SEPARATOR = "."

TYPE_MESSAGES = {
    "path": "The 'path' setting must be a string.",
    "spaces": "The 'spaces' setting must be a positive number.",
    "separator": "The 'separator' setting must be a string.",
}


def default_path() -> str:
    return str(Path.cwd() / "db.json")


class DatabaseSettings(BaseModel):
    """
    Construction-time settings for a database instance.

    Validated eagerly; nothing touches the filesystem until these pass.
    """

    model_config = ConfigDict(frozen=True)

    path: StrictStr = Field(default_factory=default_path)
    spaces: StrictInt = DEFAULT_SPACES
    separator: StrictStr = DEFAULT_SEPARATOR

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str) -> str:
        if not v.endswith(".json"):
            raise ValueError("The database 'path' must end with '.json'.")
        return v

    @field_validator("spaces")
    @classmethod
    def _check_spaces(cls, v: int) -> int:
        if v < 0:
            raise ValueError("The 'spaces' setting must be a positive number.")
        return v

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, v: str) -> str:
        if not PUNCTUATION_RE.match(v):
            raise ValueError("Invalid 'separator'. Must be a single punctuation character.")
        return v

    @property
    def file(self) -> Path:
        return Path(self.path).resolve()


def load_settings(**overrides: Any) -> DatabaseSettings:
    """Build DatabaseSettings, reporting bad values as InvalidConfigError."""
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return DatabaseSettings(**values)
    except ValidationError as e:
        raise InvalidConfigError(_describe(e)) from e


def _describe(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    first = errors[0]
    field = str(first["loc"][0]) if first.get("loc") else ""
    if first["type"].endswith("_type") and field in TYPE_MESSAGES:
        return TYPE_MESSAGES[field]
    # pydantic prefixes messages raised from validators
    return first["msg"].removeprefix("Value error, ")


def get_settings() -> DatabaseSettings:
    raw_spaces = os.getenv("NOPEDB_SPACES")
    spaces: int | None = None
    if raw_spaces is not None and raw_spaces.strip() != "":
        try:
            spaces = int(raw_spaces)
        except ValueError as e:
            raise InvalidConfigError("The 'spaces' setting must be a positive number.") from e

    return load_settings(
        path=os.getenv("NOPEDB_PATH") or None,
        spaces=spaces,
        separator=os.getenv("NOPEDB_SEPARATOR") or None,
    )
