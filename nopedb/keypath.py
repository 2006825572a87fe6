"""
Separator-delimited key paths over a nested JSON document.

With separator ".", the key "user.1.name" addresses doc["user"]["1"]["name"].
Only dicts are traversable; lists and scalars are leaves.
"""
from __future__ import annotations

from typing import Any

from .errors import MESSAGES, InvalidKeyError


class _NotFound:
    """Sentinel for a path that does not resolve. Distinct from a stored null."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND: Any = _NotFound()


def validate_key(key: Any, separator: str) -> str:
    if key is None:
        raise InvalidKeyError(MESSAGES["undefined_id"])
    if (
        not isinstance(key, str)
        or not key
        or key.startswith(separator)
        or key.endswith(separator)
        or separator + separator in key
    ):
        raise InvalidKeyError(MESSAGES["non_valid_id"])
    return key


def split_key(key: str, separator: str) -> list[str]:
    return validate_key(key, separator).split(separator)


def resolve(doc: dict[str, Any], key: str, separator: str) -> Any:
    """Return the value at key, or NOT_FOUND."""
    current: Any = doc
    for part in split_key(key, separator):
        if not isinstance(current, dict) or part not in current:
            return NOT_FOUND
        current = current[part]
    return current


def resolve_and_set(doc: dict[str, Any], key: str, value: Any, separator: str) -> dict[str, Any]:
    """
    Assign value at key, mutating doc in place.

    Any intermediate node that is not a dict is replaced with an empty dict.
    """
    *parents, last = split_key(key, separator)
    current = doc
    for part in parents:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[last] = value
    return doc


def resolve_and_delete(doc: dict[str, Any], key: str, separator: str) -> bool:
    """Remove the entry at key. Returns False when nothing was removed."""
    *parents, last = split_key(key, separator)
    current: Any = doc
    for part in parents:
        if not isinstance(current, dict):
            return False
        current = current.get(part, NOT_FOUND)
    if not isinstance(current, dict) or last not in current:
        return False
    del current[last]
    return True
