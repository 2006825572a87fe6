from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import MESSAGES, DatabaseIOError, ParseError, TypeMismatchError
from .interfaces import DocumentStore
from .json_store import atomic_write_json, read_json

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(DocumentStore):
    """
    Stores a single JSON object on disk at a fixed path.

    - A missing file is created as an empty object and read back as {}.
    - Malformed content raises ParseError; it is never replaced by {}.
    - Writes always replace the whole file, atomically.

    No caching: every load() reflects the file as it is at call time.
    """

    def __init__(self, path: Path, *, indent: int = 2):
        self._path = Path(path)
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    def ensure_exists(self) -> None:
        if not self._path.exists():
            logger.info("STORE INIT: creating empty database at %s", self._path)
            self.save({})

    def load(self) -> dict[str, Any]:
        try:
            doc = read_json(self._path)
        except FileNotFoundError:
            logger.info("STORE READ: %s missing, recreating as empty document", self._path)
            self.save({})
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("STORE READ: failed to parse %s: %r", self._path, e)
            raise ParseError(MESSAGES["parse_error"]) from e
        except OSError as e:
            logger.warning("STORE READ: failed to read %s: %r", self._path, e)
            raise DatabaseIOError(f"Unable to read database file: {e}") from e

        if not isinstance(doc, dict):
            raise ParseError(MESSAGES["not_an_object"])
        return doc

    def save(self, doc: dict[str, Any]) -> None:
        write_document(self._path, doc, indent=self._indent)


def write_document(path: Path, doc: Any, *, indent: int) -> None:
    """
    Serialize doc to path, mapping failures onto the store's error types.

    Shared by the primary store and backup snapshots so both use one format.
    """
    try:
        atomic_write_json(path, doc, indent=indent)
    except (TypeError, ValueError) as e:
        raise TypeMismatchError(f"Value is not JSON serializable: {e}") from e
    except OSError as e:
        logger.warning("STORE WRITE: failed to write %s: %r", path, e)
        raise DatabaseIOError(f"Unable to write database file: {e}") from e
