from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any:
    """
    Read and decode a JSON file.

    FileNotFoundError and other OSErrors propagate unchanged; malformed content
    raises json.JSONDecodeError (or UnicodeDecodeError for non UTF-8 bytes).
    """
    raw = path.read_text(encoding="utf-8")
    return json.loads(raw)


def dumps(payload: Any, *, indent: int = 2) -> str:
    # indent=0 means compact output, not "newline per item"
    return json.dumps(payload, indent=indent or None, ensure_ascii=False, allow_nan=False)


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.

    The payload is serialized before the temp file is opened, so an
    unserializable payload never touches the filesystem.
    """
    text = dumps(payload, indent=indent)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
        tmp_path.replace(path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
