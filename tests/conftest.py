from __future__ import annotations

import importlib
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test-db.json"


@pytest.fixture
def backup_path(tmp_path: Path) -> Path:
    return tmp_path / "test-db-backup.json"


@pytest.fixture
def db(db_path: Path):
    from nopedb import NopeDB

    return NopeDB(str(db_path), separator="_")


@pytest.fixture
def reload_endpoints(monkeypatch: pytest.MonkeyPatch, db_path: Path) -> Path:
    """
    The store endpoints open their database at import time; reload after pointing it at a temp file.
    """
    monkeypatch.setenv("NOPEDB_PATH", str(db_path))
    monkeypatch.setenv("NOPEDB_SEPARATOR", "_")
    monkeypatch.delenv("NOPEDB_SPACES", raising=False)

    import endpoints.store_endpoints as store_endpoints

    importlib.reload(store_endpoints)
    return db_path
