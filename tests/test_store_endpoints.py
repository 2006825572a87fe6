from __future__ import annotations

from fastapi.testclient import TestClient


def _client() -> TestClient:
    import app as app_module

    return TestClient(app_module.create_app())


def test_set_get_exists_delete(reload_endpoints):
    client = _client()

    r = client.put("/store/keys/user_1", json={"value": {"id": 1, "settings": {"theme": "dark"}}})
    assert r.status_code == 200
    assert r.json() == {"key": "user_1", "value": {"id": 1, "settings": {"theme": "dark"}}}

    r = client.get("/store/keys/user_1_settings_theme")
    assert r.status_code == 200
    assert r.json()["value"] == "dark"

    assert client.get("/store/keys/user_1/exists").json() == {"key": "user_1", "exists": True}
    assert client.get("/store/keys/nope/exists").json() == {"key": "nope", "exists": False}
    assert client.get("/store/keys/nope").status_code == 404

    r = client.delete("/store/keys/user_1_id")
    assert r.json() == {"key": "user_1_id", "deleted": True}
    assert client.get("/store").json() == {"user": {"1": {"settings": {"theme": "dark"}}}}


def test_numeric_and_list_operations(reload_endpoints):
    client = _client()

    assert client.post("/store/keys/hits/add", json={"value": 3}).json()["value"] == 3
    assert client.post("/store/keys/hits/subtract", json={"value": 1}).json()["value"] == 2
    assert client.post("/store/keys/tags/push", json={"value": "a"}).json()["value"] == ["a"]
    assert client.post("/store/keys/tags/push", json={"value": "b"}).json()["value"] == ["a", "b"]

    r = client.post("/store/keys/tags/add", json={"value": 1})
    assert r.status_code == 409
    r = client.post("/store/keys/hits/add", json={"value": "one"})
    assert r.status_code == 409


def test_error_mapping(reload_endpoints):
    client = _client()

    assert client.get("/store/keys/_bad").status_code == 400

    r = client.post("/store/clear", json={"confirm": False})
    assert r.status_code == 412
    assert "confirm" in r.json()["detail"]

    assert client.post("/store/backup", json={"path": "backup.txt"}).status_code == 400


def test_clear_and_backup_roundtrip(reload_endpoints, backup_path):
    client = _client()

    client.put("/store/keys/a_b", json={"value": [1, 2]})
    assert client.post("/store/backup", json={"path": str(backup_path)}).json() == {"ok": True}
    assert client.post("/store/clear", json={"confirm": True}).json() == {"cleared": True}
    assert client.get("/store").json() == {}

    assert client.post("/store/backup/load", json={"path": str(backup_path)}).json() == {"ok": True}
    assert client.get("/store").json() == {"a": {"b": [1, 2]}}


def test_corrupt_file_is_server_error(reload_endpoints):
    reload_endpoints.write_text("{oops", encoding="utf-8")
    client = _client()

    r = client.get("/store")
    assert r.status_code == 500


def test_clear_rejects_non_boolean_confirmation(reload_endpoints):
    client = _client()
    client.put("/store/keys/keep", json={"value": 1})

    for confirm in (1, "true", "yes", "on"):
        r = client.post("/store/clear", json={"confirm": confirm})
        assert r.status_code == 422

    assert client.get("/store").json() == {"keep": 1}
