import json
import logging

import pytest
from fastapi.testclient import TestClient

from beacon.core.config import Settings
from beacon.core.workspace import Workspace
from beacon.main import create_app


@pytest.fixture
def client(workspace):
    with TestClient(create_app(workspace, autosave=False)) as test_client:
        yield test_client


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Beacon API"

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "pages": 1,
        "autosave": False,
        "storage": "file"
    }


def test_create_and_list_pages(client):
    response = client.post("/pages/", json={"title": "Groceries", "icon": "🛒"})
    assert response.status_code == 201
    created = response.json()
    assert created["title"] == "Groceries"

    listing = client.get("/pages/").json()
    assert listing["total"] == 2
    assert listing["current_page_id"] == created["id"]

    found = client.get("/pages/", params={"q": "grocer"}).json()
    assert [page["id"] for page in found["pages"]] == [created["id"]]


def test_delete_last_page_conflict(client):
    response = client.delete("/pages/active")
    assert response.status_code == 409
    assert client.get("/health").json()["pages"] == 1


def test_delete_active_page(client):
    client.post("/pages/", json={"title": "Temp"})
    assert client.delete("/pages/active").status_code == 204
    assert client.get("/pages/active").json()["page"]["id"] == "welcome"


def test_select_out_of_range(client):
    assert client.post("/pages/select/3").status_code == 404
    response = client.post("/pages/select/0")
    assert response.status_code == 200
    assert response.json()["index"] == 0


def test_editor_push_then_manual_save(client, workspace, memory_storage):
    client.put("/pages/active/editor", json={"title": "Draft", "content": "<p>hello</p>"})
    assert workspace.store.active_page.title != "Draft"

    response = client.post("/storage/save")
    assert response.json() == {"success": True, "error": None}
    saved = json.loads(memory_storage.saved[-1])
    assert saved["pages"][0]["title"] == "Draft"
    assert saved["pages"][0]["content"] == "<p>hello</p>"


def test_format_and_blocks(client):
    response = client.post("/pages/active/format", json={"command": "bold"})
    assert response.json()["pending_commands"] == ["bold"]
    assert client.post("/pages/active/format", json={"command": "strike"}).status_code == 422

    response = client.post("/pages/active/blocks", json={"kind": "heading", "level": 2})
    assert "heading-2" in response.json()["page"]["content"]
    assert client.post("/pages/active/blocks", json={"kind": "heading"}).status_code == 400


def test_stats_and_duplicate(client):
    response = client.post("/pages/active/duplicate")
    assert response.status_code == 201
    assert response.json()["title"].endswith("(Copy)")
    assert client.get("/pages/stats").json()["page_count"] == 2


def test_theme_endpoints(client):
    assert client.get("/theme/").json() == {"theme": "light"}
    assert client.post("/theme/toggle").json() == {"theme": "dark"}
    assert client.put("/theme/", json={"theme": "light"}).json() == {"theme": "light"}


def test_export_and_import(client, tmp_path):
    path = tmp_path / "export.json"
    response = client.post("/exchange/export", json={"format": "json", "path": str(path)})
    assert response.status_code == 200
    assert path.exists()

    client.post("/pages/", json={"title": "Extra"})

    declined = client.post("/exchange/import", json={"path": str(path)}).json()
    assert declined["imported"] is False
    assert declined["page_count"] == 2

    accepted = client.post("/exchange/import", json={"path": str(path), "confirmed": True}).json()
    assert accepted["imported"] is True
    assert accepted["page_count"] == 1
    assert accepted["current_page_id"] == "welcome"


def test_import_errors(client, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"pages": []}), encoding="utf-8")

    response = client.post("/exchange/import", json={"path": str(bad), "confirmed": True})
    assert response.status_code == 400
    assert response.json()["detail"]["errors"]

    response = client.post("/exchange/import", json={"path": str(tmp_path / "gone.json")})
    assert response.status_code == 502


def test_export_failure(client, tmp_path):
    response = client.post(
        "/exchange/export",
        json={"format": "html", "path": str(tmp_path / "missing" / "export.html")}
    )
    assert response.status_code == 502


def test_shutdown_writes_final_save(workspace, memory_storage):
    with TestClient(create_app(workspace, autosave=False)) as client:
        client.put("/pages/active/editor", json={"content": "<p>unsaved</p>"})

    saved = json.loads(memory_storage.saved[-1])
    assert saved["pages"][0]["content"] == "<p>unsaved</p>"


def test_reading_active_page_keeps_queued_commands(client, workspace):
    workspace.store.format_text("italic")

    first = client.get("/pages/active").json()
    second = client.get("/pages/active").json()
    assert first["pending_commands"] == ["italic"]
    assert second["pending_commands"] == ["italic"]

    formatted = client.post("/pages/active/format", json={"command": "bold"}).json()
    assert formatted["pending_commands"] == ["italic", "bold"]
    assert client.get("/pages/active").json()["pending_commands"] == []


def test_lifespan_uses_workspace_log_level(tmp_path, memory_storage):
    config = Settings(data_dir=tmp_path / "data", log_level="DEBUG")
    workspace = Workspace(config=config, storage=memory_storage)
    root = logging.getLogger()
    previous = root.level
    try:
        with TestClient(create_app(workspace, autosave=False)):
            assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
