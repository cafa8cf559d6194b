"""Test the FastAPI app factory: root endpoint, docs and store isolation."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from task_manager_api.config import ServerConfig
from task_manager_api.server.api import create_app
from task_manager_api.task_engine.engine import TaskEngine
from task_manager_api.task_engine.store import TaskStore


@pytest.fixture
def client():
    return TestClient(create_app(enable_cors=False))


def test_root(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"name": "Task Manager API", "version": "1.0.0", "status": "running"}


def test_openapi_lists_task_routes(client: TestClient) -> None:
    resp = client.get("/openapi.json")
    assert resp.status_code == 200
    paths = resp.json()["paths"]
    assert set(paths["/tasks"]) == {"get", "post"}
    assert set(paths["/tasks/{task_id}"]) == {"get", "put", "delete"}
    params = {p["name"] for p in paths["/tasks"]["get"]["parameters"]}
    assert params == {"page", "pageSize", "sortBy"}


def test_openapi_documents_task_body(client: TestClient) -> None:
    paths = client.get("/openapi.json").json()["paths"]
    for path, method in [("/tasks", "post"), ("/tasks/{task_id}", "put")]:
        body = paths[path][method]["requestBody"]["content"]["application/json"]["schema"]
        assert {"title", "description"} <= set(body["properties"])


def test_docs_page(client: TestClient) -> None:
    resp = client.get("/api-docs")
    assert resp.status_code == 200
    assert "swagger" in resp.text.lower()


def test_apps_do_not_share_tasks() -> None:
    a = TestClient(create_app(enable_cors=False))
    b = TestClient(create_app(enable_cors=False))

    a.post("/tasks", json={"title": "Only in A", "description": "x"})
    assert a.get("/tasks").json()["totalTasks"] == 1
    assert b.get("/tasks").json()["totalTasks"] == 0


def test_injected_engine_is_served() -> None:
    store = TaskStore()
    engine = TaskEngine(store)
    engine.create_task("Seeded", "Created before the app")

    client = TestClient(create_app(engine=engine, enable_cors=False))
    data = client.get("/tasks").json()
    assert data["totalTasks"] == 1
    assert data["tasks"][0]["title"] == "Seeded"

    client.post("/tasks", json={"title": "Via HTTP", "description": "y"})
    assert len(store) == 2


def test_config_page_size_applies() -> None:
    client = TestClient(create_app(enable_cors=False, config=ServerConfig(default_page_size=2)))
    for i in range(3):
        client.post("/tasks", json={"title": f"T{i}", "description": "d"})

    data = client.get("/tasks").json()
    assert data["pageSize"] == 2
    assert len(data["tasks"]) == 2


def test_cors_headers_when_enabled() -> None:
    client = TestClient(create_app())
    resp = client.get("/tasks", headers={"Origin": "http://example.com"})
    assert resp.headers.get("access-control-allow-origin") in {"*", "http://example.com"}
