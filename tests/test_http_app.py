"""Tests for the HTTP transport wrapper (http_app.py).

Uses Starlette's TestClient which works with any ASGI callable,
including our raw ASGI app (not just Starlette apps).
"""
import importlib
import json

import pytest
from starlette.testclient import TestClient

import server as mcp_server

INITIALIZE = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "initialize",
    "params": {
        "protocolVersion": "2025-03-26",
        "capabilities": {},
        "clientInfo": {"name": "test", "version": "0.1"},
    },
}


@pytest.fixture
def client(monkeypatch):
    """Create a test client for the raw ASGI app.

    The module is reloaded per test because StreamableHTTPSessionManager
    can only run() once per instance.
    """
    import http_app as mod

    monkeypatch.setenv("TODOIST_API_TOKEN", "test-token")
    importlib.reload(mod)
    with TestClient(mod.app, raise_server_exceptions=False) as c:
        yield c


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "server": "todoist-mcp-server"}


def test_not_found(client):
    response = client.get("/unknown")
    assert response.status_code == 404
    assert response.json()["error"] == "Not found"


def test_startup_configures_dispatcher(client):
    assert mcp_server.is_configured()


def test_shutdown_releases_dispatcher(monkeypatch):
    import http_app as mod

    monkeypatch.setenv("TODOIST_API_TOKEN", "test-token")
    importlib.reload(mod)
    with TestClient(mod.app, raise_server_exceptions=False):
        pass
    assert not mcp_server.is_configured()


def test_mcp_initialize(client):
    """POST /mcp should answer the initialize handshake."""
    response = client.post(
        "/mcp",
        json=INITIALIZE,
        headers={"Accept": "application/json, text/event-stream"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["jsonrpc"] == "2.0"
    assert data["result"]["serverInfo"]["name"] == "todoist-mcp-server"


def test_mcp_lists_tools(client):
    """Stateless mode answers tools/list without a prior session."""
    response = client.post(
        "/mcp",
        json={"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}},
        headers={"Accept": "application/json, text/event-stream"},
    )
    assert response.status_code == 200
    names = [t["name"] for t in response.json()["result"]["tools"]]
    assert len(names) == 16
    assert "todoist_update_task_labels" in names


@pytest.fixture
def fake_app(dispatcher):
    """/mcp client whose server dispatches to the in-memory Todoist fake."""
    import http_app as mod

    mcp_server.configure(dispatcher)
    importlib.reload(mod)
    try:
        with TestClient(mod.app, raise_server_exceptions=False) as c:
            yield c
    finally:
        mcp_server.configure(None)


def _call_tool(client, name, arguments):
    response = client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "id": 3,
            "method": "tools/call",
            "params": {"name": name, "arguments": arguments},
        },
        headers={"Accept": "application/json, text/event-stream"},
    )
    assert response.status_code == 200
    result = response.json()["result"]
    assert len(result["content"]) == 1
    return json.loads(result["content"][0]["text"]), result["isError"]


class TestToolsCall:
    """tools/call through the MCP request handler."""

    def test_valid_call(self, fake_app, fake_client):
        data, is_error = _call_tool(fake_app, "todoist_create_project", {"name": "Garden"})
        assert is_error is False
        assert data["success"] is True
        assert data["project"]["name"] == "Garden"
        assert fake_client.calls_to("add_project") == [("add_project", {"name": "Garden"})]

    def test_missing_required_field(self, fake_app, fake_client):
        data, is_error = _call_tool(fake_app, "todoist_create_project", {})
        assert is_error is True
        assert data == {
            "success": False,
            "error": "Invalid arguments for todoist_create_project: name must be a string",
        }
        assert fake_client.calls == []

    def test_wrong_type_reaches_validator(self, fake_app, fake_client):
        data, is_error = _call_tool(fake_app, "todoist_delete_task", {"task_id": 42})
        assert is_error is True
        assert data["error"].startswith("Invalid arguments for todoist_delete_task")
        assert fake_client.mutations() == []

    def test_unknown_tool(self, fake_app):
        data, is_error = _call_tool(fake_app, "todoist_make_coffee", {})
        assert is_error is True
        assert data == {"success": False, "error": "Unknown tool: todoist_make_coffee"}
