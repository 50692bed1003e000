# tests/test_http_app.py
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from rootfs.config import Settings
from rootfs.di import build_container
from rootfs_server.http_app import create_http_app

TOKEN = "test-token"
AUTH = {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    settings = Settings(MCP_HTTP_BEARER_TOKEN=TOKEN, MCP_HTTP_ALLOWED_ORIGINS="http://localhost")
    return TestClient(create_http_app(build_container(settings, root=tmp_path)))


def _rpc(client: TestClient, method: str, params=None, headers=AUTH):
    body = {"jsonrpc": "2.0", "id": 1, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body, headers=headers)


def _call(client: TestClient, name: str, arguments: dict) -> dict:
    resp = _rpc(client, "tools/call", {"name": name, "arguments": arguments})
    assert resp.status_code == 200
    return resp.json()


def test_requires_bearer_token(client: TestClient):
    assert _rpc(client, "tools/list", headers={}).status_code == 401
    assert _rpc(client, "tools/list", headers={"Authorization": "Bearer wrong"}).status_code == 401


def test_rejects_unknown_origin(client: TestClient):
    resp = _rpc(client, "tools/list", headers={**AUTH, "Origin": "http://evil.example"})
    assert resp.status_code == 403
    assert _rpc(client, "tools/list", headers={**AUTH, "Origin": "http://localhost"}).status_code == 200


def test_initialize(client: TestClient):
    result = _rpc(client, "initialize", {}).json()["result"]
    assert result["serverInfo"] == {"name": "mcpFilesystem", "version": "1.0.0"}
    assert "tools" in result["capabilities"]


def test_tools_list(client: TestClient):
    tools = _rpc(client, "tools/list").json()["result"]["tools"]
    assert [t["name"] for t in tools] == [
        "read_text_file", "write_file", "list_files", "search_files", "get_file_info",
    ]


def test_tools_call_success_and_failure(client: TestClient, tmp_path: Path):
    body = _call(client, "write_file", {"filename": "../x.txt", "content": "a\nb"})
    assert body["result"] == {
        "content": [{"type": "text", "text": "Successfully wrote to ../x.txt"}],
        "isError": False,
    }
    assert (tmp_path / "x.txt").read_text(encoding="utf-8") == "a\nb"

    body = _call(client, "read_text_file", {"filename": "x.txt", "head": 1})
    assert body["result"]["content"][0]["text"] == "a"

    body = _call(client, "read_text_file", {"filename": "y.txt"})
    assert body["result"]["isError"] is True
    assert body["result"]["content"][0]["text"].startswith("Error reading file:")


def test_tools_call_errors(client: TestClient):
    assert _call(client, "rm_rf", {})["error"]["code"] == -32601
    assert _call(client, "write_file", {"filename": "a.txt"})["error"]["code"] == -32602
    assert _call(client, "list_files", ["not", "a", "dict"])["error"]["code"] == -32602


@pytest.mark.parametrize("params", [["x"], "read_text_file", 7])
def test_tools_call_params_must_be_an_object(client: TestClient, params):
    resp = _rpc(client, "tools/call", params)
    assert resp.status_code == 200
    assert resp.json()["error"]["code"] == -32602


@pytest.mark.parametrize("name", [["read_text_file"], {"n": 1}, None, 3])
def test_tools_call_name_must_be_a_string(client: TestClient, name):
    resp = _rpc(client, "tools/call", {"name": name, "arguments": {}})
    assert resp.status_code == 200
    assert resp.json()["error"]["code"] == -32602


def test_unknown_method_and_parse_error(client: TestClient):
    assert _rpc(client, "resources/list").json()["error"]["code"] == -32601
    resp = client.post("/mcp", content=b"{not json", headers={**AUTH, "Content-Type": "application/json"})
    assert resp.json()["error"]["code"] == -32700
