# rootfs_server/http_app.py
from __future__ import annotations

import json
import secrets
from typing import Any, Dict, Optional, Sequence
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from rootfs.config import Settings
from rootfs.di import Container, build_container
from rootfs.logging import configure_logging
from rootfs_server.registry import build_tool_registry, list_tools_payload, dispatch_tool_call
from rootfs_server.main import resolve_root

PROTOCOL_VERSION = "2025-03-26"  # MCP protocol revision


def _rpc_response(id_: Any, *, result: Any = None, error: Dict[str, Any] | None = None) -> JSONResponse:
    body: Dict[str, Any] = {"jsonrpc": "2.0", "id": id_}
    if error is not None:
        body["error"] = error
    else:
        body["result"] = result
    return JSONResponse(body)


def _rpc_error(id_: Any, code: int, message: str, data: Any | None = None) -> JSONResponse:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return _rpc_response(id_, error=error)


def _bearer_token(req: Request) -> str:
    scheme, _, token = req.headers.get("authorization", "").partition(" ")
    if scheme != "Bearer" or not token:
        raise HTTPException(status_code=401, detail="Missing Bearer token")
    return token


def create_http_app(container: Container) -> FastAPI:
    settings = container.settings
    registry = build_tool_registry(container)
    allowed_origins = {
        o.strip().lower() for o in settings.MCP_HTTP_ALLOWED_ORIGINS.split(",") if o.strip()
    }
    app = FastAPI(title="rootfs MCP HTTP Server", version=settings.SERVER_VERSION)

    @app.middleware("http")
    async def check_origin(request: Request, call_next):
        # an Origin header is only sent by browsers; it must be allow-listed (DNS rebinding)
        origin = request.headers.get("origin")
        if origin is None:
            permitted = settings.MCP_HTTP_ALLOW_NO_ORIGIN
        else:
            permitted = origin.lower() in allowed_origins
        if not permitted:
            return JSONResponse({"error": {"code": 403, "message": "Forbidden origin"}}, status_code=403)
        return await call_next(request)

    def _tools_call(id_: Any, params: Dict[str, Any]) -> JSONResponse:
        name = params.get("name")
        args = params.get("arguments") or {}
        if not isinstance(name, str):
            return _rpc_error(id_, -32602, "Invalid params", "name must be a string")
        if not isinstance(args, dict):
            return _rpc_error(id_, -32602, "Invalid params", "arguments must be an object")
        try:
            result = dispatch_tool_call(registry, name, args, settings.LOG_PREVIEW_CHARS)
        except KeyError as ke:
            return _rpc_error(id_, -32601, ke.args[0])
        except ValidationError as ve:
            return _rpc_error(id_, -32602, "Invalid params", json.loads(ve.json(include_url=False)))
        return _rpc_response(id_, result={
            "content": [{"type": "text", "text": result.text}],
            "isError": not result.ok,
        })

    @app.post(settings.MCP_HTTP_PATH)
    async def mcp_endpoint(request: Request):
        if not secrets.compare_digest(_bearer_token(request).encode(), settings.MCP_HTTP_BEARER_TOKEN.encode()):
            raise HTTPException(status_code=401, detail="Invalid Bearer token")

        try:
            payload = await request.json()
        except ValueError:
            return _rpc_error(None, -32700, "Parse error")
        if not isinstance(payload, dict):
            return _rpc_error(None, -32600, "Invalid Request")

        id_ = payload.get("id")
        method = payload.get("method")
        params = payload.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            return _rpc_error(id_, -32602, "Invalid params", "params must be an object")

        if method == "initialize":
            return _rpc_response(id_, result={
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": settings.SERVER_NAME, "version": settings.SERVER_VERSION},
            })
        if method == "tools/list":
            return _rpc_response(id_, result=list_tools_payload(registry))
        if method == "tools/call":
            return _tools_call(id_, params)
        return _rpc_error(id_, -32601, f"Method not found: {method}")

    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    import uvicorn

    settings = Settings()
    root = resolve_root(argv, settings)
    configure_logging(settings.LOG_LEVEL)
    app = create_http_app(build_container(settings, root=root))
    uvicorn.run(app, host=settings.MCP_HTTP_HOST, port=settings.MCP_HTTP_PORT)


if __name__ == "__main__":
    main()
