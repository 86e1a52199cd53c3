"""
Streamable HTTP transport for the Todoist MCP Server.

Thin ASGI wrapper around the stdio server in server.py, for running the
server as a long-lived service.

Usage:
    uvicorn http_app:app --host 127.0.0.1 --port 8742
"""
import json
import logging

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

import server as mcp_server
from todoist_tools.config import ConfigError

logger = logging.getLogger("todoist-mcp")

session_manager = StreamableHTTPSessionManager(
    app=mcp_server.server, stateless=True, json_response=True,
)


async def _send_json(send, status: int, payload: dict):
    body = json.dumps(payload).encode()
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [[b"content-type", b"application/json"]],
    })
    await send({"type": "http.response.body", "body": body})


async def app(scope, receive, send):
    """ASGI application with path-based routing.

    Routes:
        GET  /health  -> health check
        *    /mcp     -> MCP Streamable HTTP (initialize, tool calls, etc.)
    """
    if scope["type"] == "lifespan":
        await _handle_lifespan(scope, receive, send)
        return

    path = scope.get("path", "")

    if path == "/health" and scope.get("method") == "GET":
        await _send_json(send, 200, {"status": "ok", "server": mcp_server.SERVER_NAME})
    elif path == "/mcp" or path.startswith("/mcp/"):
        await session_manager.handle_request(scope, receive, send)
    else:
        await _send_json(send, 404, {"error": "Not found"})


async def _handle_lifespan(scope, receive, send):
    """Handle ASGI lifespan events (startup/shutdown)."""
    _run_ctx = None
    owned = None
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            try:
                if not mcp_server.is_configured():
                    owned = mcp_server.build_dispatcher()
                    mcp_server.configure(owned)
            except ConfigError as e:
                logger.error(f"Startup failed: {e}")
                await send({"type": "lifespan.startup.failed", "message": str(e)})
                return
            _run_ctx = session_manager.run()
            await _run_ctx.__aenter__()
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            if _run_ctx:
                await _run_ctx.__aexit__(None, None, None)
            if owned:
                await owned.client.aclose()
                mcp_server.configure(None)
            await send({"type": "lifespan.shutdown.complete"})
            return
