#!/usr/bin/env python3
"""
Todoist MCP Server

Local stdio MCP server exposing the Todoist REST API to an LLM agent.

Tools - Tasks:
- todoist_create_task, todoist_get_tasks, todoist_update_task
- todoist_delete_task, todoist_complete_task

Tools - Projects and sections:
- todoist_get_projects, todoist_create_project, todoist_update_project
- todoist_get_project_sections, todoist_create_section

Tools - Labels:
- todoist_get_personal_labels, todoist_create_personal_label,
  todoist_get_personal_label, todoist_update_personal_label,
  todoist_delete_personal_label, todoist_update_task_labels
"""
import asyncio
import json
import logging
import sys
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from todoist_api import TodoistClient
from todoist_tools import config
from todoist_tools.config import ConfigError
from todoist_tools.dispatch import Dispatcher
from todoist_tools.schemas import TOOLS

SERVER_NAME = "todoist-mcp-server"
SERVER_VERSION = "0.1.0"

logger = logging.getLogger("todoist-mcp")

server = Server(SERVER_NAME, version=SERVER_VERSION)

_dispatcher: Optional[Dispatcher] = None


def configure(dispatcher: Optional[Dispatcher]):
    """Install the dispatcher used by call_tool (None uninstalls it)."""
    global _dispatcher
    _dispatcher = dispatcher


def is_configured() -> bool:
    return _dispatcher is not None


def build_dispatcher() -> Dispatcher:
    """Create a Todoist client and dispatcher from configuration.

    Raises:
        ConfigError: if no API token is configured.
    """
    client = TodoistClient(
        config.require_api_token(),
        base_url=config.get_api_base_url(),
        timeout=config.get_request_timeout(),
    )
    return Dispatcher(client, concurrency=config.get_batch_concurrency())


def _result(payload, is_error: bool) -> CallToolResult:
    text = payload if isinstance(payload, str) else json.dumps(payload, indent=2, default=str)
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


@server.list_tools()
async def list_tools() -> list[Tool]:
    return TOOLS


# Arguments are checked by the dispatcher so failures come back as envelopes.
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict) -> CallToolResult:
    logger.info(f"Tool: {name}")
    try:
        if _dispatcher is None:
            raise RuntimeError("Server is not configured with a Todoist client")
        envelope = await _dispatcher.dispatch(name, arguments)
        return _result(envelope.text, envelope.is_error)

    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return _result({"success": False, "error": f"Error: {e}"}, True)


def setup_logging():
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


async def main():
    dispatcher = _dispatcher or build_dispatcher()
    configure(dispatcher)
    logger.info("Todoist MCP Server running on stdio")
    async with dispatcher.client:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main_sync():
    """Synchronous entry point for uvx/pip scripts."""
    setup_logging()
    if not config.get_api_token():
        print("Error: TODOIST_API_TOKEN environment variable is required", file=sys.stderr)
        sys.exit(1)
    try:
        asyncio.run(main())
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main_sync()
