"""Route tool calls to their handlers.

The dispatcher owns the Todoist client for the lifetime of the server and is
the boundary where every non-fatal error becomes an error envelope.
"""
import asyncio
import logging
from typing import Awaitable, Iterable, List, Optional

from todoist_api import error_details

from . import labels, projects, tasks
from .envelope import Envelope, failure
from .resolver import TaskResolver
from .validation import InvalidArgumentsError, validate

logger = logging.getLogger("todoist-mcp.dispatch")

HANDLERS = {
    "todoist_create_task": tasks.create_task,
    "todoist_get_tasks": tasks.get_tasks,
    "todoist_update_task": tasks.update_task,
    "todoist_delete_task": tasks.delete_task,
    "todoist_complete_task": tasks.complete_task,
    "todoist_get_projects": projects.get_projects,
    "todoist_create_project": projects.create_project,
    "todoist_update_project": projects.update_project,
    "todoist_get_project_sections": projects.get_project_sections,
    "todoist_create_section": projects.create_section,
    "todoist_get_personal_labels": labels.get_labels,
    "todoist_create_personal_label": labels.create_label,
    "todoist_get_personal_label": labels.get_label,
    "todoist_update_personal_label": labels.update_label,
    "todoist_delete_personal_label": labels.delete_label,
    "todoist_update_task_labels": labels.update_task_labels,
}


class Dispatcher:
    """Validates, executes and packages tool calls against a Todoist client.

    Args:
        client: Object exposing the TodoistClient coroutine methods.
        concurrency: Max simultaneous per-item calls in a batch (None = no cap).
    """

    def __init__(self, client, concurrency: Optional[int] = None):
        self.client = client
        self.concurrency = concurrency

    def resolver(self) -> TaskResolver:
        """A fresh resolver; its task snapshot lives for one request."""
        return TaskResolver(self.client)

    async def gather(self, coros: Iterable[Awaitable]) -> List:
        """Run per-item coroutines concurrently, results in input order."""
        if not self.concurrency:
            return list(await asyncio.gather(*coros))

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(coro):
            async with semaphore:
                return await coro

        return list(await asyncio.gather(*(bounded(c) for c in coros)))

    async def dispatch(self, name: str, arguments) -> Envelope:
        """Run one tool call and package the outcome.

        The MCP server substitutes {} for missing arguments, so the None check
        only fires for direct callers.
        """
        if arguments is None:
            return failure("No arguments provided")

        handler = HANDLERS.get(name)
        if handler is None:
            return failure(f"Unknown tool: {name}")

        try:
            value = validate(name, arguments)
        except InvalidArgumentsError as e:
            logger.info(str(e))
            return failure(str(e))

        try:
            return await handler(self, value)
        except Exception as e:
            logger.error(f"{name} failed: {e}", exc_info=True)
            details = error_details(e)
            return failure(details.pop("error"), **details)
