"""Find a task's ID from a human-readable name."""
import asyncio
from dataclasses import dataclass
from typing import Optional


class TaskNotFoundError(LookupError):
    """No task content contains the requested name."""

    def __init__(self, task_name: str):
        super().__init__(f"Task not found: {task_name}")
        self.task_name = task_name


@dataclass(frozen=True)
class Resolution:
    task_id: str
    content: str
    match_count: int = 1

    @property
    def ambiguous(self) -> bool:
        return self.match_count > 1


class TaskResolver:
    """Resolves task names against one snapshot of the task list.

    The list is fetched on first use and reused for every lookup made through
    the same resolver, so a batch of N name lookups costs one remote read.
    Matching is a case-insensitive substring search over task content; the
    first hit in API order wins.
    """

    def __init__(self, client):
        self.client = client
        self._tasks: Optional[list] = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._tasks is not None

    async def load(self) -> list:
        async with self._lock:
            if self._tasks is None:
                self._tasks = list(await self.client.get_tasks())
        return self._tasks

    async def resolve(self, task_name: str) -> Resolution:
        tasks = await self.load()
        needle = task_name.lower()
        matches = [t for t in tasks if needle in (t.get("content") or "").lower()]
        if not matches:
            raise TaskNotFoundError(task_name)
        first = matches[0]
        return Resolution(
            task_id=str(first["id"]),
            content=first.get("content", ""),
            match_count=len(matches),
        )


def ambiguity_warning(task_name: str, resolution: Resolution) -> str:
    return (
        f"task_name '{task_name}' matched {resolution.match_count} tasks; "
        f"used the first match \"{resolution.content}\""
    )
