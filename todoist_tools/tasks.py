"""Task tools: create, list, update, delete and complete.

Mutating tools accept one task at the top level or a ``tasks`` array. Batch
items run concurrently and fail independently; the envelope reports how many
succeeded. Tasks may be addressed by ``task_id`` or, failing that, by
``task_name`` (see resolver.py).
"""
import logging
from typing import Awaitable, Callable

from todoist_api import error_details

from .envelope import Envelope, batch as batch_envelope, failure, success
from .normalize import (
    TaskBatch,
    needs_lookup,
    task_create_params,
    task_filter_params,
    task_update_params,
)
from .resolver import Resolution, TaskNotFoundError, TaskResolver, ambiguity_warning

logger = logging.getLogger("todoist-mcp.dispatch")


def _item_failure(e: Exception, **context) -> dict:
    logger.warning(f"Batch item failed: {e}")
    return {"success": False, **error_details(e), **context}


async def _target(resolver: TaskResolver, item: dict) -> Resolution:
    """Pick the task an item addresses; task_id wins over task_name."""
    if item.get("task_id"):
        return Resolution(task_id=item["task_id"], content="")
    if isinstance(item.get("task_name"), str):
        return await resolver.resolve(item["task_name"])
    raise ValueError("Either task_id or task_name must be provided")


def _with_warning(fields: dict, item: dict, target: Resolution) -> dict:
    if target.ambiguous:
        fields["warning"] = ambiguity_warning(item["task_name"], target)
    return fields


Action = Callable[[Resolution, dict], Awaitable[dict]]


async def _apply_to_targets(ctx, tasks: TaskBatch, action: Action,
                            single_result: Callable[[Resolution, dict], dict]) -> Envelope:
    """Resolve each item's task and run `action` on it.

    `action` returns the batch item result; `single_result` turns it into the
    single-mode payload.
    """
    resolver = ctx.resolver()

    if tasks.single:
        item = tasks.items[0]
        try:
            target = await _target(resolver, item)
        except TaskNotFoundError as e:
            return failure(str(e))
        result = await action(target, item)
        return success(**_with_warning(single_result(target, result), item, target))

    # One task-list read shared by every name lookup in the batch.
    if any(needs_lookup(item) for item in tasks.items):
        await resolver.load()

    async def run_one(item: dict) -> dict:
        try:
            target = await _target(resolver, item)
        except TaskNotFoundError as e:
            return {"success": False, "error": str(e), "task_name": e.task_name}
        except ValueError as e:
            return {"success": False, "error": str(e), "task_data": item}
        try:
            result = await action(target, item)
        except Exception as e:
            return _item_failure(e, task_data=item)
        return _with_warning({"success": True, **result}, item, target)

    return batch_envelope(await ctx.gather(run_one(item) for item in tasks.items))


async def create_task(ctx, tasks: TaskBatch) -> Envelope:
    if tasks.single:
        task = await ctx.client.add_task(task_create_params(tasks.items[0]))
        return success(task=task)

    async def create_one(item: dict) -> dict:
        try:
            task = await ctx.client.add_task(task_create_params(item))
        except Exception as e:
            return _item_failure(e, task_data=item)
        return {"success": True, "task": task}

    return batch_envelope(await ctx.gather(create_one(item) for item in tasks.items))


async def get_tasks(ctx, args: dict) -> Envelope:
    tasks = await ctx.client.get_tasks(task_filter_params(args))

    # Priority and limit are applied client-side
    priority = args.get("priority")
    if priority:
        tasks = [t for t in tasks if t.get("priority") == priority]
    limit = args.get("limit")
    if isinstance(limit, (int, float)) and limit > 0:
        tasks = tasks[:int(limit)]

    return success(tasks=tasks, count=len(tasks))


async def update_task(ctx, tasks: TaskBatch) -> Envelope:
    async def update(target: Resolution, item: dict) -> dict:
        params = task_update_params(item)
        task = await ctx.client.update_task(target.task_id, params)
        return {"task_id": target.task_id, "updated": params, "task": task}

    return await _apply_to_targets(
        ctx, tasks, update,
        lambda target, result: {"task": result["task"]},
    )


def _removal_message(verb: str):
    def single_result(target: Resolution, result: dict) -> dict:
        if target.content:
            return {"message": f'Successfully {verb} task: "{target.content}"'}
        return {"message": f"Successfully {verb} task with ID: {target.task_id}"}
    return single_result


async def delete_task(ctx, tasks: TaskBatch) -> Envelope:
    async def delete(target: Resolution, item: dict) -> dict:
        await ctx.client.delete_task(target.task_id)
        return {"task_id": target.task_id, "content": target.content or f"Task ID: {target.task_id}"}

    return await _apply_to_targets(ctx, tasks, delete, _removal_message("deleted"))


async def complete_task(ctx, tasks: TaskBatch) -> Envelope:
    async def complete(target: Resolution, item: dict) -> dict:
        await ctx.client.close_task(target.task_id)
        return {"task_id": target.task_id, "content": target.content or f"Task ID: {target.task_id}"}

    return await _apply_to_targets(ctx, tasks, complete, _removal_message("completed"))
