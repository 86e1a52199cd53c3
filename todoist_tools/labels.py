"""Personal label tools, plus setting the labels of a task found by name."""
from .envelope import Envelope, failure, success
from .normalize import label_params
from .resolver import TaskNotFoundError, ambiguity_warning


async def get_labels(ctx, args: dict) -> Envelope:
    labels = await ctx.client.get_labels()
    return success(labels=labels, count=len(labels))


async def create_label(ctx, args: dict) -> Envelope:
    label = await ctx.client.add_label(label_params(args))
    return success(label=label)


async def get_label(ctx, args: dict) -> Envelope:
    label = await ctx.client.get_label(args["label_id"])
    return success(label=label)


async def update_label(ctx, args: dict) -> Envelope:
    label = await ctx.client.update_label(args["label_id"], label_params(args))
    return success(label=label)


async def delete_label(ctx, args: dict) -> Envelope:
    await ctx.client.delete_label(args["label_id"])
    return success(message=f"Successfully deleted label with ID: {args['label_id']}")


async def update_task_labels(ctx, args: dict) -> Envelope:
    """Replace the labels of the first task whose content contains task_name."""
    task_name = args["task_name"]
    try:
        match = await ctx.resolver().resolve(task_name)
    except TaskNotFoundError:
        return failure(f'Could not find a task matching "{task_name}"')

    task = await ctx.client.update_task(match.task_id, {"labels": list(args["labels"])})
    fields = {}
    if match.ambiguous:
        fields["warning"] = ambiguity_warning(task_name, match)
    return success(
        message=f'Labels updated for task "{match.content}"',
        task=task,
        **fields,
    )
