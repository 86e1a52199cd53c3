"""Translate tool arguments into Todoist client call arguments.

Tool arguments use snake_case names (project_id, due_string, duration +
duration_unit); the client takes camelCase names and a single
``duration={"amount", "unit"}`` object.
"""
from dataclasses import dataclass, field
from typing import List

# Tool field -> client field, for fields that are only renamed
TASK_FIELDS = {
    "content": "content",
    "description": "description",
    "project_id": "projectId",
    "section_id": "sectionId",
    "parent_id": "parentId",
    "order": "order",
    "labels": "labels",
    "priority": "priority",
    "due_string": "dueString",
    "due_date": "dueDate",
    "due_datetime": "dueDateTime",
    "due_lang": "dueLang",
    "assignee_id": "assigneeId",
    "deadline_date": "deadlineDate",
    "deadline_lang": "deadlineLang",
}

# parent_id is not movable through the update endpoint
UPDATE_FIELDS = {k: v for k, v in TASK_FIELDS.items() if k != "parent_id"}


@dataclass
class TaskBatch:
    """Task arguments in batch form.

    A single-task call becomes a batch of one with ``single=True`` so that
    handlers only deal with lists; ``single`` picks the response shape.
    """
    items: List[dict] = field(default_factory=list)
    single: bool = False

    @classmethod
    def from_arguments(cls, args: dict) -> "TaskBatch":
        tasks = args.get("tasks")
        if isinstance(tasks, list):
            return cls(items=list(tasks), single=False)
        item = {k: v for k, v in args.items() if k != "tasks"}
        return cls(items=[item], single=True)

    def __len__(self):
        return len(self.items)


def needs_lookup(item: dict) -> bool:
    """True when the item addresses its task by name only."""
    return not item.get("task_id") and isinstance(item.get("task_name"), str)


def task_create_params(item: dict) -> dict:
    params = {
        dst: item[src]
        for src, dst in TASK_FIELDS.items()
        if item.get(src) is not None
    }
    if item.get("duration") is not None and item.get("duration_unit") is not None:
        params["duration"] = {"amount": item["duration"], "unit": item["duration_unit"]}
    return params


def task_update_params(item: dict) -> dict:
    """Only fields the caller supplied are sent; absent never means clear."""
    params = {dst: item[src] for src, dst in UPDATE_FIELDS.items() if src in item}
    if "duration" in item and item["duration"] is None:
        params["duration"] = None
    elif "duration" in item and item.get("duration_unit") is not None:
        params["duration"] = {"amount": item["duration"], "unit": item["duration_unit"]}
    return params


def _renamed(args: dict, mapping: dict) -> dict:
    return {dst: args[src] for src, dst in mapping.items() if args.get(src) is not None}


def project_create_params(args: dict) -> dict:
    return _renamed(args, {
        "name": "name",
        "parent_id": "parentId",
        "color": "color",
        "favorite": "isFavorite",
    })


def project_update_params(args: dict) -> dict:
    return _renamed(args, {"name": "name", "color": "color", "favorite": "isFavorite"})


def section_params(args: dict) -> dict:
    return _renamed(args, {"project_id": "projectId", "name": "name", "order": "order"})


def label_params(args: dict) -> dict:
    return _renamed(args, {
        "name": "name",
        "color": "color",
        "order": "order",
        "is_favorite": "isFavorite",
    })


def task_filter_params(args: dict) -> dict:
    """Remote filter for a task listing; priority and limit apply client-side."""
    params = {
        key: args[key]
        for key in ("project_id", "section_id", "label", "filter", "lang")
        if args.get(key)
    }
    if args.get("ids"):
        params["ids"] = list(args["ids"])
    return params
