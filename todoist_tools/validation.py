"""Structural validation of tool arguments.

Each tool has a predicate that checks the minimum shape its handler needs:
presence and primitive type of required fields. Unknown fields are allowed
and nothing is checked against Todoist itself.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .normalize import TaskBatch


class InvalidArgumentsError(ValueError):
    """Raised when tool arguments fail structural validation."""
    pass


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation: the accepted value, or the rejection reason."""
    valid: bool
    value: Any = None
    reason: str = ""

    @classmethod
    def ok(cls, value: Any) -> "ValidationResult":
        return cls(valid=True, value=value)

    @classmethod
    def fail(cls, reason: str) -> "ValidationResult":
        return cls(valid=False, reason=reason)


def _is_str(args: dict, key: str) -> bool:
    return isinstance(args.get(key), str)


def _require_strings(args: Any, *keys: str) -> ValidationResult:
    if not isinstance(args, dict):
        return ValidationResult.fail("arguments must be an object")
    for key in keys:
        if not _is_str(args, key):
            return ValidationResult.fail(f"{key} must be a string")
    return ValidationResult.ok(args)


def _has_content(item: dict) -> Optional[str]:
    if not _is_str(item, "content"):
        return "content must be a string"
    return None


def _has_reference(item: dict) -> Optional[str]:
    if not (_is_str(item, "task_id") or _is_str(item, "task_name")):
        return "either task_id or task_name must be a string"
    return None


def _validate_batch(args: Any, check_item: Callable[[dict], Optional[str]]) -> ValidationResult:
    """Validate a `tasks` array item by item, or the top level as one item."""
    if not isinstance(args, dict):
        return ValidationResult.fail("arguments must be an object")

    tasks = args.get("tasks")
    if isinstance(tasks, list):
        if not tasks:
            return ValidationResult.fail("tasks must be a non-empty array")
        for i, item in enumerate(tasks):
            if not isinstance(item, dict):
                return ValidationResult.fail(f"tasks[{i}] must be an object")
            problem = check_item(item)
            if problem:
                return ValidationResult.fail(f"tasks[{i}]: {problem}")
        return ValidationResult.ok(TaskBatch.from_arguments(args))

    problem = check_item(args)
    if problem:
        return ValidationResult.fail(problem)
    return ValidationResult.ok(TaskBatch.from_arguments(args))


def validate_object(args: Any) -> ValidationResult:
    if not isinstance(args, dict):
        return ValidationResult.fail("arguments must be an object")
    return ValidationResult.ok(args)


def validate_create_task(args: Any) -> ValidationResult:
    return _validate_batch(args, _has_content)


def validate_task_reference(args: Any) -> ValidationResult:
    """Update, delete and complete: each task needs task_id or task_name."""
    return _validate_batch(args, _has_reference)


def validate_update_task_labels(args: Any) -> ValidationResult:
    result = _require_strings(args, "task_name")
    if result.valid and not isinstance(args.get("labels"), list):
        return ValidationResult.fail("labels must be an array")
    return result


VALIDATORS = {
    "todoist_create_task": validate_create_task,
    "todoist_get_tasks": validate_object,
    "todoist_update_task": validate_task_reference,
    "todoist_delete_task": validate_task_reference,
    "todoist_complete_task": validate_task_reference,
    "todoist_get_projects": validate_object,
    "todoist_create_project": lambda args: _require_strings(args, "name"),
    "todoist_update_project": lambda args: _require_strings(args, "project_id"),
    "todoist_get_project_sections": lambda args: _require_strings(args, "project_id"),
    "todoist_create_section": lambda args: _require_strings(args, "project_id", "name"),
    "todoist_get_personal_labels": validate_object,
    "todoist_create_personal_label": lambda args: _require_strings(args, "name"),
    "todoist_get_personal_label": lambda args: _require_strings(args, "label_id"),
    "todoist_update_personal_label": lambda args: _require_strings(args, "label_id"),
    "todoist_delete_personal_label": lambda args: _require_strings(args, "label_id"),
    "todoist_update_task_labels": validate_update_task_labels,
}


def validate(name: str, arguments: Any) -> Any:
    """Validate arguments for a tool and return the accepted value.

    Raises:
        InvalidArgumentsError: if the arguments do not fit the tool's shape.
        KeyError: if the tool has no validator.
    """
    result = VALIDATORS[name](arguments)
    if not result.valid:
        raise InvalidArgumentsError(f"Invalid arguments for {name}: {result.reason}")
    return result.value
