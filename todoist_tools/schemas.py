"""Tool definitions advertised by the Todoist MCP server."""
from mcp.types import Tool

COLORS = [
    "berry_red", "red", "orange", "yellow", "olive_green", "lime_green", "green",
    "mint_green", "teal", "sky_blue", "light_blue", "blue", "grape", "violet",
    "lavender", "magenta", "salmon", "charcoal", "grey", "taupe",
]
PRIORITIES = [1, 2, 3, 4]
DURATION_UNITS = ["minute", "day"]


def _task_fields(clearable_duration: bool = False) -> dict:
    """Per-task fields shared by single and batch create/update."""
    duration = {"type": "number", "description": "Duration amount, used together with duration_unit (optional)"}
    if clearable_duration:
        duration = {"type": ["number", "null"], "description": "Duration amount with duration_unit, or null to remove the duration (optional)"}
    return {
        "content": {"type": "string", "description": "The content/title of the task"},
        "description": {"type": "string", "description": "Detailed description of the task (optional)"},
        "project_id": {"type": "string", "description": "ID of the project for the task (optional)"},
        "section_id": {"type": "string", "description": "ID of the section for the task (optional)"},
        "parent_id": {"type": "string", "description": "ID of the parent task for subtasks (optional)"},
        "order": {"type": "number", "description": "Position in the project or parent task (optional)"},
        "labels": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Array of label names to apply to the task (optional)",
        },
        "priority": {
            "type": "number",
            "enum": PRIORITIES,
            "description": "Task priority from 1 (normal) to 4 (urgent) (optional)",
        },
        "due_string": {"type": "string", "description": "Natural language due date like 'tomorrow', 'next Monday' (optional)"},
        "due_date": {"type": "string", "description": "Due date in YYYY-MM-DD format (optional)"},
        "due_datetime": {"type": "string", "description": "Due date and time in RFC3339 format (optional)"},
        "due_lang": {"type": "string", "description": "2-letter language code for due date parsing (optional)"},
        "assignee_id": {"type": "string", "description": "User ID to assign the task to (optional)"},
        "duration": duration,
        "duration_unit": {
            "type": "string",
            "enum": DURATION_UNITS,
            "description": "Duration unit ('minute' or 'day') (optional)",
        },
        "deadline_date": {"type": "string", "description": "Deadline date in YYYY-MM-DD format (optional)"},
        "deadline_lang": {"type": "string", "description": "2-letter language code for deadline parsing (optional)"},
    }


def _update_fields() -> dict:
    fields = _task_fields(clearable_duration=True)
    del fields["parent_id"]
    return fields


def _task_reference(action: str) -> dict:
    return {
        "task_id": {"type": "string", "description": f"ID of the task to {action} (preferred)"},
        "task_name": {
            "type": "string",
            "description": f"Name/content of the task to search for and {action} (if ID not provided)",
        },
    }


_REFERENCE_ANY_OF = [{"required": ["task_id"]}, {"required": ["task_name"]}]


def _batch_schema(item_properties: dict, item_rules: dict, description: str) -> dict:
    """Schema accepting either a `tasks` array or a single task at the top level."""
    return {
        "type": "object",
        "properties": {
            "tasks": {
                "type": "array",
                "description": description,
                "items": {"type": "object", "properties": item_properties, **item_rules},
            },
            **item_properties,
        },
    }


def _color(description: str) -> dict:
    return {"type": "string", "enum": COLORS, "description": description}


TOOLS = [
    Tool(
        name="todoist_create_task",
        description="Create one or more tasks in Todoist with full parameter support",
        inputSchema=_batch_schema(
            _task_fields(),
            {"required": ["content"]},
            "Array of tasks to create (for batch operations)",
        ),
    ),
    Tool(
        name="todoist_get_tasks",
        description="Get a list of tasks from Todoist with various filters",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "Filter tasks by project ID (optional)"},
                "section_id": {"type": "string", "description": "Filter tasks by section ID (optional)"},
                "label": {"type": "string", "description": "Filter tasks by label name (optional)"},
                "filter": {
                    "type": "string",
                    "description": "Natural language filter like 'today', 'tomorrow', 'next week', 'priority 1', 'overdue' (optional)",
                },
                "lang": {"type": "string", "description": "IETF language tag defining what language filter is written in (optional)"},
                "ids": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of specific task IDs to retrieve (optional)",
                },
                "priority": {
                    "type": "number",
                    "enum": PRIORITIES,
                    "description": "Filter by priority level (1-4) (optional)",
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum number of tasks to return (optional, client-side filtering)",
                    "default": 10,
                },
            },
        },
    ),
    Tool(
        name="todoist_update_task",
        description="Update one or more tasks in Todoist with full parameter support",
        inputSchema=_batch_schema(
            {**_task_reference("update"), **_update_fields()},
            {"anyOf": _REFERENCE_ANY_OF},
            "Array of tasks to update (for batch operations)",
        ),
    ),
    Tool(
        name="todoist_delete_task",
        description="Delete one or more tasks from Todoist",
        inputSchema=_batch_schema(
            _task_reference("delete"),
            {"anyOf": _REFERENCE_ANY_OF},
            "Array of tasks to delete (for batch operations)",
        ),
    ),
    Tool(
        name="todoist_complete_task",
        description="Mark one or more tasks as complete in Todoist",
        inputSchema=_batch_schema(
            _task_reference("complete"),
            {"anyOf": _REFERENCE_ANY_OF},
            "Array of tasks to mark as complete (for batch operations)",
        ),
    ),
    Tool(
        name="todoist_get_projects",
        description="Get all projects from Todoist",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="todoist_create_project",
        description="Create a new project in Todoist",
        inputSchema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name of the project"},
                "parent_id": {"type": "string", "description": "Parent project ID for nested projects (optional)"},
                "color": _color("Color of the project (optional)"),
                "favorite": {"type": "boolean", "description": "Whether the project is a favorite (optional)"},
            },
            "required": ["name"],
        },
    ),
    Tool(
        name="todoist_update_project",
        description="Update an existing project in Todoist",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "ID of the project to update"},
                "name": {"type": "string", "description": "New name for the project (optional)"},
                "color": _color("New color for the project (optional)"),
                "favorite": {"type": "boolean", "description": "Whether the project should be a favorite (optional)"},
            },
            "required": ["project_id"],
        },
    ),
    Tool(
        name="todoist_get_project_sections",
        description="Get all sections in a Todoist project",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "ID of the project"},
            },
            "required": ["project_id"],
        },
    ),
    Tool(
        name="todoist_create_section",
        description="Create a new section in a Todoist project",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "ID of the project"},
                "name": {"type": "string", "description": "Name of the section"},
                "order": {"type": "number", "description": "Order of the section (optional)"},
            },
            "required": ["project_id", "name"],
        },
    ),
    Tool(
        name="todoist_get_personal_labels",
        description="Get all personal labels from Todoist",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="todoist_create_personal_label",
        description="Create a new personal label in Todoist",
        inputSchema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name of the label"},
                "color": _color("Color of the label (optional)"),
                "order": {"type": "number", "description": "Order of the label (optional)"},
                "is_favorite": {"type": "boolean", "description": "Whether the label is a favorite (optional)"},
            },
            "required": ["name"],
        },
    ),
    Tool(
        name="todoist_get_personal_label",
        description="Get a personal label by ID",
        inputSchema={
            "type": "object",
            "properties": {
                "label_id": {"type": "string", "description": "ID of the label to retrieve"},
            },
            "required": ["label_id"],
        },
    ),
    Tool(
        name="todoist_update_personal_label",
        description="Update an existing personal label in Todoist",
        inputSchema={
            "type": "object",
            "properties": {
                "label_id": {"type": "string", "description": "ID of the label to update"},
                "name": {"type": "string", "description": "New name for the label (optional)"},
                "color": _color("New color for the label (optional)"),
                "order": {"type": "number", "description": "New order for the label (optional)"},
                "is_favorite": {"type": "boolean", "description": "Whether the label is a favorite (optional)"},
            },
            "required": ["label_id"],
        },
    ),
    Tool(
        name="todoist_delete_personal_label",
        description="Delete a personal label from Todoist",
        inputSchema={
            "type": "object",
            "properties": {
                "label_id": {"type": "string", "description": "ID of the label to delete"},
            },
            "required": ["label_id"],
        },
    ),
    Tool(
        name="todoist_update_task_labels",
        description="Update the labels of a task in Todoist",
        inputSchema={
            "type": "object",
            "properties": {
                "task_name": {"type": "string", "description": "Name/content of the task to update labels for"},
                "labels": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of label names to set for the task",
                },
            },
            "required": ["task_name", "labels"],
        },
    ),
]

TOOL_NAMES = frozenset(tool.name for tool in TOOLS)
