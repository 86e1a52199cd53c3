"""Pytest fixtures for Todoist MCP tests."""
import asyncio
import json

import pytest

from todoist_api import TodoistAPIError
from todoist_tools import config as config_module
from todoist_tools.dispatch import Dispatcher

MUTATING_CALLS = {
    "add_project", "update_project", "add_section", "add_task", "update_task",
    "delete_task", "close_task", "add_label", "update_label", "delete_label",
}


class FakeTodoistClient:
    """In-memory stand-in for TodoistClient.

    Every call is recorded in ``calls`` as ``(method, *args)``. ``fail_on``
    maps ``(method, id)`` to an exception raised for that call.
    """

    def __init__(self, tasks=None, projects=None, sections=None, labels=None):
        self.tasks = list(tasks or [])
        self.projects = list(projects or [])
        self.sections = list(sections or [])
        self.labels = list(labels or [])
        self.calls = []
        self.fail_on = {}
        self._next_id = 1000

    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    def _check(self, method, key=None):
        err = self.fail_on.get((method, key))
        if err is not None:
            raise err

    def calls_to(self, method):
        return [c for c in self.calls if c[0] == method]

    def mutations(self):
        return [c for c in self.calls if c[0] in MUTATING_CALLS]

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        pass

    async def aclose(self):
        pass

    async def get_projects(self):
        self.calls.append(("get_projects",))
        self._check("get_projects")
        return list(self.projects)

    async def add_project(self, args):
        self.calls.append(("add_project", args))
        self._check("add_project", args.get("name"))
        project = {"id": self._new_id(), **args}
        self.projects.append(project)
        return project

    async def update_project(self, project_id, args):
        self.calls.append(("update_project", project_id, args))
        self._check("update_project", project_id)
        return {"id": project_id, **args}

    async def get_sections(self, project_id):
        self.calls.append(("get_sections", project_id))
        return [s for s in self.sections if s.get("project_id") == project_id]

    async def add_section(self, args):
        self.calls.append(("add_section", args))
        return {"id": self._new_id(), **args}

    async def get_tasks(self, params=None):
        self.calls.append(("get_tasks", params))
        self._check("get_tasks")
        tasks = list(self.tasks)
        for key in ("project_id", "section_id"):
            if params and params.get(key):
                tasks = [t for t in tasks if t.get(key) == params[key]]
        if params and params.get("label"):
            tasks = [t for t in tasks if params["label"] in t.get("labels", [])]
        if params and params.get("ids"):
            tasks = [t for t in tasks if t["id"] in params["ids"]]
        return tasks

    async def add_task(self, args):
        self.calls.append(("add_task", args))
        self._check("add_task", args.get("content"))
        task = {"id": self._new_id(), "priority": 1, "labels": [], **args}
        self.tasks.append(task)
        return task

    async def update_task(self, task_id, args):
        self.calls.append(("update_task", task_id, args))
        self._check("update_task", task_id)
        for task in self.tasks:
            if task["id"] == task_id:
                task.update(args)
                return dict(task)
        raise TodoistAPIError("Not found", status_code=404)

    async def delete_task(self, task_id):
        self.calls.append(("delete_task", task_id))
        self._check("delete_task", task_id)
        self.tasks = [t for t in self.tasks if t["id"] != task_id]
        return True

    async def close_task(self, task_id):
        self.calls.append(("close_task", task_id))
        self._check("close_task", task_id)
        return True

    async def get_labels(self):
        self.calls.append(("get_labels",))
        return list(self.labels)

    async def add_label(self, args):
        self.calls.append(("add_label", args))
        return {"id": self._new_id(), **args}

    async def get_label(self, label_id):
        self.calls.append(("get_label", label_id))
        self._check("get_label", label_id)
        for label in self.labels:
            if label["id"] == label_id:
                return label
        raise TodoistAPIError("Not found", status_code=404)

    async def update_label(self, label_id, args):
        self.calls.append(("update_label", label_id, args))
        return {"id": label_id, **args}

    async def delete_label(self, label_id):
        self.calls.append(("delete_label", label_id))
        self._check("delete_label", label_id)
        return True


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at an empty temp dir and clear related env vars."""
    for var in (
        "TODOIST_API_TOKEN",
        "TODOIST_API_BASE_URL",
        "TODOIST_API_TIMEOUT",
        "TODOIST_MCP_BATCH_CONCURRENCY",
        "TODOIST_MCP_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    config_path = tmp_path / "config.json"
    monkeypatch.setenv("TODOIST_MCP_CONFIG", str(config_path))
    config_module.clear_config_cache()
    yield config_path
    config_module.clear_config_cache()


@pytest.fixture
def write_config(isolated_config):
    """Write the isolated config file and reset the cache."""
    def _write(**values):
        isolated_config.write_text(json.dumps(values))
        config_module.clear_config_cache()
        return isolated_config
    return _write


@pytest.fixture
def sample_tasks():
    return [
        {"id": "t1", "content": "Buy milk at the store", "priority": 1, "labels": [], "project_id": "p1"},
        {"id": "t2", "content": "Call dentist", "priority": 4, "labels": ["health"], "project_id": "p1"},
        {"id": "t3", "content": "Write report", "priority": 2, "labels": ["work"], "project_id": "p2"},
    ]


@pytest.fixture
def fake_client(sample_tasks):
    return FakeTodoistClient(
        tasks=sample_tasks,
        projects=[
            {"id": "p1", "name": "Inbox", "color": "grey"},
            {"id": "p2", "name": "Work", "color": "blue", "parent_id": None},
        ],
        sections=[{"id": "s1", "project_id": "p2", "name": "Reports", "order": 1}],
        labels=[{"id": "l1", "name": "health", "color": "red", "order": 1, "is_favorite": False}],
    )


@pytest.fixture
def dispatcher(fake_client):
    return Dispatcher(fake_client)


@pytest.fixture
def call(dispatcher):
    """Dispatch a tool call and return (payload, is_error)."""
    def _call(name, arguments):
        envelope = asyncio.run(dispatcher.dispatch(name, arguments))
        return json.loads(envelope.text), envelope.is_error
    return _call
