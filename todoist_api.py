"""
Todoist REST API client.

Async httpx client wrapping the Todoist REST API v2. Callers pass argument
dicts using the client field names (projectId, dueString, duration={amount,
unit}, ...); ``to_wire`` converts them to the REST body.
"""
import logging
from typing import Optional

import httpx

logger = logging.getLogger("todoist-mcp.api")

REST_BASE = "https://api.todoist.com/rest/v2"
TIMEOUT = 30.0

# Client field name -> REST field name
WIRE_FIELDS = {
    "projectId": "project_id",
    "sectionId": "section_id",
    "parentId": "parent_id",
    "assigneeId": "assignee_id",
    "dueString": "due_string",
    "dueDate": "due_date",
    "dueDateTime": "due_datetime",
    "dueLang": "due_lang",
    "deadlineDate": "deadline_date",
    "deadlineLang": "deadline_lang",
    "isFavorite": "is_favorite",
}

STATUS_MESSAGES = {
    401: "Unauthorized - check your API token",
    403: "Forbidden - insufficient permissions",
    404: "Not found",
    429: "Rate limited - too many requests, try again later",
}


class TodoistAPIError(Exception):
    """A Todoist API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 retry_after: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retry_after = retry_after


def error_details(e: Exception) -> dict:
    """Render an exception as the error fields of a result dict."""
    if isinstance(e, TodoistAPIError):
        details = {"error": e.message}
        if e.status_code is not None:
            details["status_code"] = e.status_code
        if e.retry_after is not None:
            details["retry_after_seconds"] = e.retry_after
        return details
    return {"error": str(e) or e.__class__.__name__}


def _from_status_error(e: httpx.HTTPStatusError) -> TodoistAPIError:
    status = e.response.status_code
    body = e.response.text.strip()
    msg = STATUS_MESSAGES.get(status, f"HTTP {status}: {body[:200]}")
    if status in STATUS_MESSAGES and body and status != 429:
        msg = f"{msg}: {body[:200]}"
    retry_after = None
    if status == 429:
        header = e.response.headers.get("Retry-After")
        if header and header.isdigit():
            retry_after = int(header)
    return TodoistAPIError(msg, status_code=status, retry_after=retry_after)


def _from_request_error(e: httpx.RequestError) -> TodoistAPIError:
    if isinstance(e, httpx.TimeoutException):
        return TodoistAPIError("Request timed out")
    if isinstance(e, httpx.ConnectError):
        return TodoistAPIError("Could not connect to Todoist API")
    return TodoistAPIError(f"Request error: {str(e)}")


def to_wire(params: dict) -> dict:
    """Convert client-style arguments to a REST request body."""
    body = {}
    for key, value in params.items():
        if key == "duration":
            if value is None:
                body["duration"] = None
                body["duration_unit"] = None
            else:
                body["duration"] = value["amount"]
                body["duration_unit"] = value["unit"]
            continue
        body[WIRE_FIELDS.get(key, key)] = value
    return body


class TodoistClient:
    """Async Todoist REST client with a bearer token."""

    def __init__(self, token: str, base_url: str = REST_BASE,
                 timeout: float = TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    async def _request(self, method: str, path: str, *, params: Optional[dict] = None,
                       json: Optional[dict] = None):
        try:
            resp = await self._http.request(method, path, params=params, json=json)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            err = _from_status_error(e)
            logger.warning(f"{method} {path} failed with {err.status_code}: {err.message}")
            raise err from e
        except httpx.RequestError as e:
            err = _from_request_error(e)
            logger.warning(f"{method} {path} failed: {err.message}")
            raise err from e

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # Projects

    async def get_projects(self) -> list:
        return await self._request("GET", "/projects")

    async def add_project(self, args: dict) -> dict:
        return await self._request("POST", "/projects", json=to_wire(args))

    async def update_project(self, project_id: str, args: dict) -> dict:
        return await self._request("POST", f"/projects/{project_id}", json=to_wire(args))

    # Sections

    async def get_sections(self, project_id: str) -> list:
        return await self._request("GET", "/sections", params={"project_id": project_id})

    async def add_section(self, args: dict) -> dict:
        return await self._request("POST", "/sections", json=to_wire(args))

    # Tasks

    async def get_tasks(self, params: Optional[dict] = None) -> list:
        query = {}
        for key, value in (params or {}).items():
            if key == "ids":
                query["ids"] = ",".join(value)
            else:
                query[key] = value
        return await self._request("GET", "/tasks", params=query or None)

    async def add_task(self, args: dict) -> dict:
        return await self._request("POST", "/tasks", json=to_wire(args))

    async def update_task(self, task_id: str, args: dict) -> dict:
        return await self._request("POST", f"/tasks/{task_id}", json=to_wire(args))

    async def delete_task(self, task_id: str) -> bool:
        await self._request("DELETE", f"/tasks/{task_id}")
        return True

    async def close_task(self, task_id: str) -> bool:
        await self._request("POST", f"/tasks/{task_id}/close")
        return True

    # Labels

    async def get_labels(self) -> list:
        return await self._request("GET", "/labels")

    async def add_label(self, args: dict) -> dict:
        return await self._request("POST", "/labels", json=to_wire(args))

    async def get_label(self, label_id: str) -> dict:
        return await self._request("GET", f"/labels/{label_id}")

    async def update_label(self, label_id: str, args: dict) -> dict:
        return await self._request("POST", f"/labels/{label_id}", json=to_wire(args))

    async def delete_label(self, label_id: str) -> bool:
        await self._request("DELETE", f"/labels/{label_id}")
        return True
