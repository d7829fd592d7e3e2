"""Async HTTP client for the Taskify API with an in-memory cache.

The client keeps the caller's tasks and projects in memory. Reads come from
the last ``fetch_*`` call; every mutation goes to the server first and the
cached copy is only touched once the server has acknowledged it.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

import httpx
import jwt

from models.task import TaskStatus
from taskify.schemas.project import ProjectResponse
from taskify.schemas.task import TaskResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class TaskifyAPIError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(f"{status_code}: {message}")


class TaskifyClient:
    """
    Client-side data layer for one signed-in user.

    :ivar tasks: Cached tasks, newest first.
    :type tasks: list[TaskResponse]
    :ivar projects: Cached projects, newest first.
    :type projects: list[ProjectResponse]
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.tasks: list[TaskResponse] = []
        self.projects: list[ProjectResponse] = []
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "TaskifyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ----- auth -----

    async def register(self, name: str, email: str, password: str) -> dict:
        body = await self._request(
            "POST",
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
            auth=False,
        )
        self.token = body["token"]
        return body["user"]

    async def login(self, email: str, password: str) -> dict:
        body = await self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}, auth=False
        )
        self.token = body["token"]
        return body["user"]

    def logout(self) -> None:
        """Forget the token and everything cached for this user."""
        self.token = None
        self.tasks = []
        self.projects = []

    def current_user(self, now: Optional[datetime] = None) -> Optional[dict]:
        """
        Identity claims from the stored token, without a server round trip.

        The signature is not checked here (the server does that on every
        request); an expired or unreadable token is discarded and ``None``
        is returned.
        """
        if not self.token:
            return None
        try:
            payload = jwt.decode(self.token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            self.logout()
            return None

        current_time = (now or datetime.now(timezone.utc)).timestamp()
        if payload.get("exp", 0) < current_time:
            self.logout()
            return None
        return {"id": payload.get("id"), "name": payload.get("name"), "email": payload.get("email")}

    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    # ----- reads -----

    async def fetch_tasks(self) -> list[TaskResponse]:
        body = await self._request("GET", "/api/tasks/")
        self.tasks = [TaskResponse.model_validate(item) for item in body["tasks"]]
        return self.tasks

    async def fetch_projects(self) -> list[ProjectResponse]:
        body = await self._request("GET", "/api/projects/")
        self.projects = [ProjectResponse.model_validate(item) for item in body["projects"]]
        return self.projects

    async def fetch_project_tasks(self, project_id: UUID | str) -> list[TaskResponse]:
        body = await self._request("GET", f"/api/projects/{project_id}/tasks")
        return [TaskResponse.model_validate(item) for item in body["tasks"]]

    # ----- task mutations -----

    async def add_task(self, **fields: Any) -> TaskResponse:
        body = await self._request("POST", "/api/tasks/", json=_jsonable(fields))
        task = TaskResponse.model_validate(body["data"])
        self.tasks.insert(0, task)
        self._shift_project_counts(task, 1)
        return task

    async def update_task(self, task_id: UUID | str, **fields: Any) -> TaskResponse:
        body = await self._request("PUT", f"/api/tasks/{task_id}", json=_jsonable(fields))
        task = TaskResponse.model_validate(body["data"])
        previous = self._cached_task(task.id)
        if previous is not None:
            self._shift_project_counts(previous, -1)
            self._shift_project_counts(task, 1)
        self.tasks = [task if t.id == task.id else t for t in self.tasks]
        return task

    async def delete_task(self, task_id: UUID | str) -> None:
        await self._request("DELETE", f"/api/tasks/{task_id}")
        previous = self._cached_task(task_id)
        if previous is not None:
            self._shift_project_counts(previous, -1)
        self.tasks = [t for t in self.tasks if str(t.id) != str(task_id)]

    # ----- project mutations -----

    async def add_project(self, **fields: Any) -> ProjectResponse:
        body = await self._request("POST", "/api/projects/", json=_jsonable(fields))
        project = ProjectResponse.model_validate(body["data"])
        self.projects.insert(0, project)
        return project

    async def update_project(self, project_id: UUID | str, **fields: Any) -> ProjectResponse:
        body = await self._request("PUT", f"/api/projects/{project_id}", json=_jsonable(fields))
        project = ProjectResponse.model_validate(body["data"])
        self.projects = [project if p.id == project.id else p for p in self.projects]
        return project

    async def delete_project(self, project_id: UUID | str) -> None:
        await self._request("DELETE", f"/api/projects/{project_id}")
        self.projects = [p for p in self.projects if str(p.id) != str(project_id)]
        # Server detached these tasks; keep the cache in step
        for task in self.tasks:
            if task.project_id is not None and str(task.project_id) == str(project_id):
                task.project_id = None

    # ----- cache helpers -----

    def _cached_task(self, task_id: UUID | str) -> Optional[TaskResponse]:
        return next((t for t in self.tasks if str(t.id) == str(task_id)), None)

    def _shift_project_counts(self, task: TaskResponse, step: int) -> None:
        """Add (``step=1``) or remove (``step=-1``) ``task`` from its project's counts."""
        if task.project_id is None:
            return
        for project in self.projects:
            if str(project.id) != str(task.project_id):
                continue
            if project.task_count is not None:
                project.task_count = max(project.task_count + step, 0)
            if project.completed_task_count is not None and task.status == TaskStatus.completed:
                project.completed_task_count = max(project.completed_task_count + step, 0)

    # ----- transport -----

    async def _request(
        self, method: str, path: str, json: Optional[dict] = None, auth: bool = True
    ) -> Any:
        headers = {}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = await self._http.request(method, path, json=json, headers=headers)
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") or response.reason_phrase or "Request failed"
        logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
        raise TaskifyAPIError(response.status_code, message, body.get("details"))


def _jsonable(fields: dict) -> dict:
    """Make keyword arguments JSON-serializable (UUIDs, datetimes)."""
    out = {}
    for key, value in fields.items():
        if isinstance(value, UUID):
            value = str(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        out[key] = value
    return out
