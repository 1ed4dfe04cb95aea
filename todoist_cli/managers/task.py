"""Task management - list, create, close and delete tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from todoist_cli.exceptions import TodoistUnexpectedStatusError
from todoist_cli.models import CompletedTask, CreateTaskRequest, Task
from todoist_cli.priority import parse_priority

if TYPE_CHECKING:
    from todoist_cli.client import TodoistClient

NO_CONTENT = 204


class TaskManager:
    """Manage active tasks and read completed ones."""

    def __init__(self, client: TodoistClient):
        self._c = client

    # ── Read ──────────────────────────────────────────────────────────

    def list(self, filter: str | None = None, project_id: str | None = None) -> list[Task]:
        """Get active tasks.

        Args:
            filter: Todoist filter query, e.g. "today | overdue" or "#Work".
            project_id: Only return tasks in this project.
        """
        params: dict[str, Any] = {}
        if filter:
            params["filter"] = filter
        if project_id:
            params["project_id"] = project_id
        return self._c.get_list("/tasks", Task.from_dict, params=params)

    def completed(
        self,
        project_id: str | None = None,
        *,
        since: str | None = None,
        limit: int = 50,
    ) -> list[CompletedTask]:
        """Get completed tasks, newest first.

        Args:
            project_id: Filter to a specific project. None returns all.
            since: Only tasks completed at or after this ISO datetime.
            limit: Maximum number of results.
        """
        params: dict[str, Any] = {"limit": limit}
        if project_id:
            params["project_id"] = project_id
        if since:
            params["since"] = since
        return self._c.get_list(
            "/tasks/completed", CompletedTask.from_dict, params=params, key="items", limit=limit
        )

    # ── Create ────────────────────────────────────────────────────────

    def create(
        self,
        content: str,
        *,
        description: str = "",
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        labels: list[str] | None = None,
        priority: int | str | None = None,
        due_string: str = "",
        due_date: str = "",
        due_datetime: str = "",
        due_lang: str = "",
        deadline_date: str = "",
    ) -> Task:
        """Create a new task.

        Args:
            content: Task title.
            description: Task notes.
            project_id: Target project. Defaults to the inbox.
            section_id: Target section within the project.
            parent_id: Parent task ID for sub-tasks.
            labels: Label names.
            priority: 1-4 where 1 is most urgent.
            due_string: Natural language due date, e.g. "tomorrow".
            due_date: Due date as YYYY-MM-DD.
            due_datetime: Due datetime in RFC 3339.
            due_lang: Language of ``due_string``.
            deadline_date: Hard deadline as YYYY-MM-DD.

        Raises:
            ValueError: If ``priority`` is outside 1-4.
        """
        req = CreateTaskRequest(
            content=content,
            description=description,
            project_id=project_id or "",
            section_id=section_id or "",
            parent_id=parent_id or "",
            labels=labels or [],
            priority=parse_priority(priority) if priority is not None else 0,
            due_string=due_string,
            due_date=due_date,
            due_datetime=due_datetime,
            due_lang=due_lang,
            deadline_date=deadline_date,
        )
        return self.create_from_request(req)

    def create_from_request(self, req: CreateTaskRequest) -> Task:
        body, status = self._c.post("/tasks", json=req.to_dict())
        return self._c.decode_model(body, status, Task.from_dict)

    # ── Close / Delete ────────────────────────────────────────────────

    def close(self, task_id: str) -> None:
        """Mark a task as complete."""
        _, status = self._c.post(f"/tasks/{quote(task_id, safe='')}/close")
        if status != NO_CONTENT:
            raise TodoistUnexpectedStatusError(status, expected=NO_CONTENT)

    def delete(self, task_id: str) -> None:
        """Permanently delete a task."""
        _, status = self._c.delete(f"/tasks/{quote(task_id, safe='')}")
        if status != NO_CONTENT:
            raise TodoistUnexpectedStatusError(status, expected=NO_CONTENT)
