"""Project management - list, create and delete projects."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from todoist_cli.exceptions import TodoistNotFoundError, TodoistUnexpectedStatusError
from todoist_cli.models import CreateProjectRequest, Project

if TYPE_CHECKING:
    from todoist_cli.client import TodoistClient

NO_CONTENT = 204


class ProjectManager:
    """Manage projects."""

    def __init__(self, client: TodoistClient):
        self._c = client

    def list(self) -> list[Project]:
        """Get all projects."""
        return self._c.get_list("/projects", Project.from_dict)

    def find_by_name(self, name: str) -> Project:
        """Get a project by name, ignoring case.

        Raises:
            TodoistNotFoundError: No project has that name.
        """
        wanted = name.casefold()
        for p in self.list():
            if p.name.casefold() == wanted:
                return p
        raise TodoistNotFoundError(f"project not found: {name}", 404)

    def create(self, name: str) -> Project:
        """Create a new project."""
        body, status = self._c.post("/projects", json=CreateProjectRequest(name=name).to_dict())
        return self._c.decode_model(body, status, Project.from_dict)

    def delete(self, project_id: str) -> None:
        """Delete a project and all its tasks."""
        _, status = self._c.delete(f"/projects/{quote(project_id, safe='')}")
        if status != NO_CONTENT:
            raise TodoistUnexpectedStatusError(status, expected=NO_CONTENT)
