"""
Todoist command-line client and REST API library.

Usage:
    from todoist_cli import TodoistClient

    client = TodoistClient(token)

    # List all projects
    projects = client.project.list()

    # Create an urgent task
    task = client.task.create("Buy milk", priority=1)
"""

__version__ = "0.1.0"

from todoist_cli.client import TodoistClient
from todoist_cli.exceptions import (
    ErrorKind,
    TodoistError,
    TodoistAPIError,
    TodoistAuthError,
    TodoistRateLimitError,
    TodoistClientError,
    TodoistNotFoundError,
    TodoistServerError,
    TodoistNetworkError,
    TodoistDecodeError,
    TodoistUnexpectedStatusError,
)
from todoist_cli.models import (
    Task, Due, Deadline, Duration, CompletedTask, Project, Label,
    CreateTaskRequest, CreateProjectRequest,
)

__all__ = [
    "TodoistClient",
    "ErrorKind",
    "TodoistError",
    "TodoistAPIError",
    "TodoistAuthError",
    "TodoistRateLimitError",
    "TodoistClientError",
    "TodoistNotFoundError",
    "TodoistServerError",
    "TodoistNetworkError",
    "TodoistDecodeError",
    "TodoistUnexpectedStatusError",
    "Task",
    "Due",
    "Deadline",
    "Duration",
    "CompletedTask",
    "Project",
    "Label",
    "CreateTaskRequest",
    "CreateProjectRequest",
]
