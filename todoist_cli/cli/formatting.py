"""Human-readable and JSON rendering of API objects."""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from todoist_cli.models import CompletedTask, Due, Label, Project, Task


def to_json(data: Any) -> str:
    """Indented JSON for models, lists of models, or plain dicts."""
    return json.dumps(_plain(data), indent=2, ensure_ascii=False)


def _plain(data: Any) -> Any:
    if isinstance(data, list):
        return [_plain(d) for d in data]
    if isinstance(data, dict):
        return {k: _plain(v) for k, v in data.items()}
    if hasattr(data, "to_dict"):
        return data.to_dict()
    return data


def format_due(due: Due | None, today: date | None = None) -> str:
    """Render a due date relative to ``today``.

    Datetimes are shown in local time as ``YYYY-MM-DD HH:MM``; plain dates
    become Today, Tomorrow, Yesterday, ``<date> (overdue)`` or the date.
    """
    if due is None:
        return ""
    if due.datetime:
        try:
            return datetime.fromisoformat(due.datetime.replace("Z", "+00:00")).astimezone().strftime("%Y-%m-%d %H:%M")
        except ValueError:
            pass
    if not due.date:
        return ""
    try:
        d = date.fromisoformat(due.date[:10])
    except ValueError:
        return due.date

    today = today or date.today()
    delta = (d - today).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    if delta == -1:
        return "Yesterday"
    if delta < 0:
        return f"{d.isoformat()} (overdue)"
    return d.isoformat()


def format_labels(labels: list[str]) -> str:
    if not labels:
        return ""
    return " @" + " @".join(labels)


def format_task_line(task: Task, today: date | None = None) -> str:
    """Format: ``  <id> [P1] Task content (due) @label1 @label2``."""
    due = format_due(task.due, today)
    due = f" ({due})" if due else ""
    return f"  {task.id} [{task.priority_label}] {task.content}{due}{format_labels(task.labels)}"


def format_project_line(project: Project) -> str:
    fav = " (*)" if project.is_favorite else ""
    return f"  {project.id} {project.name}{fav}"


def format_label_line(label: Label) -> str:
    fav = " (*)" if label.is_favorite else ""
    return f"  {label.id} @{label.name}{fav}"


def format_completed_task_line(task: CompletedTask) -> str:
    when = ""
    if task.completed_at:
        when = f" (completed {task.completed_at.astimezone().strftime('%Y-%m-%d %H:%M')})"
    return f"  {task.task_id or task.id} [x] {task.content}{when}"
