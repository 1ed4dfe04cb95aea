"""Data models for Todoist API objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from todoist_cli.priority import priority_label


def _parse_dt(val: str | None) -> datetime | None:
    if not val:
        return None
    try:
        return datetime.fromisoformat(val.replace("Z", "+00:00"))
    except ValueError:
        return None


def _str_or_empty(val: Any) -> str:
    return "" if val is None else str(val)


def _drop_empty(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v not in ("", None, 0, [])}


@dataclass
class Due:
    date: str  # YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS
    string: str = ""
    is_recurring: bool = False
    datetime: str = ""  # RFC 3339
    timezone: str = ""
    lang: str = ""

    @classmethod
    def from_dict(cls, d: dict | None) -> Due | None:
        if not d:
            return None
        return cls(
            date=d.get("date", ""),
            string=d.get("string", ""),
            is_recurring=d.get("is_recurring", False),
            datetime=d.get("datetime") or "",
            timezone=d.get("timezone") or "",
            lang=d.get("lang") or "",
        )

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"string": self.string, "date": self.date, "is_recurring": self.is_recurring}
        if self.datetime:
            d["datetime"] = self.datetime
        if self.timezone:
            d["timezone"] = self.timezone
        if self.lang:
            d["lang"] = self.lang
        return d


@dataclass
class Deadline:
    date: str  # YYYY-MM-DD
    lang: str = ""

    @classmethod
    def from_dict(cls, d: dict | None) -> Deadline | None:
        if not d:
            return None
        return cls(date=d.get("date", ""), lang=d.get("lang") or "")

    def to_dict(self) -> dict:
        d = {"date": self.date}
        if self.lang:
            d["lang"] = self.lang
        return d


@dataclass
class Duration:
    amount: int
    unit: str  # "minute" or "day"

    @classmethod
    def from_dict(cls, d: dict | None) -> Duration | None:
        if not d:
            return None
        return cls(amount=d.get("amount", 0), unit=d.get("unit", "minute"))

    def to_dict(self) -> dict:
        return {"amount": self.amount, "unit": self.unit}


@dataclass
class Task:
    id: str
    content: str
    project_id: str = ""
    section_id: str = ""
    description: str = ""
    is_completed: bool = False
    labels: list[str] = field(default_factory=list)
    parent_id: str = ""
    order: int = 0
    priority: int = 1  # API scale: 1=normal, 4=urgent
    due: Due | None = None
    deadline: Deadline | None = None
    duration: Duration | None = None
    note_count: int = 0
    creator_id: str = ""
    created_at: datetime | None = None
    completed_at: datetime | None = None
    assignee_id: str = ""
    assigner_id: str = ""

    @property
    def priority_label(self) -> str:
        return priority_label(self.priority)

    @classmethod
    def from_dict(cls, d: dict) -> Task:
        return cls(
            id=str(d["id"]),
            content=d.get("content", ""),
            project_id=_str_or_empty(d.get("project_id")),
            section_id=_str_or_empty(d.get("section_id")),
            description=d.get("description") or "",
            is_completed=d.get("checked", d.get("is_completed", False)),
            labels=d.get("labels") or [],
            parent_id=_str_or_empty(d.get("parent_id")),
            order=d.get("child_order") or d.get("order") or 0,
            priority=d.get("priority") or 1,
            due=Due.from_dict(d.get("due")),
            deadline=Deadline.from_dict(d.get("deadline")),
            duration=Duration.from_dict(d.get("duration")),
            note_count=d.get("note_count") or 0,
            creator_id=_str_or_empty(d.get("added_by_uid")),
            created_at=_parse_dt(d.get("added_at")),
            completed_at=_parse_dt(d.get("completed_at")),
            assignee_id=_str_or_empty(d.get("responsible_uid")),
            assigner_id=_str_or_empty(d.get("assigned_by_uid")),
        )

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "id": self.id,
            "project_id": self.project_id,
            "content": self.content,
            "checked": self.is_completed,
            "labels": self.labels,
            "child_order": self.order,
            "priority": self.priority,
            "note_count": self.note_count,
        }
        if self.section_id:
            d["section_id"] = self.section_id
        if self.description:
            d["description"] = self.description
        if self.parent_id:
            d["parent_id"] = self.parent_id
        if self.due:
            d["due"] = self.due.to_dict()
        if self.deadline:
            d["deadline"] = self.deadline.to_dict()
        if self.duration:
            d["duration"] = self.duration.to_dict()
        if self.creator_id:
            d["added_by_uid"] = self.creator_id
        if self.created_at:
            d["added_at"] = self.created_at.isoformat()
        if self.completed_at:
            d["completed_at"] = self.completed_at.isoformat()
        if self.assignee_id:
            d["responsible_uid"] = self.assignee_id
        if self.assigner_id:
            d["assigned_by_uid"] = self.assigner_id
        return d


@dataclass
class CompletedTask:
    """A completed task as returned by ``GET /tasks/completed``.

    This is a different shape from an active ``Task``: ``id`` identifies the
    completion event and ``task_id`` the task itself.
    """

    id: str
    task_id: str
    content: str
    project_id: str = ""
    section_id: str = ""
    completed_at: datetime | None = None
    note_count: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> CompletedTask:
        return cls(
            id=str(d["id"]),
            task_id=_str_or_empty(d.get("task_id")),
            content=d.get("content", ""),
            project_id=_str_or_empty(d.get("project_id")),
            section_id=_str_or_empty(d.get("section_id")),
            completed_at=_parse_dt(d.get("completed_at")),
            note_count=d.get("note_count") or 0,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "task_id": self.task_id,
            "project_id": self.project_id,
            "section_id": self.section_id or None,
            "content": self.content,
            "completed_at": self.completed_at.isoformat() if self.completed_at else "",
            "note_count": self.note_count,
        }


@dataclass
class Project:
    id: str
    name: str
    order: int = 0
    color: str = ""
    is_shared: bool = False
    is_favorite: bool = False
    is_inbox_project: bool = False
    view_style: str = "list"  # list, board, calendar
    parent_id: str = ""
    creator_id: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Project:
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            order=d.get("child_order") or d.get("order") or 0,
            color=d.get("color", ""),
            is_shared=d.get("is_shared", False),
            is_favorite=d.get("is_favorite", False),
            is_inbox_project=d.get("inbox_project", d.get("is_inbox_project", False)),
            view_style=d.get("view_style", "list"),
            parent_id=_str_or_empty(d.get("parent_id")),
            creator_id=_str_or_empty(d.get("creator_uid")),
        )

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "child_order": self.order,
            "color": self.color,
            "is_shared": self.is_shared,
            "is_favorite": self.is_favorite,
            "inbox_project": self.is_inbox_project,
            "view_style": self.view_style,
        }
        if self.parent_id:
            d["parent_id"] = self.parent_id
        if self.creator_id:
            d["creator_uid"] = self.creator_id
        return d


@dataclass
class Label:
    id: str
    name: str
    color: str = ""
    order: int = 0
    is_favorite: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> Label:
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            color=d.get("color", ""),
            order=d.get("order") or 0,
            is_favorite=d.get("is_favorite", False),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "order": self.order,
            "is_favorite": self.is_favorite,
        }


@dataclass
class CreateTaskRequest:
    """Payload for ``POST /tasks``. ``priority`` is already on the API scale."""

    content: str
    description: str = ""
    project_id: str = ""
    section_id: str = ""
    parent_id: str = ""
    order: int = 0
    labels: list[str] = field(default_factory=list)
    priority: int = 0
    due_string: str = ""
    due_date: str = ""
    due_datetime: str = ""
    due_lang: str = ""
    assignee_id: str = ""
    deadline_date: str = ""

    def to_dict(self) -> dict:
        # Empty fields are left out so the API applies its own defaults.
        d = _drop_empty({
            "description": self.description,
            "project_id": self.project_id,
            "section_id": self.section_id,
            "parent_id": self.parent_id,
            "order": self.order,
            "labels": self.labels,
            "priority": self.priority,
            "due_string": self.due_string,
            "due_date": self.due_date,
            "due_datetime": self.due_datetime,
            "due_lang": self.due_lang,
            "assignee_id": self.assignee_id,
            "deadline_date": self.deadline_date,
        })
        return {"content": self.content, **d}


@dataclass
class CreateProjectRequest:
    name: str

    def to_dict(self) -> dict:
        return {"name": self.name}
