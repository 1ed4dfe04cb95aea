"""Unit tests for todoist_cli.models."""

from __future__ import annotations

from datetime import datetime, timezone

from todoist_cli.models import (
    _parse_dt,
    CompletedTask,
    CreateProjectRequest,
    CreateTaskRequest,
    Deadline,
    Due,
    Duration,
    Label,
    Project,
    Task,
)


# ---------------------------------------------------------------------------
# _parse_dt
# ---------------------------------------------------------------------------

def test_parse_dt_zulu():
    result = _parse_dt("2024-03-15T10:30:00Z")
    assert result == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)


def test_parse_dt_microseconds():
    result = _parse_dt("2024-03-15T10:30:00.123456Z")
    assert result is not None
    assert result.microsecond == 123456


def test_parse_dt_empty_and_invalid():
    assert _parse_dt(None) is None
    assert _parse_dt("") is None
    assert _parse_dt("not-a-date") is None


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------

FULL_TASK = {
    "id": "2995104339",
    "project_id": "2203306141",
    "section_id": "7025",
    "content": "Buy Milk",
    "description": "Whole milk",
    "checked": False,
    "labels": ["Food", "Shopping"],
    "parent_id": None,
    "child_order": 1,
    "priority": 4,
    "due": {
        "string": "tomorrow at 12",
        "date": "2016-09-01",
        "is_recurring": False,
        "datetime": "2016-09-01T12:00:00.000000Z",
        "timezone": "Europe/Moscow",
    },
    "deadline": {"date": "2016-09-10"},
    "duration": {"amount": 15, "unit": "minute"},
    "note_count": 2,
    "added_by_uid": "2671355",
    "added_at": "2019-12-11T22:36:50.000000Z",
    "responsible_uid": "2671362",
    "assigned_by_uid": "2671355",
}


def test_task_from_dict_full():
    task = Task.from_dict(FULL_TASK)
    assert task.id == "2995104339"
    assert task.project_id == "2203306141"
    assert task.section_id == "7025"
    assert task.description == "Whole milk"
    assert task.labels == ["Food", "Shopping"]
    assert task.parent_id == ""
    assert task.order == 1
    assert task.priority == 4
    assert task.priority_label == "P1"
    assert task.due == Due(
        date="2016-09-01",
        string="tomorrow at 12",
        datetime="2016-09-01T12:00:00.000000Z",
        timezone="Europe/Moscow",
    )
    assert task.deadline == Deadline(date="2016-09-10")
    assert task.duration == Duration(amount=15, unit="minute")
    assert task.note_count == 2
    assert task.creator_id == "2671355"
    assert task.created_at == datetime(2019, 12, 11, 22, 36, 50, tzinfo=timezone.utc)
    assert task.assignee_id == "2671362"


def test_task_from_dict_minimal():
    task = Task.from_dict({"id": 7, "content": "x"})
    assert task.id == "7"
    assert task.labels == []
    assert task.due is None
    assert task.priority == 1
    assert task.priority_label == "P4"


def test_task_from_dict_null_numbers_use_defaults():
    task = Task.from_dict({"id": "1", "content": "x", "priority": None, "note_count": None, "child_order": None})
    assert task.priority == 1
    assert task.priority_label == "P4"
    assert task.note_count == 0
    assert task.order == 0


def test_task_to_dict_uses_api_keys():
    d = Task.from_dict(FULL_TASK).to_dict()
    assert d["child_order"] == 1
    assert d["checked"] is False
    assert d["due"]["date"] == "2016-09-01"
    assert d["duration"] == {"amount": 15, "unit": "minute"}
    assert d["added_by_uid"] == "2671355"
    assert "parent_id" not in d


def test_task_round_trip():
    task = Task.from_dict(FULL_TASK)
    assert Task.from_dict(task.to_dict()) == task


# ---------------------------------------------------------------------------
# CompletedTask / Project / Label
# ---------------------------------------------------------------------------

def test_completed_task_from_dict():
    t = CompletedTask.from_dict({
        "id": "c1",
        "task_id": "t1",
        "project_id": "p1",
        "section_id": None,
        "content": "Done thing",
        "completed_at": "2024-05-01T08:00:00Z",
        "note_count": 0,
    })
    assert t.task_id == "t1"
    assert t.section_id == ""
    assert t.completed_at == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
    assert t.to_dict()["section_id"] is None


def test_project_from_dict():
    p = Project.from_dict({
        "id": "220474322",
        "name": "Inbox",
        "child_order": 0,
        "color": "grey",
        "is_shared": False,
        "is_favorite": True,
        "inbox_project": True,
        "view_style": "list",
    })
    assert p.name == "Inbox"
    assert p.is_favorite
    assert p.is_inbox_project
    assert p.to_dict()["inbox_project"] is True


def test_label_from_dict():
    label = Label.from_dict({"id": "1", "name": "Food", "color": "charcoal", "order": 1, "is_favorite": False})
    assert label == Label(id="1", name="Food", color="charcoal", order=1)
    assert Label.from_dict(label.to_dict()) == label


# ---------------------------------------------------------------------------
# Create requests
# ---------------------------------------------------------------------------

def test_create_task_request_omits_empty_fields():
    assert CreateTaskRequest(content="Buy milk").to_dict() == {"content": "Buy milk"}


def test_create_task_request_includes_set_fields():
    req = CreateTaskRequest(
        content="Review PR",
        project_id="p1",
        labels=["dev", "urgent"],
        priority=4,
        due_string="tomorrow",
    )
    assert req.to_dict() == {
        "content": "Review PR",
        "project_id": "p1",
        "labels": ["dev", "urgent"],
        "priority": 4,
        "due_string": "tomorrow",
    }


def test_create_project_request():
    assert CreateProjectRequest(name="Work").to_dict() == {"name": "Work"}
