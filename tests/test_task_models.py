# tests/test_task_models.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from togo.errors import StorageError
from togo.tasks.task_models import (
    Task,
    TaskStatus,
    parse_timestamp,
    task_from_json,
    task_to_json,
)

TZ = timezone(timedelta(hours=-3))


def test_task_to_json_omits_done_at_when_pending() -> None:
    created = datetime(2025, 12, 21, 14, 30, tzinfo=TZ)
    task = Task(id=1, description="Buy milk", created_at=created)

    out = task_to_json(task)

    assert out == {
        "id": 1,
        "description": "Buy milk",
        "done": False,
        "createdAt": "2025-12-21T14:30:00-03:00",
    }
    assert "doneAt" not in out
    assert task.status is TaskStatus.PENDING


def test_task_from_json_done_task() -> None:
    task = task_from_json(
        {
            "id": 7,
            "description": "Ship it",
            "done": True,
            "createdAt": "2025-12-21T14:30:00-03:00",
            "doneAt": "2025-12-22T09:00:00-03:00",
        }
    )

    assert task.id == 7
    assert task.done is True
    assert task.status is TaskStatus.DONE
    assert task.done_at == datetime(2025, 12, 22, 9, 0, tzinfo=TZ)


def test_parse_timestamp_accepts_go_nanoseconds_and_zulu() -> None:
    a = parse_timestamp("2025-12-21T14:30:00.123456789-03:00")
    b = parse_timestamp("2025-12-21T17:30:00.123456Z")

    assert a.microsecond == 123456
    assert a == b


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"description": "no id", "done": False, "createdAt": "2025-12-21T14:30:00Z"},
        {"id": 0, "description": "zero id", "done": False, "createdAt": "2025-12-21T14:30:00Z"},
        {"id": True, "description": "bool id", "done": False, "createdAt": "2025-12-21T14:30:00Z"},
        {"id": 1, "description": 5, "done": False, "createdAt": "2025-12-21T14:30:00Z"},
        {"id": 1, "description": "x", "done": "yes", "createdAt": "2025-12-21T14:30:00Z"},
        {"id": 1, "description": "x", "done": False},
        {"id": 1, "description": "x", "done": False, "createdAt": "yesterday"},
        # done flag and doneAt must agree
        {"id": 1, "description": "x", "done": True, "createdAt": "2025-12-21T14:30:00Z"},
        {
            "id": 2,
            "description": "x",
            "done": False,
            "createdAt": "2025-12-21T14:30:00Z",
            "doneAt": "2025-12-22T09:00:00Z",
        },
        {"id": 3, "description": "x", "done": False, "createdAt": "2025-12-21T14:30:00Z", "doneAt": ""},
        # completed before it was created
        {
            "id": 4,
            "description": "x",
            "done": True,
            "createdAt": "2025-12-21T14:30:00Z",
            "doneAt": "2025-12-20T09:00:00Z",
        },
    ],
)
def test_task_from_json_rejects_malformed_records(raw) -> None:
    with pytest.raises(StorageError):
        task_from_json(raw)
