# src/togo/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..errors import StorageError

# RFC3339Nano trims trailing zeros and may carry 9 digits; datetime wants exactly 6.
_FRACTION_RE = re.compile(r"\.(\d+)")


class TaskStatus(StrEnum):
    PENDING = "pending"
    DONE = "done"


@dataclass(slots=True)
class Task:
    """
    A single tracked task.

    Notes:
    - id is None only before the task has been inserted into a store.
    - done_at is set exactly when done is True.
    """

    id: int | None
    description: str
    created_at: datetime
    done: bool = False
    done_at: datetime | None = None

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.DONE if self.done else TaskStatus.PENDING


def now_local() -> datetime:
    return datetime.now().astimezone()


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp as written by this tool or by its earlier Go releases."""
    s = raw.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    s = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s)
    return datetime.fromisoformat(s)


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def check_task(task: Task) -> Task:
    """Reject a loaded task whose done flag and done_at disagree."""
    if task.done != (task.done_at is not None):
        raise StorageError(f"task {task.id} has done={task.done} but doneAt is {task.done_at}")
    if task.done_at is not None and task.done_at < task.created_at:
        raise StorageError(f"task {task.id} was completed before it was created")
    return task


def task_to_json(task: Task) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": task.id,
        "description": task.description,
        "done": task.done,
        "createdAt": format_timestamp(task.created_at),
    }
    if task.done_at is not None:
        out["doneAt"] = format_timestamp(task.done_at)
    return out


def task_from_json(raw: Any) -> Task:
    """Decode one persisted record; any shape problem is a StorageError."""
    if not isinstance(raw, dict):
        raise StorageError(f"task record must be an object, got {type(raw).__name__}")

    tid = raw.get("id")
    if not isinstance(tid, int) or isinstance(tid, bool) or tid <= 0:
        raise StorageError(f"task record has invalid id: {tid!r}")

    description = raw.get("description")
    if not isinstance(description, str):
        raise StorageError(f"task {tid} has invalid description")

    done = raw.get("done", False)
    if not isinstance(done, bool):
        raise StorageError(f"task {tid} has invalid done flag: {done!r}")

    try:
        created_at = parse_timestamp(str(raw["createdAt"]))
        done_at_raw = raw.get("doneAt")
        done_at = parse_timestamp(str(done_at_raw)) if done_at_raw is not None else None
    except (KeyError, ValueError) as e:
        raise StorageError(f"task {tid} has invalid timestamps") from e

    return check_task(
        Task(
            id=tid,
            description=description,
            created_at=created_at,
            done=done,
            done_at=done_at,
        )
    )
