# tests/test_task_format.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from togo.tasks.task_format import (
    EMPTY_LIST_MESSAGE,
    GLYPH_DONE,
    GLYPH_PENDING,
    RULE_HEAVY,
    RULE_LIGHT,
    cleared_message,
    format_date,
    render_task,
    render_task_list,
)
from togo.tasks.task_models import Task

TZ = timezone(timedelta(hours=-3))
CREATED = datetime(2025, 12, 21, 14, 30, 59, tzinfo=TZ)


def test_format_date() -> None:
    assert format_date(CREATED) == "21 Dec 2025 14:30"
    assert format_date(datetime(2026, 3, 5, 9, 7, tzinfo=TZ)) == "05 Mar 2026 09:07"


def test_render_pending_task() -> None:
    text = render_task(Task(id=3, description="Buy milk", created_at=CREATED))

    assert text.splitlines() == [
        f"[3] {GLYPH_PENDING} Buy milk",
        "    Created: 21 Dec 2025 14:30",
    ]


def test_render_done_task_shows_completion() -> None:
    task = Task(
        id=4,
        description="Pay rent",
        created_at=CREATED,
        done=True,
        done_at=CREATED + timedelta(days=1, minutes=5),
    )

    lines = render_task(task).splitlines()

    assert lines[0] == f"[4] {GLYPH_DONE} Pay rent"
    assert lines[2] == "    Done: 22 Dec 2025 14:35"


def test_render_task_list() -> None:
    tasks = [
        Task(id=1, description="a", created_at=CREATED),
        Task(id=2, description="b", created_at=CREATED),
    ]

    lines = render_task_list(tasks).splitlines()

    assert lines[0] == "Tasks:"
    assert lines[1] == RULE_HEAVY
    assert lines.count(RULE_LIGHT) == 2
    assert lines[-1] == RULE_LIGHT


def test_render_empty_list() -> None:
    assert render_task_list([]) == EMPTY_LIST_MESSAGE


def test_cleared_message_pluralizes() -> None:
    assert cleared_message(1).endswith("1 task.")
    assert cleared_message(0).endswith("0 tasks.")
