# src/togo/tasks/task_format.py

"""Plain-text rendering of tasks for the terminal."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .task_models import Task

DATE_FORMAT = "%d %b %Y %H:%M"

GLYPH_PENDING = "⏳"
GLYPH_DONE = "✓"

RULE_HEAVY = "=" * 50
RULE_LIGHT = "-" * 50

EMPTY_LIST_MESSAGE = "No tasks found. Use 'create' to add one."


def format_date(value: datetime) -> str:
    """e.g. "21 Dec 2025 14:30" (month name follows the LC_TIME locale)."""
    return value.strftime(DATE_FORMAT)


def status_glyph(task: Task) -> str:
    return GLYPH_DONE if task.done else GLYPH_PENDING


def render_task(task: Task) -> str:
    lines = [
        f"[{task.id}] {status_glyph(task)} {task.description}",
        f"    Created: {format_date(task.created_at)}",
    ]
    if task.done_at is not None:
        lines.append(f"    Done: {format_date(task.done_at)}")
    return "\n".join(lines)


def render_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return EMPTY_LIST_MESSAGE
    lines = ["Tasks:", RULE_HEAVY]
    for t in tasks:
        lines.append(render_task(t))
        lines.append(RULE_LIGHT)
    return "\n".join(lines)


def created_message(task: Task) -> str:
    return f"{GLYPH_DONE} Task created! ID: {task.id} | '{task.description}'"


def completed_message(task: Task) -> str:
    return f"{GLYPH_DONE} Task {task.id} marked as done!"


def edited_message(task: Task) -> str:
    return f"{GLYPH_DONE} Task {task.id} updated: '{task.description}'"


def deleted_message(task_id: int) -> str:
    return f"{GLYPH_DONE} Task {task_id} deleted!"


def cleared_message(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"{GLYPH_DONE} Cleared {count} {noun}."
