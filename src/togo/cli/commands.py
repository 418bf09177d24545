# src/togo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..errors import UsageError
from ..tasks.task_format import (
    cleared_message,
    completed_message,
    created_message,
    deleted_message,
    edited_message,
    render_task_list,
)

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Subcommand registry used by the entry point (create, list, done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._usage: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._usage[key] = usage or key
        self._aliases[key] = list(aliases)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._help)

    def handle(self, state: AppState, argv: list[str]) -> str:
        """
        Dispatch ["command", *args] to its handler and return the text to print.
        Failures are raised as TogoError subclasses.
        """
        if not argv:
            return self.build_help()

        name = argv[0].lower()
        args = argv[1:]

        handler = self._handlers.get(name)
        if not handler:
            raise UsageError(f"unknown command: {argv[0]}. Use 'help' to list available commands.")

        logger.debug("Dispatching command=%s nargs=%d", name, len(args))
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Usage: togo <command> [arguments]", "", "Available commands:"]
        width = max((len(u) for u in self._usage.values()), default=0)
        for name, help_text in self._help.items():
            line = f"  {self._usage[name].ljust(width)}  - {help_text}"
            if self._aliases[name]:
                line += f" (aliases: {', '.join(self._aliases[name])})"
            lines.append(line)
        return "\n".join(lines)


registry = CommandRegistry()


def _expect_args(command: str, args: list[str], count: int) -> None:
    if len(args) != count:
        raise UsageError(
            f"'{command}' takes exactly {count} argument{'s' if count != 1 else ''}, "
            f"got {len(args)}"
        )


def _parse_id(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise UsageError(f"ID must be a number, got '{raw}'") from None
    if value <= 0:
        raise UsageError(f"ID must be a positive number, got '{raw}'")
    return value


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_create(state: AppState, args: list[str]) -> str:
    _expect_args("create", args, 1)
    task = state.tasks.create(args[0])
    return created_message(task)


def cmd_list(state: AppState, args: list[str]) -> str:
    _expect_args("list", args, 0)
    return render_task_list(state.tasks.list_tasks())


def cmd_done(state: AppState, args: list[str]) -> str:
    _expect_args("done", args, 1)
    task = state.tasks.complete(_parse_id(args[0]))
    return completed_message(task)


def cmd_edit(state: AppState, args: list[str]) -> str:
    _expect_args("edit", args, 2)
    task = state.tasks.edit(_parse_id(args[0]), args[1])
    return edited_message(task)


def cmd_delete(state: AppState, args: list[str]) -> str:
    _expect_args("delete", args, 1)
    task_id = _parse_id(args[0])
    state.tasks.delete(task_id)
    return deleted_message(task_id)


def cmd_clear(state: AppState, args: list[str]) -> str:
    _expect_args("clear", args, 0)
    return cleared_message(state.tasks.clear())


registry.register("create", cmd_create, help_text="Create a new task.", usage="create <description>")
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register(
    "done", cmd_done, help_text="Mark a task as done.", usage="done <id>", aliases=["complete"]
)
registry.register(
    "edit", cmd_edit, help_text="Change a task's description.", usage="edit <id> <description>"
)
registry.register("delete", cmd_delete, help_text="Delete a task.", usage="delete <id>", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("help", cmd_help, help_text="Show available commands.", aliases=["-h", "--help"])
