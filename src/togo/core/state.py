# src/togo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.task_service import TaskService
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are kept on the state for easy access by command handlers.
    settings: Settings
    store: TaskRepo
    tasks: TaskService
