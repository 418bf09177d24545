# src/togo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a default; nothing is required to run.
- Paths live under the user's home directory (~/.togo) unless overridden.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TOGO"

STORAGE_BACKENDS = ("json", "sqlite")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Storage ----
    storage: str  # "json" | "sqlite"
    data_dir: Path
    tasks_file: Path
    tasks_db_path: Path

    # ---- Rendering ----
    time_locale: str | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "togo").strip() or "togo"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        storage = _env(_k("STORAGE"), "json").strip().lower() or "json"

        data_dir = _env_path(_k("DATA_DIR"), Path.home() / ".togo")
        tasks_file = _env_path(_k("TASKS_FILE"), data_dir / "tasks.json")
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.db")

        time_locale = _env(_k("TIME_LOCALE"), "").strip() or None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            storage=storage,
            data_dir=data_dir,
            tasks_file=tasks_file,
            tasks_db_path=tasks_db_path,
            time_locale=time_locale,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
