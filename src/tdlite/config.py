# src/tdlite/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole process.
- Every consumer also accepts an injected settings object (tests).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TDLITE"

DEFAULT_DB_FILENAME = "tasks.db"
DEFAULT_ROOT_MARKERS = ["pyproject.toml", "setup.py", "package.json", ".git"]


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str
    log_dir: Path | None

    # ---- Database location ----
    db_path: Path | None
    db_filename: str
    root_markers: list[str]

    # ---- Table rendering ----
    max_column_width: int

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR")),
            db_path=_env_path(_k("DB_PATH")),
            db_filename=_env(_k("DB_FILENAME"), DEFAULT_DB_FILENAME) or DEFAULT_DB_FILENAME,
            root_markers=_env_list(_k("ROOT_MARKERS"), DEFAULT_ROOT_MARKERS),
            max_column_width=max(0, _env_int(_k("MAX_COLUMN_WIDTH"), 0)),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
