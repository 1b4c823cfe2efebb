# src/tdlite/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- locates the project root and the database file,
- opens the TaskStore for one command,
- creates / migrates the database for `tdlite init`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from ..errors import StoreError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def find_project_root(start: Path, markers: list[str]) -> Path | None:
    """Walk up from `start` to the first directory holding any marker."""
    current = start.resolve()
    for directory in (current, *current.parents):
        if any((directory / m).exists() for m in markers):
            return directory
    return None


def resolve_db_path(settings, *, cwd: Path | None = None) -> Path:
    explicit = getattr(settings, "db_path", None)
    if explicit:
        return Path(explicit)

    start = cwd if cwd is not None else Path.cwd()
    markers = list(settings.root_markers)
    root = find_project_root(start, markers)
    if root is None:
        raise StoreError(
            f"could not find project root from {start} (looked for: {', '.join(markers)})"
        )
    return root / settings.db_filename


def open_store(
    settings,
    *,
    cwd: Path | None = None,
    clock: Callable[[], float] = time.time,
) -> TaskStore:
    """Open the existing database; `tdlite init` must have created it."""
    path = resolve_db_path(settings, cwd=cwd)
    if not path.exists():
        raise StoreError(f"database not found at {path}. Run 'tdlite init' to initialize it.")
    return TaskStore(path, clock=clock)


def init_database(settings, *, force: bool = False, cwd: Path | None = None) -> tuple[Path, bool]:
    """
    Create (or with `force`, re-migrate) the database.

    Returns (path, initialized). An existing database is left untouched
    unless `force` is set; existing rows are always kept.
    """
    path = resolve_db_path(settings, cwd=cwd)
    if path.exists() and not force:
        logger.info("Database already exists at %s", path)
        return path, False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreError(f"cannot create directory {path.parent}: {e}") from e

    with TaskStore(path) as store:
        logger.info("Database initialized at %s (tasks=%d)", path, store.count_tasks())
    return path, True
