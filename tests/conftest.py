# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from tdlite.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI and bootstrap.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep tests isolated and deterministic.
    """
    return SimpleNamespace(
        db_path=tmp_path / "tasks.db",
        db_filename="tasks.db",
        root_markers=["pyproject.toml"],
        max_column_width=0,
        log_level="WARNING",
        log_dir=None,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tmp_path: Path, clock: FakeClock) -> Iterator[TaskStore]:
    """Real SQLite store in a per-test file; its behaviour is what we test."""
    s = TaskStore(tmp_path / "tasks.db", clock=clock)
    try:
        yield s
    finally:
        s.close()

