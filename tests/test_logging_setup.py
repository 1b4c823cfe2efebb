# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from tdlite.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_console_filter_and_file_log(tmp_path: Path, capsys, restore_root_logging) -> None:
    setup_logging(console_level=logging.INFO, log_dir=tmp_path / "logs")

    logging.getLogger("tdlite.tasks.task_store").info("store message")
    logging.getLogger("somelib").warning("library chatter")
    logging.getLogger("somelib").error("library failure")

    err = capsys.readouterr().err
    assert "store message" in err
    assert "library chatter" not in err
    assert "library failure" in err

    for h in logging.getLogger().handlers:
        h.flush()
    log_text = (tmp_path / "logs" / "tdlite.log").read_text("utf-8")
    assert "store message" in log_text
    assert "library chatter" in log_text
