# tests/test_table.py

from __future__ import annotations

from dataclasses import dataclass

import pytest

from tdlite.render.string_width import string_width
from tdlite.render.table import Column, render_table, status_table, task_table
from tdlite.tasks.task_models import CategorySummary, Task, TaskStatus


def _task(i: int, custom_id: str, name: str | None = None, **kw) -> Task:
    return Task(
        id=i,
        custom_id=custom_id,
        category=kw.get("category", "cat"),
        name=name,
        description=kw.get("description"),
        status=kw.get("status", TaskStatus.WIP),
        comment=kw.get("comment"),
        created_at=0,
        updated_at=0,
    )


def _separator_columns(line: str, chars: str) -> list[int]:
    """Visual column of every separator char in `line`."""
    return [string_width(line[:i]) for i, ch in enumerate(line) if ch in chars]


def test_empty_rows_emit_single_line() -> None:
    assert task_table([], "backend") == ["No tasks found in category 'backend'"]
    assert status_table([]) == ["No tasks found in any category"]


@pytest.mark.parametrize("n", [1, 2, 7])
def test_line_count_is_rows_plus_two(n: int) -> None:
    tasks = [_task(i + 1, f"t-{i}", name="name\nwith newline") for i in range(n)]
    assert len(task_table(tasks, "cat")) == n + 2


def test_minimum_widths_and_layout() -> None:
    lines = task_table([_task(1, "a")], "cat")
    assert lines == [
        "ID | CustomID | Name | Description | Status | Comment",
        "---+----------+------+-------------+--------+--------",
        "1  | a        |      |             | wip    |        ",
    ]


def test_columns_grow_with_content() -> None:
    lines = task_table([_task(12345, "api-001", name="Create user API", comment="ok")], "cat")
    header, rule, row = lines
    assert header.startswith("ID    | CustomID | Name            |")
    assert row.startswith("12345 | api-001  | Create user API |")
    assert rule.startswith("------+----------+-----------------+")


def test_separators_align_with_wide_characters() -> None:
    tasks = [
        _task(1, "api-001", name="日本語のタスク", description="説明"),
        _task(22, "ui", name="plain", comment="完了 🚀", status=TaskStatus.DONE),
        _task(333, "ＦＵＬＬ", name=None, description="mixed 한국어 text"),
    ]
    header, rule, *rows = task_table(tasks, "cat")

    expected = _separator_columns(rule, "+")
    assert _separator_columns(header, "|") == expected
    for row in rows:
        assert _separator_columns(row, "|") == expected
        assert string_width(row) == string_width(rule)


def test_null_values_render_empty() -> None:
    (_, _, row) = task_table([_task(1, "a")], "cat")
    assert "None" not in row
    assert "null" not in row


def test_rows_are_not_reordered() -> None:
    tasks = [_task(3, "c"), _task(1, "a"), _task(2, "b")]
    rows = task_table(tasks, "cat")[2:]
    assert [r.split(" | ")[1].strip() for r in rows] == ["c", "a", "b"]


def test_max_width_truncates_free_text_columns() -> None:
    long_name = "x" * 50
    header, rule, row = task_table([_task(1, "a", name=long_name)], "cat", max_width=10)
    name_cell = row.split(" | ")[2]
    assert name_cell == "xxxxxxx..."
    assert _separator_columns(header, "|") == _separator_columns(rule, "+")


def test_max_width_never_cuts_below_header() -> None:
    (header, _, row) = task_table([_task(1, "a", description="y" * 40)], "cat", max_width=3)
    assert "Description" in header
    assert row.split(" | ")[3] == "y" * 8 + "..."


def test_status_table() -> None:
    lines = status_table([CategorySummary("backend", 3, 1), CategorySummary("フロント", 0, 12)])
    assert lines == [
        "Category | WIP | Done",
        "---------+-----+-----",
        "backend  | 3   | 1   ",
        "フロント | 0   | 12  ",
    ]


def test_render_table_generic_rows() -> None:
    @dataclass
    class Row:
        key: str
        value: int | None

    cols = [Column("Key", lambda r: r.key), Column("Value", lambda r: r.value, min_width=6)]
    assert render_table([Row("a", None), Row("bb", 10)], cols) == [
        "Key | Value ",
        "----+-------",
        "a   |       ",
        "bb  | 10    ",
    ]
    assert render_table([], cols, empty_message="nothing") == ["nothing"]
