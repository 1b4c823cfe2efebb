# src/tdlite/render/table.py

"""
Plain-text tables aligned by visual width.

Layout:
    ID | CustomID | Name
    ---+----------+-----
    1  | api-001  | Create user API

Every line of a table has its `|` / `+` at the same columns. Rows are
printed in the order given.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..tasks.task_models import CategorySummary, Task
from .string_width import pad_end, string_width, truncate

T = TypeVar("T")

CELL_SEP = " | "
RULE_SEP = "-+-"

# C0/C1 control characters would break a row across lines.
_CONTROL = re.compile(r"[\x00-\x1f\x7f-\x9f]")


@dataclass(frozen=True)
class Column(Generic[T]):
    label: str
    value: Callable[[T], Any]
    min_width: int = 0
    # None = grow with content; otherwise overflowing cells are truncated.
    max_width: int | None = None


def _cell_text(raw: Any) -> str:
    if raw is None:
        return ""
    return _CONTROL.sub("", str(raw))


def _column_width(col: Column[Any], cells: list[str]) -> int:
    width = max([col.min_width, string_width(col.label), *(string_width(c) for c in cells)])
    if col.max_width is not None and col.max_width > 0:
        floor = max(col.min_width, string_width(col.label))
        width = min(width, max(col.max_width, floor))
    return width


def render_table(
    rows: Sequence[T],
    columns: Sequence[Column[T]],
    *,
    empty_message: str = "No data",
) -> list[str]:
    """
    Render `rows` as lines: header, rule, then one line per row.

    With no rows the result is the single `empty_message` line.
    """
    if not rows:
        return [empty_message]

    cells = [[_cell_text(col.value(row)) for col in columns] for row in rows]
    widths = [_column_width(col, [r[i] for r in cells]) for i, col in enumerate(columns)]

    def line(values: Sequence[str]) -> str:
        return CELL_SEP.join(
            pad_end(truncate(v, w), w) for v, w in zip(values, widths, strict=True)
        )

    out = [line([c.label for c in columns]), RULE_SEP.join("-" * w for w in widths)]
    out.extend(line(r) for r in cells)
    return out


def task_columns(max_width: int | None = None) -> list[Column[Task]]:
    return [
        Column("ID", lambda t: t.id, min_width=2),
        Column("CustomID", lambda t: t.custom_id, min_width=8, max_width=max_width),
        Column("Name", lambda t: t.name, min_width=4, max_width=max_width),
        Column("Description", lambda t: t.description, min_width=11, max_width=max_width),
        Column("Status", lambda t: t.status.value, min_width=6),
        Column("Comment", lambda t: t.comment, min_width=7, max_width=max_width),
    ]


def summary_columns() -> list[Column[CategorySummary]]:
    return [
        Column("Category", lambda s: s.category, min_width=8),
        Column("WIP", lambda s: s.wip_count, min_width=3),
        Column("Done", lambda s: s.done_count, min_width=4),
    ]


def task_table(tasks: Sequence[Task], category: str, *, max_width: int | None = None) -> list[str]:
    return render_table(
        tasks,
        task_columns(max_width),
        empty_message=f"No tasks found in category '{category}'",
    )


def status_table(summaries: Sequence[CategorySummary]) -> list[str]:
    return render_table(
        summaries,
        summary_columns(),
        empty_message="No tasks found in any category",
    )
