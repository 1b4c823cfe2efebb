# src/tdlite/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from types import TracebackType

from ..errors import InvalidIdentifier, NotFound, StoreError, ValidationError
from .task_ids import NumericId, try_parse_positive_int_id
from .task_models import CategorySummary, Task, TaskInput, TaskStatus
from .task_schema import ensure_schema

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

_COLUMNS = "id, customId, category, name, description, status, comment, created_at, updated_at"

# Anything but 'done' (NULL, or values written by other tools) reads as wip,
# matching TaskStatus.from_db.
_IS_DONE = "COALESCE(status = 'done', 0)"


def escape_like(term: str, escape_char: str = LIKE_ESCAPE) -> str:
    """Make `%`, `_` and the escape char itself match literally in LIKE."""
    s = term.replace(escape_char, escape_char + escape_char)
    s = s.replace("%", escape_char + "%")
    return s.replace("_", escape_char + "_")


@contextlib.contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as e:
        logger.debug("SQLite failure while trying to %s", action, exc_info=True)
        raise StoreError(f"failed to {action}: {e}") from e


class TaskStore:
    """
    SQLite task store.

    One connection per store instance: open it once per command (or per
    test), then `close()` it, or use the store as a context manager.
    The schema is created/migrated on open.

    `clock` returns the current time in seconds; timestamps are stored as
    whole seconds.
    """

    def __init__(
        self,
        db_path: str | Path = ":memory:",
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = str(db_path)
        self._clock = clock
        self._conn: sqlite3.Connection | None = None

        with _store_errors(f"open database {self._db_path}"):
            conn = sqlite3.connect(self._db_path)
            conn.row_factory = sqlite3.Row
            try:
                ensure_schema(conn)
            except BaseException:
                conn.close()
                raise
            self._conn = conn

        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    def close(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.close()
        finally:
            self._conn = None
            logger.debug("TaskStore closed db=%s", self._db_path)

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ---- low-level helpers ----

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError(f"database {self._db_path} is closed")
        return self._conn

    def _now(self) -> int:
        return int(self._clock())

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            custom_id=str(row["customId"]),
            category=str(row["category"]),
            name=row["name"],
            description=row["description"],
            status=TaskStatus.from_db(row["status"]),
            comment=row["comment"],
            created_at=int(row["created_at"] or 0),
            updated_at=int(row["updated_at"] or 0),
        )

    @staticmethod
    def _require_id(category: str, raw_id: str) -> int:
        parsed = try_parse_positive_int_id(raw_id)
        if not isinstance(parsed, NumericId):
            raise InvalidIdentifier(raw_id)
        if not parsed.storable:
            # Well-formed, but larger than any id SQLite can assign.
            raise NotFound(f"no task with id {parsed.value} in category {category!r}")
        return parsed.value

    # ---- public API ----

    def count_tasks(self) -> int:
        with _store_errors("count tasks"):
            (n,) = self.conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def upsert_batch(self, category: str, items: Iterable[TaskInput]) -> int:
        """
        Insert each item, or update the row with the same (customId, category).

        Items are applied in order, so a repeated customId ends up with the
        last entry's values. The batch runs in one transaction: either every
        item is written or none is.
        """
        now = self._now()
        count = 0
        with _store_errors(f"upsert tasks into category {category!r}"), self.conn as conn:
            for item in items:
                conn.execute(
                    """
                    INSERT INTO tasks(
                        customId, category, name, description, status, comment,
                        created_at, updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(customId, category) DO UPDATE SET
                        name = excluded.name,
                        description = excluded.description,
                        status = excluded.status,
                        comment = excluded.comment,
                        updated_at = MAX(tasks.created_at, excluded.updated_at)
                    """,
                    (
                        item.custom_id,
                        category,
                        item.name,
                        item.description,
                        item.effective_status.value,
                        item.effective_comment,
                        now,
                        now,
                    ),
                )
                count += 1
        logger.debug("Upserted %d task(s) category=%s", count, category)
        return count

    def resolve_and_fetch(self, category: str, identifier: str) -> Task:
        """
        Find a task in `category` by numeric id or by customId.

        A positive all-digit identifier matches either `id` or `customId`
        (an `id` match wins); anything else, including digit strings too
        large for an SQLite INTEGER, matches `customId` only.
        """
        parsed = try_parse_positive_int_id(identifier)
        with _store_errors("fetch task"):
            if isinstance(parsed, NumericId) and parsed.storable:
                row = self.conn.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM tasks
                    WHERE category = ?
                      AND (id = ? OR customId = ?)
                    ORDER BY (id = ?) DESC, id ASC
                        LIMIT 1
                    """,
                    (category, parsed.value, identifier, parsed.value),
                ).fetchone()
            else:
                row = self.conn.execute(
                    f"SELECT {_COLUMNS} FROM tasks WHERE category = ? AND customId = ?",
                    (category, identifier),
                ).fetchone()

        if row is None:
            kind = "id" if isinstance(parsed, NumericId) else "customId"
            raise NotFound(f"no task with {kind} {identifier!r} in category {category!r}")
        return self._row_to_task(row)

    def list_by_category(self, category: str) -> list[Task]:
        with _store_errors("list tasks"):
            rows = self.conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE category = ? ORDER BY id ASC",
                (category,),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def list_by_category_and_status(
        self, category: str, status: TaskStatus | str = TaskStatus.WIP
    ) -> list[Task]:
        status = self._coerce_status(status)
        with _store_errors("list tasks"):
            rows = self.conn.execute(
                f"""
                SELECT {_COLUMNS}
                FROM tasks
                WHERE category = ?
                  AND {_IS_DONE} = ?
                ORDER BY id ASC
                """,
                (category, int(status is TaskStatus.DONE)),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def set_status(
        self,
        category: str,
        raw_id: str,
        new_status: TaskStatus | str,
        comment: str | None = None,
    ) -> int:
        """
        Set status (and comment) of the task `raw_id` in `category`.

        An empty or missing comment clears the stored one. Returns the id.
        """
        task_id = self._require_id(category, raw_id)
        new_status = self._coerce_status(new_status)
        now = self._now()

        with _store_errors(f"update task {task_id}"), self.conn as conn:
            cur = conn.execute(
                """
                UPDATE tasks
                SET status = ?,
                    comment = ?,
                    updated_at = MAX(created_at, ?)
                WHERE category = ?
                  AND id = ?
                """,
                (new_status.value, comment or None, now, category, task_id),
            )
            changed = cur.rowcount

        if changed == 0:
            raise NotFound(f"no task with id {task_id} in category {category!r}")
        logger.debug("Task status id=%s category=%s status=%s", task_id, category, new_status)
        return task_id

    def delete(self, category: str, raw_id: str) -> int:
        task_id = self._require_id(category, raw_id)

        with _store_errors(f"delete task {task_id}"), self.conn as conn:
            cur = conn.execute(
                "DELETE FROM tasks WHERE category = ? AND id = ?",
                (category, task_id),
            )
            changed = cur.rowcount

        if changed == 0:
            raise NotFound(f"no task with id {task_id} in category {category!r}")
        logger.debug("Task deleted id=%s category=%s", task_id, category)
        return task_id

    def search(self, category: str, query: str) -> list[Task]:
        """
        Substring search over customId, name and description.

        `%` and `_` in `query` are literal. Matching is case-insensitive
        for ASCII letters (SQLite LIKE).
        """
        pattern = f"%{escape_like(query)}%"
        with _store_errors("search tasks"):
            rows = self.conn.execute(
                f"""
                SELECT {_COLUMNS}
                FROM tasks
                WHERE category = ?
                  AND (
                    customId LIKE ? ESCAPE ?
                        OR name LIKE ? ESCAPE ?
                        OR description LIKE ? ESCAPE ?
                    )
                ORDER BY id ASC
                """,
                (category, pattern, LIKE_ESCAPE, pattern, LIKE_ESCAPE, pattern, LIKE_ESCAPE),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def status_summary(self) -> list[CategorySummary]:
        """wip/done counts for every category in the store (zeros included)."""
        with _store_errors("summarize tasks"):
            rows = self.conn.execute(
                f"""
                SELECT category,
                       SUM(CASE WHEN {_IS_DONE} THEN 0 ELSE 1 END) AS wip_count,
                       SUM(CASE WHEN {_IS_DONE} THEN 1 ELSE 0 END) AS done_count
                FROM tasks
                GROUP BY category
                ORDER BY category ASC
                """
            ).fetchall()
        return [
            CategorySummary(
                category=str(r["category"]),
                wip_count=int(r["wip_count"] or 0),
                done_count=int(r["done_count"] or 0),
            )
            for r in rows
        ]

    @staticmethod
    def _coerce_status(status: TaskStatus | str) -> TaskStatus:
        try:
            return TaskStatus(status)
        except ValueError:
            raise ValidationError(f"status must be 'wip' or 'done', got {status!r}") from None
