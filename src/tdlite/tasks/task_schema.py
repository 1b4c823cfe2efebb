# src/tdlite/tasks/task_schema.py

"""
Schema initializer for the `tasks` table.

Migration-safe, same approach every time it runs:
- create table if missing
- use PRAGMA table_info to detect missing columns
- add columns with ALTER TABLE only when needed
- replace the legacy customId-only unique index with (customId, category)
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

UNIQUE_INDEX = "tasks_customId_category_unique"
_LEGACY_UNIQUE_INDEX = "tasks_customId_unique"


def ensure_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()

    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
            customId TEXT NOT NULL,
            category TEXT NOT NULL,
            name TEXT,
            description TEXT,
            status TEXT DEFAULT 'wip',
            comment TEXT,
            created_at INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
            updated_at INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
        )
        """
    )

    cur.execute("PRAGMA table_info(tasks)")
    cols = {row[1] for row in cur.fetchall()}

    def add_col(name: str, decl: str) -> None:
        if name in cols:
            return
        cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
        logger.info("Schema migration: added column %s", name)

    add_col("name", "TEXT")
    add_col("description", "TEXT")
    add_col("status", "TEXT DEFAULT 'wip'")
    add_col("comment", "TEXT")
    add_col("created_at", "INTEGER NOT NULL DEFAULT 0")
    add_col("updated_at", "INTEGER NOT NULL DEFAULT 0")

    cur.execute("PRAGMA index_list(tasks)")
    indexes = {row[1] for row in cur.fetchall()}
    if _LEGACY_UNIQUE_INDEX in indexes:
        cur.execute(f"DROP INDEX {_LEGACY_UNIQUE_INDEX}")
        logger.info("Schema migration: dropped legacy index %s", _LEGACY_UNIQUE_INDEX)

    cur.execute(
        f"CREATE UNIQUE INDEX IF NOT EXISTS {UNIQUE_INDEX} ON tasks (customId, category)"
    )
    conn.commit()
