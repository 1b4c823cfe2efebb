# src/tdlite/tasks/task_api.py

from __future__ import annotations

import logging

from ..errors import ValidationError
from .task_models import TaskStatus
from .task_store import TaskStore
from .task_validation import BatchRejected, parse_task_batch

logger = logging.getLogger(__name__)


def add_tasks(store: TaskStore, category: str, raw_json: str) -> int:
    """
    Validate a JSON array of tasks and upsert it into `category`.

    The whole batch is validated first; nothing is written if any
    element is rejected.
    """
    result = parse_task_batch(raw_json)
    if isinstance(result, BatchRejected):
        raise ValidationError("task batch rejected", result.issues)

    count = store.upsert_batch(category, result.items)
    logger.info("Upserted %d task(s) into category=%s", count, category)
    return count


def mark_done(store: TaskStore, category: str, raw_id: str, comment: str | None = None) -> int:
    return store.set_status(category, raw_id, TaskStatus.DONE, comment)


def mark_wip(store: TaskStore, category: str, raw_id: str, comment: str | None = None) -> int:
    return store.set_status(category, raw_id, TaskStatus.WIP, comment)
