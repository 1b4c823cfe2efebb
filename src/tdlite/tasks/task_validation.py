# src/tdlite/tasks/task_validation.py

"""
Validation of the JSON payload accepted by `tdlite add`.

`parse_task_batch` never raises for bad input: it returns either
`BatchParsed` (typed items, ready for the store) or `BatchRejected`
(human-readable issues). Nothing here touches the database.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .task_models import TaskInput

logger = logging.getLogger(__name__)

_BATCH = TypeAdapter(list[TaskInput])


@dataclass(frozen=True, slots=True)
class BatchParsed:
    items: list[TaskInput]


@dataclass(frozen=True, slots=True)
class BatchRejected:
    issues: list[str] = field(default_factory=list)


BatchResult = BatchParsed | BatchRejected


def _format_issue(err: dict[str, Any]) -> str:
    loc = err.get("loc") or ()
    where = ".".join(str(p) for p in loc) or "<root>"
    return f"[{where}] {err.get('msg', 'invalid value')}"


def parse_task_batch(raw: str | bytes | Any) -> BatchResult:
    """
    Decode (when given text) and validate a batch of task records.

    The top-level value must be a JSON array; each element must be an
    object with a non-empty string `customId`.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return BatchRejected([f"Invalid JSON: {e}"])
    else:
        data = raw

    if not isinstance(data, list):
        return BatchRejected([f"Expected a JSON array of tasks, got {type(data).__name__}"])

    try:
        items = _BATCH.validate_python(data)
    except PydanticValidationError as e:
        issues = [_format_issue(err) for err in e.errors()]
        logger.debug("Rejected batch of %d item(s): %s", len(data), issues)
        return BatchRejected(issues)

    return BatchParsed(items)
