# src/tdlite/tasks/task_ids.py

"""Strict parsing of user-supplied task ids."""

from __future__ import annotations

import re
from dataclasses import dataclass

_DIGITS = re.compile(r"[0-9]+")

# Largest value an SQLite INTEGER column can hold.
MAX_STORABLE_ID = 2**63 - 1


@dataclass(frozen=True, slots=True)
class NumericId:
    value: int

    @property
    def storable(self) -> bool:
        return self.value <= MAX_STORABLE_ID


@dataclass(frozen=True, slots=True)
class NotNumeric:
    raw: str


ParsedId = NumericId | NotNumeric


def try_parse_positive_int_id(raw: str) -> ParsedId:
    """
    Accept only ASCII digits whose integer value is > 0.

    Signs, whitespace, decimals, exponents, hex and non-ASCII digits are
    all rejected.
    """
    if not isinstance(raw, str) or not _DIGITS.fullmatch(raw):
        return NotNumeric(str(raw))
    value = int(raw)
    if value <= 0:
        return NotNumeric(raw)
    return NumericId(value)
