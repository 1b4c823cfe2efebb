# tests/test_task_ids.py

from __future__ import annotations

import pytest

from tdlite.tasks.task_ids import MAX_STORABLE_ID, NotNumeric, NumericId, try_parse_positive_int_id


@pytest.mark.parametrize(("raw", "value"), [("1", 1), ("42", 42), ("007", 7), ("123456789012", 123456789012)])
def test_accepts_positive_digit_strings(raw: str, value: int) -> None:
    assert try_parse_positive_int_id(raw) == NumericId(value)


@pytest.mark.parametrize(
    "raw",
    ["0", "000", "-1", "1.5", "1e2", "0xFF", "+1", "1a", "", "   ", " 1", "1 ", "١٢", "²"],
)
def test_rejects_everything_else(raw: str) -> None:
    assert try_parse_positive_int_id(raw) == NotNumeric(raw)


def test_storable_range() -> None:
    assert try_parse_positive_int_id(str(MAX_STORABLE_ID)).storable
    big = try_parse_positive_int_id("99999999999999999999")
    assert big == NumericId(99999999999999999999)
    assert not big.storable
