# tests/fakes.py

from __future__ import annotations

from tdlite.tasks.task_models import TaskInput


class FakeClock:
    """
    Deterministic clock for TaskStore tests.

    Time only moves when the test calls `advance`, so created/updated
    timestamps can be asserted exactly.
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> float:
        self.now += seconds
        return self.now


def make_input(custom_id: str, **fields) -> TaskInput:
    """Build a validated TaskInput the way `tdlite add` would."""
    return TaskInput.model_validate({"customId": custom_id, **fields})
