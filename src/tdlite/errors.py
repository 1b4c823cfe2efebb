# src/tdlite/errors.py

"""
Error taxonomy shared by the store and the CLI.

Each kind has a stable message prefix (so scripts can grep stderr) and
its own process exit code.
"""

from __future__ import annotations


class TdliteError(Exception):
    prefix = "Error:"
    exit_code = 1

    def __str__(self) -> str:
        detail = super().__str__()
        return f"{self.prefix} {detail}" if detail else self.prefix


class ValidationError(TdliteError):
    """Malformed input to an upsert batch."""

    prefix = "Invalid input:"
    exit_code = 3

    def __init__(self, message: str, issues: list[str] | None = None) -> None:
        super().__init__(message)
        self.issues = list(issues or [])

    def __str__(self) -> str:
        base = super().__str__()
        if not self.issues:
            return base
        return base + "\n" + "\n".join(f"  - {issue}" for issue in self.issues)


class InvalidIdentifier(TdliteError):
    prefix = "Invalid task ID"
    exit_code = 3

    def __init__(self, raw: str) -> None:
        super().__init__(repr(raw))
        self.raw = raw

    def __str__(self) -> str:
        return f"{self.prefix}: {self.raw!r}"


class NotFound(TdliteError):
    prefix = "Task not found:"
    exit_code = 4


class StoreError(TdliteError):
    """The SQLite file could not be opened, read or written."""

    prefix = "Store error:"
    exit_code = 5
