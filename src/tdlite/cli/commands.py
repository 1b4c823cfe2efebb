# src/tdlite/cli/commands.py

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..render.table import status_table, task_table
from ..tasks import task_api
from ..tasks.task_store import TaskStore
from .bootstrap import init_database

CommandEmitter = Callable[[str], None]


class UsageError(Exception):
    """Wrong number or shape of command-line arguments."""


@dataclass(slots=True)
class CommandContext:
    settings: Any
    emit: CommandEmitter
    store: TaskStore | None = None

    @property
    def tasks(self) -> TaskStore:
        if self.store is None:
            raise RuntimeError("command was registered without a store")
        return self.store


CommandHandler = Callable[[CommandContext, list[str]], None]


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    usage: str
    help_text: str
    min_args: int
    max_args: int
    needs_store: bool = True

    def check_args(self, args: Sequence[str]) -> None:
        if not self.min_args <= len(args) <= self.max_args:
            raise UsageError(f"Usage: tdlite {self.usage}")


class CommandRegistry:
    """Sub-command registry used by the CLI entry point."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        *,
        usage: str,
        help_text: str,
        nargs: int | tuple[int, int],
        needs_store: bool = True,
    ) -> None:
        lo, hi = (nargs, nargs) if isinstance(nargs, int) else nargs
        self._commands[name.lower()] = Command(
            name=name.lower(),
            handler=handler,
            usage=usage,
            help_text=help_text,
            min_args=lo,
            max_args=hi,
            needs_store=needs_store,
        )

    def get(self, name: str) -> Command | None:
        return self._commands.get(name.lower())

    def build_help(self) -> str:
        width = max(len(c.usage) for c in self._commands.values())
        lines = [
            "tdlite - a local task tracker",
            "",
            "Usage:",
            "  tdlite <command> [arguments]",
            "",
            "Commands:",
        ]
        for cmd in self._commands.values():
            lines.append(f"  {cmd.usage.ljust(width)}  {cmd.help_text}")
        lines += [
            "",
            "Examples:",
            "  tdlite init",
            "  tdlite add backend '[{\"customId\": \"api-001\", \"name\": \"Create API\"}]'",
            "  tdlite get backend api-001",
            "  tdlite search backend API",
            "  tdlite done backend 1 \"Completed the API implementation\"",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


def _emit_json(ctx: CommandContext, data: Any) -> None:
    ctx.emit(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_init(ctx: CommandContext, args: list[str]) -> None:
    if any(a != "--force" for a in args):
        raise UsageError("Usage: tdlite init [--force]")
    force = "--force" in args

    path, initialized = init_database(ctx.settings, force=force)
    if not initialized:
        ctx.emit(f"Database already exists at: {path}")
        ctx.emit("Use '--force' to reinitialize the database")
    elif force:
        ctx.emit(f"tdlite database reinitialized at: {path}")
    else:
        ctx.emit(f"tdlite database initialized at: {path}")


def cmd_add(ctx: CommandContext, args: list[str]) -> None:
    category, raw_json = args
    n = task_api.add_tasks(ctx.tasks, category, raw_json)
    ctx.emit(f"Successfully upserted {n} tasks to category '{category}'")


def cmd_get(ctx: CommandContext, args: list[str]) -> None:
    category, identifier = args
    _emit_json(ctx, ctx.tasks.resolve_and_fetch(category, identifier).to_dict())


def cmd_search(ctx: CommandContext, args: list[str]) -> None:
    category, query = args
    _emit_json(ctx, [t.to_dict() for t in ctx.tasks.search(category, query)])


def cmd_list(ctx: CommandContext, args: list[str]) -> None:
    (category,) = args
    _emit_json(ctx, [t.to_dict() for t in ctx.tasks.list_by_category(category)])


def cmd_todo(ctx: CommandContext, args: list[str]) -> None:
    (category,) = args
    _emit_json(ctx, [t.to_dict() for t in ctx.tasks.list_by_category_and_status(category)])


def cmd_done(ctx: CommandContext, args: list[str]) -> None:
    category, raw_id, *rest = args
    task_id = task_api.mark_done(ctx.tasks, category, raw_id, rest[0] if rest else None)
    ctx.emit(f"Task {task_id} marked as done")


def cmd_wip(ctx: CommandContext, args: list[str]) -> None:
    category, raw_id, *rest = args
    task_id = task_api.mark_wip(ctx.tasks, category, raw_id, rest[0] if rest else None)
    ctx.emit(f"Task {task_id} marked as wip")


def cmd_remove(ctx: CommandContext, args: list[str]) -> None:
    category, raw_id = args
    task_id = ctx.tasks.delete(category, raw_id)
    ctx.emit(f"Task {task_id} removed successfully")


def cmd_show(ctx: CommandContext, args: list[str]) -> None:
    (category,) = args
    max_width = getattr(ctx.settings, "max_column_width", 0) or None
    for line in task_table(ctx.tasks.list_by_category(category), category, max_width=max_width):
        ctx.emit(line)


def cmd_status(ctx: CommandContext, args: list[str]) -> None:
    for line in status_table(ctx.tasks.status_summary()):
        ctx.emit(line)


registry.register(
    "init",
    cmd_init,
    usage="init [--force]",
    help_text="Initialize the database (required before first use)",
    nargs=(0, 1),
    needs_store=False,
)
registry.register(
    "add", cmd_add, usage="add <category> <jsonArray>", help_text="Upsert tasks to a category", nargs=2
)
registry.register(
    "get", cmd_get, usage="get <category> <id|customId>", help_text="Get a specific task", nargs=2
)
registry.register(
    "search",
    cmd_search,
    usage="search <category> <query>",
    help_text="Search tasks by customId, name, or description",
    nargs=2,
)
registry.register(
    "list", cmd_list, usage="list <category>", help_text="List all tasks in a category", nargs=1
)
registry.register(
    "todo", cmd_todo, usage="todo <category>", help_text='List tasks with status "wip"', nargs=1
)
registry.register(
    "done",
    cmd_done,
    usage="done <category> <id> [comment]",
    help_text="Mark a task as done",
    nargs=(2, 3),
)
registry.register(
    "wip",
    cmd_wip,
    usage="wip <category> <id> [comment]",
    help_text="Mark a task as work in progress",
    nargs=(2, 3),
)
registry.register(
    "remove", cmd_remove, usage="remove <category> <id>", help_text="Remove a task", nargs=2
)
registry.register(
    "show", cmd_show, usage="show <category>", help_text="Display tasks in table format", nargs=1
)
registry.register(
    "status",
    cmd_status,
    usage="status",
    help_text="Display wip/done counts per category",
    nargs=0,
)
