# tests/test_commands.py

from __future__ import annotations

import pytest

from tdlite.cli.commands import CommandContext, CommandRegistry, UsageError, registry


def test_command_registry_routes_and_checks_arity() -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(ctx: CommandContext, args: list[str]) -> None:
        called.append(args)
        ctx.emit("ok")

    reg.register("Echo", handler, usage="echo <a> [b]", help_text="echo", nargs=(1, 2))

    cmd = reg.get("ECHO")
    assert cmd is not None
    cmd.check_args(["x"])
    cmd.check_args(["x", "y"])
    with pytest.raises(UsageError, match="Usage: tdlite echo <a> \\[b\\]"):
        cmd.check_args([])

    out: list[str] = []
    cmd.handler(CommandContext(settings=None, emit=out.append), ["x"])
    assert called == [["x"]]
    assert out == ["ok"]
    assert reg.get("nope") is None


def test_builtin_registry_lists_every_command() -> None:
    help_text = registry.build_help()
    for usage in (
        "init [--force]",
        "add <category> <jsonArray>",
        "get <category> <id|customId>",
        "done <category> <id> [comment]",
        "status",
    ):
        assert usage in help_text
    init = registry.get("init")
    assert init is not None and not init.needs_store


def test_context_without_store_refuses_store_access() -> None:
    ctx = CommandContext(settings=None, emit=print)
    with pytest.raises(RuntimeError):
        _ = ctx.tasks
