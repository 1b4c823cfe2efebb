# src/tdlite/cli/main.py

"""
CLI entrypoint.

One process per command: parse argv, open the store (when the command
needs it), run the handler, close the store on every exit path, and map
errors to exit codes.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable, Sequence

from ..config import get_settings
from ..errors import TdliteError
from ..logging_setup import setup_logging
from .bootstrap import open_store
from .commands import CommandContext, CommandEmitter, UsageError, registry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_USAGE = 2

_HELP_FLAGS = {"help", "-h", "--help"}


def _stderr(line: str) -> None:
    print(line, file=sys.stderr)


def main(
    argv: Sequence[str] | None = None,
    *,
    settings=None,
    emit: CommandEmitter = print,
    clock: Callable[[], float] = time.time,
) -> int:
    """Run one command and return the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    if settings is None:
        settings = get_settings()

    if not args or args[0] in _HELP_FLAGS:
        emit(registry.build_help())
        return EXIT_OK

    name, params = args[0], args[1:]
    command = registry.get(name)
    if command is None:
        _stderr(f"Unknown command: {name}")
        _stderr(registry.build_help())
        return EXIT_USAGE

    logger.debug("Running command=%s args=%d", command.name, len(params))
    try:
        command.check_args(params)
        if command.needs_store:
            with open_store(settings, clock=clock) as store:
                command.handler(CommandContext(settings, emit, store), params)
        else:
            command.handler(CommandContext(settings, emit), params)
    except UsageError as e:
        _stderr(str(e))
        return EXIT_USAGE
    except TdliteError as e:
        logger.debug("Command %s failed: %s", command.name, type(e).__name__)
        _stderr(str(e))
        return e.exit_code
    except Exception as e:
        logger.exception("Unexpected error in command %s", command.name)
        _stderr(f"Unexpected error: {e}")
        return EXIT_UNEXPECTED

    return EXIT_OK


def run() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(console_level=console_level, log_dir=settings.log_dir)

    sys.exit(main(settings=settings))


if __name__ == "__main__":
    run()
