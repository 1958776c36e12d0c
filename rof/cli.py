"""
rof CLI
~~~~~~~

Command-line interface for rof.

Everything after ``rof`` is the command: arguments are joined with single
spaces and handed to the shell as one string, so there are no options of
rof's own. Settings come from ``$ROF_CONFIG`` or ``.rof.yaml``.
"""

from __future__ import annotations

import logging
import sys

from rof.config.loader import resolve_config
from rof.core.runner import Runner
from rof.core.state import EXIT_RESTORE_ABORTED
from rof.exceptions import ConfigError, GenerationMismatchError

__all__ = ["main"]

logger = logging.getLogger("rof")

_PROG = "rof"
_HANDLER_NAME = "rof-stderr"


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point. Always exits through ``sys.exit``."""
    args = sys.argv[1:] if argv is None else argv

    if not args:
        print(f"Usage: {_PROG} <command>", file=sys.stderr)
        sys.exit(1)

    command = " ".join(args)

    try:
        config = resolve_config()
    except ConfigError as exc:
        print(f"{_PROG}: {exc}", file=sys.stderr)
        sys.exit(1)

    _configure_logging(config.log_level_number)

    try:
        report = Runner(config).run(command)
    except GenerationMismatchError as exc:
        logger.critical("%s", exc)
        sys.exit(EXIT_RESTORE_ABORTED)

    sys.exit(report.exit_code)


def _configure_logging(level: int) -> None:
    """Send rof's diagnostics to the current stderr, once."""
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(f"{_PROG}: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


if __name__ == "__main__":
    main()
