"""Linemark CLI entry point.

Allows running via `python -m linemark` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .version import get_version_string

LOG_ENV_VAR = "LINEMARK_LOG"
USAGE = "usage: linemark [--version] [--log FILE] [filename]"


def _configure_logging(log_file: Optional[str]) -> None:
    # The editor owns the terminal, so logs only ever go to a file
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing to support version, a log file, and optional filename
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    log_file = os.environ.get(LOG_ENV_VAR)
    if args and args[0] == "--log":
        if len(args) < 2:
            print(USAGE, file=sys.stderr)
            return 2
        log_file = args[1]
        args = args[2:]
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2
    _configure_logging(log_file)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor, LoadError
    editor = Editor()
    if args:
        try:
            editor.load_file(args[0])
        except LoadError as e:
            print(f"linemark: {e.strerror}", file=sys.stderr)
            return 1
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
