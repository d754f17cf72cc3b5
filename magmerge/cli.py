from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, NoReturn, Optional, Sequence

from . import config
from .app_services.combine_service import combine_folder
from .ui.presenters.report_presenter import format_report_lines

PROG = "magmerge-cli"
EXIT_OK = 0
EXIT_USAGE = 2
USAGE = f"Usage: {PROG} <folder>\n"

logger = logging.getLogger(__name__)


class _ParserExit(Exception):
    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


class _StreamArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage on a given stream and never calls sys.exit."""

    def __init__(self, err: IO[str], **kwargs) -> None:
        super().__init__(**kwargs)
        self._err = err

    def exit(self, status: int = 0, message: Optional[str] = None) -> NoReturn:
        if message:
            self._err.write(message)
        raise _ParserExit(status)

    def error(self, message: str) -> NoReturn:
        self.exit(EXIT_USAGE, USAGE)


def _build_parser(err: IO[str]) -> _StreamArgumentParser:
    parser = _StreamArgumentParser(
        err,
        prog=PROG,
        usage="%(prog)s <folder>",
        description="Combine 'Bead Positions' and 'Motor Positions' text files in a folder.",
        add_help=False,
    )
    parser.add_argument("folder", help="Folder containing the position .txt files.")
    return parser


def run_cli(argv: Sequence[str], out: IO[str], err: IO[str]) -> int:
    """
    Run the command line tool. `argv` includes the program name.

    Returns 2 on a wrong argument count or a non-folder argument, 0 otherwise
    (even when the report carries warnings or errors).
    """
    parser = _build_parser(err)
    try:
        # Everything after the program name is positional, even "-data"
        args = parser.parse_args(["--", *argv[1:]])
    except _ParserExit as exc:
        return exc.status

    folder = args.folder
    if not os.path.isdir(folder):
        err.write(f"Error: not a folder: {folder}\n")
        return EXIT_USAGE

    logger.info("Combining position files in %s", folder)
    report = combine_folder(folder)
    for line in format_report_lines(report):
        out.write(f"{line}\n")
    return EXIT_OK


def main() -> int:
    logging.basicConfig(
        level=config.log_level(config.CLI_DEFAULT_LOG_LEVEL),
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
        stream=sys.stderr,
    )
    rc = run_cli(sys.argv, sys.stdout, sys.stderr)
    sys.stdout.flush()
    sys.stderr.flush()
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
