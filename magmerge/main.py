from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from . import config

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=config.log_level(config.GUI_DEFAULT_LOG_LEVEL),
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )


def _parse_args(argv: Sequence[str]) -> Tuple[argparse.Namespace, List[str]]:
    parser = argparse.ArgumentParser(prog="magmerge", description="MagMerge desktop window.")
    parser.add_argument("folder", nargs="?", default=None, help="Optional folder to combine on startup.")
    # Unknown switches (e.g. -style=fusion) are handed on to Qt
    return parser.parse_known_args(list(argv))


def run_window(qt_argv: List[str], folder: Optional[str] = None) -> int:
    from PySide6 import QtWidgets  # type: ignore
    from .ui.main_window import MainWindow

    app = QtWidgets.QApplication(qt_argv)
    app.setApplicationName(config.WINDOW_TITLE)

    win = MainWindow()
    app.aboutToQuit.connect(win.controller.shutdown)
    win.show()

    if folder:
        logger.info("Startup folder: %s", folder)
        win.controller.start(folder)

    return int(app.exec())


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    configure_logging()
    args, qt_args = _parse_args(argv[1:])
    return run_window(argv[:1] + qt_args, args.folder)


if __name__ == "__main__":
    raise SystemExit(main())
