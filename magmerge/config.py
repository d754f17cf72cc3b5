import os


# Logging
LOG_LEVEL: str = os.environ.get("MAGMERGE_LOG_LEVEL", "").strip().upper()
CLI_DEFAULT_LOG_LEVEL: str = "WARNING"
GUI_DEFAULT_LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT: str = "%H:%M:%S"


# Input / output naming
INPUT_EXTENSION: str = "txt"
OUTPUT_SUFFIX: str = " Positions Combined.txt"


# UI polling rate for the background combine channels
UI_TICK_HZ: int = int(os.environ.get("MAGMERGE_UI_TICK_HZ", "30"))
WINDOW_TITLE: str = "MagMerge"
WINDOW_W_PX: int = 560
WINDOW_H_PX: int = 440
MESSAGE_LIST_MAX_H_PX: int = 120


def log_level(default: str) -> str:
    """Resolve the effective log level name, env override first."""
    return LOG_LEVEL or default
