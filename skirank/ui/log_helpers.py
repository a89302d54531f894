import logging
import sys
from datetime import datetime

from colorama import Fore, Style

DEBUG = False

LOGGER_ROOT = "skirank"

_LEVEL_COLOURS = {
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
}

class _StepFormatter(logging.Formatter):
    """Formats records as ``[HH:MM:SS] [prefix] [LEVEL] message``"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        prefix = record.name.split(".", 1)[-1]
        msg = f"[{timestamp}] [{prefix}] [{record.levelname}] {record.getMessage()}"
        colour = _LEVEL_COLOURS.get(record.levelname)
        if colour:
            msg = colour + msg + Style.RESET_ALL
        return msg

def configure_logging(verbose: bool = False) -> None:
    global DEBUG
    DEBUG = verbose

    root = logging.getLogger(LOGGER_ROOT)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_StepFormatter())
    root.addHandler(handler)

def get_logger(prefix: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_ROOT}.{prefix}")

def print_step(prefix : str, message: str, level: str = "INFO"):
    # Per-step chatter only shows up in verbose mode
    if level == "DEBUG" and not DEBUG:
        return
    get_logger(prefix).log(logging.getLevelName(level), message)
