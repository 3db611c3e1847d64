"""
Logging for Cattata.

Every module asks for ``get_logger("<component>")`` and receives the child
logger ``cattata.<component>``. Handlers live only on the ``cattata`` parent,
so all components share one console handler and one rotating log file.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import ANSI

# -------------------- Configuration --------------------
ROOT_LOGGER_NAME = "cattata"

LOGS_DIR: Path = (Path(__file__).parents[3] / "logs").resolve()

LOG_FORMAT: str = "[%(asctime)s] [%(levelname)s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
DATE_FORMAT: str = "%Y-%m-%d %H-%M-%S"

# Overrides the console threshold; the log file always records DEBUG
LOG_LEVEL_ENV = "CATTATA_LOG_LEVEL"
DEFAULT_CONSOLE_LEVEL = logging.INFO

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

LOG_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[38;5;88m",
}
RESET_COLOR = "\033[0m"

# discord.py/py-cord and the HTTP stack log every gateway heartbeat at INFO
NOISY_LOGGERS = (
    "discord", "discord.gateway", "discord.client", "discord.http",
    "aiosqlite", "websockets", "aiohttp", "asyncio",
)

LOG_FILEPATH: Path | None = None


# -------------------- Formatters and handlers --------------------
class ColorFormatter(logging.Formatter):
    """Wraps each formatted record in the ANSI colour of its level."""

    def format(self, record: logging.LogRecord) -> str:
        color = LOG_COLORS.get(record.levelname, "")
        message = super().format(record)
        return f"{color}{message}{RESET_COLOR}" if color else message


class PromptToolkitHandler(logging.Handler):
    """Console handler that prints through prompt_toolkit so ANSI colours render on every terminal."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            print_formatted_text(ANSI(self.format(record)))
        except Exception:
            self.handleError(record)


def should_use_color() -> bool:
    """True when stderr is a TTY."""
    try:
        return sys.stderr.isatty()
    except Exception:
        return False


def console_level() -> int:
    """Console threshold from ``CATTATA_LOG_LEVEL`` (a level name), INFO otherwise."""
    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else DEFAULT_CONSOLE_LEVEL
    return level if isinstance(level, int) else DEFAULT_CONSOLE_LEVEL


def get_log_filepath() -> Path:
    """Return this process's log file, ``logs/cattata-<start time>.log``."""
    global LOG_FILEPATH

    if LOG_FILEPATH is None:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        LOG_FILEPATH = LOGS_DIR / f"cattata-{datetime.now().strftime(DATE_FORMAT)}.log"
    return LOG_FILEPATH


# -------------------- Logger setup --------------------
def silence_noisy_loggers() -> None:
    for name in NOISY_LOGGERS:
        noisy = logging.getLogger(name)
        noisy.setLevel(logging.ERROR)
        noisy.propagate = False
        noisy.handlers = []


def configure_logging() -> logging.Logger:
    """Attach the console and file handlers to the ``cattata`` logger once.

    Returns
    -------
    logging.Logger
        The configured parent logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    root.setLevel(logging.DEBUG)
    root.propagate = False

    console_formatter = (
        ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        if should_use_color()
        else logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    )
    console_handler = PromptToolkitHandler()
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(console_level())
    root.addHandler(console_handler)

    # A single RotatingFileHandler per file; several would race on rollover
    file_handler = RotatingFileHandler(
        get_log_filepath(),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(file_handler)

    silence_noisy_loggers()
    return root


def get_logger(logger_name: str) -> logging.Logger:
    """Return ``cattata.<logger_name>``, configuring the handlers on first use."""
    configure_logging()
    if logger_name == ROOT_LOGGER_NAME or logger_name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(logger_name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{logger_name}")


# -------------------- Exception handling --------------------
def handle_exception(exception_type, exception_instance, exception_traceback) -> None:
    """``sys.excepthook`` replacement: log uncaught exceptions, let Ctrl+C through."""
    if issubclass(exception_type, KeyboardInterrupt):
        sys.__excepthook__(exception_type, exception_instance, exception_traceback)
        return

    get_logger("uncaught").critical(
        "Uncaught exception",
        exc_info=(exception_type, exception_instance, exception_traceback),
    )
