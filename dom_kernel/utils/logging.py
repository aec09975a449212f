"""
Logging helpers for the DOM kernel.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by ``setup_logging`` on the ``dom_kernel`` logger, which the CLI
calls once at startup.
"""

import logging
import os
import sys
import time
from datetime import datetime
from typing import Dict, Optional

ROOT_LOGGER_NAME = "dom_kernel"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"


def _level(name: str, fallback: int) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else fallback


class LogFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI colour."""

    RESET = '\033[0m'
    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m\033[1m',
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Windows consoles do not understand the escape codes
        self.colored = colored and sys.platform != 'win32'

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelname) if self.colored else None
        if color is None:
            return formatted
        # Only the first occurrence is the level field
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "INFO",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None,
                  colored: bool = True) -> logging.Logger:
    """
    Install console (and optionally file) handlers on the kernel logger.

    A logger that already has handlers is returned unchanged, so calling
    this twice does not duplicate output.

    Args:
        log_file: Path of a log file, created with its directory; None for console only
        console_level: Level name for the console handler
        file_level: Level name for the file handler
        component: Configure ``dom_kernel.<component>`` instead of the package logger
        colored: Colour level names on the console

    Returns:
        The configured logger
    """
    name = f"{ROOT_LOGGER_NAME}.{component}" if component else ROOT_LOGGER_NAME
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    console_value = _level(console_level, logging.INFO)
    file_value = _level(file_level, logging.DEBUG)
    # The logger must let through whatever either handler wants
    logger.setLevel(min(console_value, file_value) if log_file else console_value)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_value)
    console_handler.setFormatter(LogFormatter(colored=colored, fmt=CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_value)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def get_default_log_file() -> str:
    """Path of today's log file under ``~/.dom_kernel/logs``; nothing is created."""
    date_str = datetime.now().strftime("%Y-%m-%d")
    return os.path.join(os.path.expanduser("~"), ".dom_kernel", "logs", f"dom_kernel_{date_str}.log")


def log_exception(logger: logging.Logger, exception: BaseException,
                  message: str = "An exception occurred") -> None:
    """Log ``exception`` at ERROR level together with its traceback."""
    logger.error(f"{message}: {exception}",
                 exc_info=(type(exception), exception, exception.__traceback__))


class PerformanceLogger:
    """Times named operations and logs how long each one took."""

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}

    def start(self, name: str) -> None:
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        Stop timing ``name`` and log the duration.

        Returns:
            The duration in seconds, or 0.0 when ``start(name)`` was never called
        """
        started = self.start_times.pop(name, None)
        if started is None:
            self.logger.warning(f"No start time found for {name}")
            return 0.0

        duration = time.perf_counter() - started
        self.logger.log(_level(level, logging.DEBUG), f"{self.component} {name} took {duration:.4f} seconds")
        return duration
