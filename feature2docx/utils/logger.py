"""Logging setup with colored console output"""
import logging
import os
import sys
from typing import Optional

from colorama import Fore, Style, init as colorama_init

colorama_init()

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name"""

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{original}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger with a single colored console handler"""
    logger = logging.getLogger(name)

    level_name = level or os.environ.get("FEATURE2DOCX_LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def set_level(level: str) -> None:
    """Apply a level to every logger created by setup_logger"""
    value = getattr(logging, level.upper(), logging.INFO)
    for logger_name in list(logging.root.manager.loggerDict):
        if logger_name.startswith("feature2docx") or logger_name in ("run", "__main__"):
            logging.getLogger(logger_name).setLevel(value)
