"""Logging configuration for the Tasks Plugin."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, ...)
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Prevent adding handlers multiple times
    for handler in root.handlers:
        if getattr(handler, "_tasks_plugin", False):
            return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._tasks_plugin = True
    root.addHandler(console_handler)
