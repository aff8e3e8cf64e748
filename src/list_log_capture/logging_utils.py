"""Diagnostic logging for the capture library itself."""

from __future__ import annotations

import logging


class LoggingManager:
    """Manage the library's own logger, kept apart from captured loggers."""

    def __init__(self, logger_name: str = "list_log_capture") -> None:
        self.logger = logging.getLogger(logger_name)
        # Diagnostics must never reach a sink attached to the root logger.
        self.logger.propagate = False

    def setup(self, verbose: bool) -> None:
        """Send diagnostics to the console at INFO, or DEBUG when verbose."""
        level = logging.DEBUG if verbose else logging.INFO

        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))

        self.logger.handlers.clear()
        self.logger.addHandler(console)
        self.logger.setLevel(level)

    def log(self, msg: str, *args: object) -> None:
        """Log an informational message."""
        self.logger.info(msg, *args)

    def debug(self, msg: str, *args: object) -> None:
        """Log a debug message."""
        self.logger.debug(msg, *args)


DEFAULT_LOGGER = LoggingManager()


def setup_logging(verbose: bool) -> None:
    DEFAULT_LOGGER.setup(verbose)


def log(msg: str, *args: object) -> None:
    DEFAULT_LOGGER.log(msg, *args)


def debug(msg: str, *args: object) -> None:
    DEFAULT_LOGGER.debug(msg, *args)
