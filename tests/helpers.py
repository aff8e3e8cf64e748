"""Reusable test utilities and recording stubs for the test suite."""

from __future__ import annotations

import logging
import uuid


class RecordingLogger:
    """In-memory stand-in for LoggingManager capturing diagnostics and setup calls."""

    def __init__(self):
        self.messages: list[str] = []
        self.setup_calls: list[bool] = []

    def setup(self, verbose: bool) -> None:
        self.setup_calls.append(verbose)

    def log(self, msg: str, *args: object) -> None:
        self.messages.append(msg % args if args else msg)

    def debug(self, msg: str, *args: object) -> None:
        self.messages.append(f"DEBUG:{msg % args if args else msg}")


class StubFormatter:
    """Formatter exposing the format/ignores_throwable pair without logging.Formatter."""

    def __init__(self, prefix: str = "fmt", ignores: bool = False):
        self.prefix = prefix
        self.ignores = ignores
        self.calls = 0

    def format(self, record: logging.LogRecord) -> str:
        self.calls += 1
        return f"{self.prefix}|{record.getMessage()}"

    def ignores_throwable(self) -> bool:
        return self.ignores


class ExplodingFormatter(StubFormatter):
    def format(self, record: logging.LogRecord) -> str:
        raise RuntimeError("formatter blew up")


def fresh_logger(prefix: str = "tests") -> logging.Logger:
    """Return a uniquely named, non-propagating logger for one test."""

    logger = logging.getLogger(f"{prefix}.{uuid.uuid4().hex}")
    logger.propagate = False
    return logger


def make_record(
    msg: str,
    level: int = logging.INFO,
    *,
    exc_text: str | None = None,
    name: str = "tests.record",
) -> logging.LogRecord:
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.exc_text = exc_text
    return record


SAMPLE_LOGGER = "tests.targets"


def emit_sample_logs() -> None:
    """CLI target logging one record at each of three levels."""

    logger = logging.getLogger(SAMPLE_LOGGER)
    logger.info("service started")
    logger.warning("disk low")
    logger.error("[job] retry failed")


def log_then_raise() -> None:
    """CLI target that logs and then fails."""

    logging.getLogger(SAMPLE_LOGGER).error("giving up")
    raise RuntimeError("target exploded")
