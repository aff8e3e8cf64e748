"""Turn log records into the text lines kept by the capture handler."""

from __future__ import annotations

import logging
import os
import traceback

from list_log_capture.levels import Level, LineFormatter

DEFAULT_FORMAT = "%(capture_level)s: %(message)s"


class CaptureFormatter(logging.Formatter):
    """Format records with capture level names and an explicit traceback policy.

    Unlike :class:`logging.Formatter`, this formatter never inlines exception
    text itself. When ``ignores_throwable`` is false the handler appends the
    traceback lines after the formatted message instead.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        ignores_throwable: bool = True,
    ) -> None:
        super().__init__(fmt or DEFAULT_FORMAT, datefmt)
        self._ignores_throwable = ignores_throwable

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        record.capture_level = Level.from_levelno(record.levelno).name
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)
        return self.formatMessage(record)

    def ignores_throwable(self) -> bool:
        return self._ignores_throwable


def ignores_throwable(formatter: LineFormatter | logging.Formatter | None) -> bool:
    """Return whether traceback lines should be left off for *formatter*.

    The default layout and plain stdlib formatters (which inline the
    traceback on their own) both count as ignoring throwables.
    """
    if formatter is None:
        return True
    policy = getattr(formatter, "ignores_throwable", None)
    if callable(policy):
        return bool(policy())
    return True


def throwable_lines(record: logging.LogRecord) -> list[str]:
    """Return the traceback attached to *record* as separate lines."""
    if record.exc_info and record.exc_info[0] is not None:
        return "".join(traceback.format_exception(*record.exc_info)).splitlines()
    if record.exc_text:
        return record.exc_text.splitlines()
    return []


def render(
    record: logging.LogRecord,
    formatter: LineFormatter | logging.Formatter | None = None,
) -> str:
    """Render *record* to a single captured line."""
    if formatter is None:
        text = f"{Level.from_levelno(record.levelno).name}: {record.getMessage()}"
    else:
        text = formatter.format(record)

    if ignores_throwable(formatter):
        return text

    parts = [text]
    parts.extend(throwable_lines(record))
    return os.linesep.join(parts)
