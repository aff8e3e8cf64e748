"""Severity levels and the collaborator shapes used by the capture handler."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Optional, Protocol


class Level(enum.IntEnum):
    """Capture severities, ranked so that FATAL is the highest."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    @classmethod
    def from_levelno(cls, levelno: int) -> Level:
        """Map a stdlib level number onto the closest level at or below it."""
        below = [level for level in cls if level <= levelno]
        return max(below) if below else cls.TRACE

    @classmethod
    def parse(cls, label: str | int | Level) -> Level:
        """Return the level named by *label*, accepting stdlib spellings."""
        if isinstance(label, Level):
            return label
        if isinstance(label, int):
            return cls.from_levelno(label)
        name = label.strip().upper()
        name = LEVEL_ALIASES.get(name, name)
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown log level: {label!r}") from None


LEVEL_ALIASES: dict[str, str] = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}

ALL_LEVELS: tuple[Level, ...] = tuple(sorted(Level, reverse=True))

logging.addLevelName(Level.TRACE, "TRACE")


Matcher = Callable[[str], bool]
Transformer = Callable[[str], Optional[str]]


class LineFormatter(Protocol):
    """Renderer used by the handler in place of the default layout."""

    def format(self, record: logging.LogRecord) -> str: ...

    def ignores_throwable(self) -> bool: ...
