"""Exceptions raised by the capture library."""

from __future__ import annotations

from collections.abc import Sequence


class ListLogCaptureError(Exception):
    """Base class for capture errors other than assertion failures."""


class SinkStateError(ListLogCaptureError, RuntimeError):
    """Raised when a handler is attached somewhere it cannot be."""


class ConfigError(ListLogCaptureError, ValueError):
    """Raised for invalid capture settings."""


class LogAssertionError(AssertionError):
    """A log presence or absence assertion did not hold."""

    def __init__(
        self,
        message: str,
        *,
        matcher_description: str,
        view: Sequence[str],
        transcript: str,
    ) -> None:
        self.matcher_description = matcher_description
        self.view = list(view)
        self.transcript = transcript
        super().__init__(f"{message}\n--- captured log ---\n{transcript}")
