"""In-memory logging handler for asserting on log output in tests.

Typical usage::

    handler = ListHandler.create_and_attach()
    try:
        run_code_that_logs()
        handler.assert_has_log(contains("disk low"))
    except Exception:
        handler.print_to(sys.stdout)
        raise
    finally:
        handler.detach()

:func:`list_log_capture.capture.capturing` wraps the same pattern in a
context manager.
"""

from __future__ import annotations

import logging
import os
import re
import sys
import threading
from collections.abc import Iterable
from typing import TextIO

from list_log_capture.errors import LogAssertionError, SinkStateError
from list_log_capture.formatting import render
from list_log_capture.levels import Level, LineFormatter, Matcher, Transformer
from list_log_capture.logging_utils import DEFAULT_LOGGER, LoggingManager
from list_log_capture.matchers import describe

DUMP_HEADER = "--- Actual content of logs ---"
DUMP_FOOTER = "--- end of LogString content ---"

# Logger -> (capture_all handlers attached, level to restore or None).
_LEVEL_HOLDS: dict[logging.Logger, tuple[int, int | None]] = {}
_LEVEL_HOLDS_LOCK = threading.Lock()


def _hold_level(logger: logging.Logger) -> None:
    """Open TRACE level on *logger* while at least one handler needs it."""
    with _LEVEL_HOLDS_LOCK:
        count, saved = _LEVEL_HOLDS.get(logger, (0, None))
        if count == 0 and logger.getEffectiveLevel() > Level.TRACE:
            saved = logger.level
            logger.setLevel(Level.TRACE)
        _LEVEL_HOLDS[logger] = (count + 1, saved)


def _release_level(logger: logging.Logger) -> None:
    """Restore the saved level once the last holder lets go.

    A level changed by the code under test (anything but TRACE) is kept.
    """
    with _LEVEL_HOLDS_LOCK:
        count, saved = _LEVEL_HOLDS[logger]
        if count > 1:
            _LEVEL_HOLDS[logger] = (count - 1, saved)
            return
        del _LEVEL_HOLDS[logger]
        if saved is not None and logger.level == Level.TRACE:
            logger.setLevel(saved)


class ListHandler(logging.Handler):
    """Keep every accepted record as a rendered line, in emission order.

    ``emit`` runs under the handler lock taken by :meth:`logging.Handler.handle`,
    and every query works on a snapshot taken under the same lock, so records
    logged from several threads are never lost or partially visible.
    """

    def __init__(
        self,
        *,
        only_levels: Iterable[Level | str | int] | None = None,
        formatter: LineFormatter | logging.Formatter | None = None,
        capture_all: bool = True,
        diagnostics: LoggingManager = DEFAULT_LOGGER,
    ) -> None:
        super().__init__()
        self._lines: list[str] = []
        self._only_levels: frozenset[Level] | None = None
        self._logger: logging.Logger | None = None
        self._holds_level = False
        self.capture_all = capture_all
        self.diagnostics = diagnostics
        if only_levels is not None:
            self.set_only_levels(*only_levels)
        if formatter is not None:
            self.setFormatter(formatter)  # type: ignore[arg-type]

    @classmethod
    def create_and_attach(
        cls,
        logger: logging.Logger | None = None,
        **kwargs,
    ) -> ListHandler:
        """Build a handler and attach it to *logger* (the root logger by default)."""
        handler = cls(**kwargs)
        handler.attach(logger)
        return handler

    # -- capture ---------------------------------------------------------

    def emit(self, record: logging.LogRecord) -> None:
        # Formatter errors propagate to the logging call on purpose; they are
        # not routed through handleError.
        if self._only_levels is not None and Level.from_levelno(record.levelno) not in self._only_levels:
            return
        self._lines.append(render(record, self.formatter))

    def set_only_levels(self, *levels: Level | str | int) -> None:
        """Keep only records at exactly these levels.

        Calling this with no levels keeps nothing at all, which is not the
        same as the default of keeping everything; use
        :meth:`clear_only_levels` to return to the default.
        """
        resolved = frozenset(Level.parse(level) for level in levels)
        with self.lock:
            self._only_levels = resolved

    def clear_only_levels(self) -> None:
        """Go back to keeping records at every level."""
        with self.lock:
            self._only_levels = None

    @property
    def only_levels(self) -> frozenset[Level] | None:
        return self._only_levels

    def clear(self) -> None:
        """Forget every captured line."""
        with self.lock:
            self._lines.clear()

    # -- lifecycle -------------------------------------------------------

    @property
    def attached(self) -> bool:
        return self._logger is not None

    def attach(self, logger: logging.Logger | None = None) -> None:
        """Start receiving records from *logger* and everything propagating to it."""
        target = logger if logger is not None else logging.getLogger()
        with self.lock:
            if self._logger is target:
                return
            if self._logger is not None:
                raise SinkStateError(
                    f"{self!r} is already attached to logger {self._logger.name!r}; detach it first"
                )
            self._logger = target
            self._holds_level = self.capture_all

        if self._holds_level:
            _hold_level(target)

        target.addHandler(self)
        self.diagnostics.debug("Attached %r to logger %r", self, target.name)

    def detach(self) -> None:
        """Stop receiving records. Captured lines are kept."""
        with self.lock:
            target, self._logger = self._logger, None
            held, self._holds_level = self._holds_level, False

        if target is None:
            self.diagnostics.debug("Detach of %r ignored; it was not attached", self)
            return

        target.removeHandler(self)
        if held:
            _release_level(target)
        self.diagnostics.debug("Detached %r from logger %r", self, target.name)

    def close(self) -> None:
        self.detach()
        super().close()

    # -- queries ---------------------------------------------------------

    @property
    def lines(self) -> tuple[str, ...]:
        """Snapshot of the captured lines in emission order."""
        with self.lock:
            return tuple(self._lines)

    def is_empty(self) -> bool:
        with self.lock:
            return not self._lines

    def __str__(self) -> str:
        return os.linesep.join(self.lines)

    def print_to(self, out: TextIO | None = None) -> None:
        """Write the captured lines between a header and a footer line."""
        stream = out if out is not None else sys.stdout
        print(DUMP_HEADER, file=stream)
        for line in self.lines:
            print(line, file=stream)
        print(DUMP_FOOTER, file=stream)

    def matches_one_line(self, pattern: str | re.Pattern[str]) -> bool:
        """Return True if one captured line matches *pattern* from start to end.

        Each line is matched as a whole, including any traceback lines
        appended to it, so ``.`` does not cross into those unless the
        pattern enables ``re.DOTALL``.
        """
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return any(compiled.fullmatch(line) for line in self.lines)

    def transformed_view(self, transformer: Transformer | None = None) -> list[str]:
        """Return the captured lines passed through *transformer*.

        Lines for which the transformer returns ``None`` are dropped; the
        others keep their relative order.
        """
        lines = self.lines
        if transformer is None:
            return list(lines)

        view: list[str] = []
        for line in lines:
            transformed = transformer(line)
            if transformed is not None:
                view.append(transformed)
        return view

    def assert_has_log(self, matcher: Matcher, transformer: Transformer | None = None) -> None:
        """Fail unless one (transformed) line satisfies *matcher*."""
        view = self.transformed_view(transformer)
        if any(matcher(line) for line in view):
            return

        description = describe(matcher)
        raise LogAssertionError(
            f"Expected a log line {description}, but none of {len(view)} lines did",
            matcher_description=description,
            view=view,
            transcript=str(self),
        )

    def assert_has_no_log(self, matcher: Matcher, transformer: Transformer | None = None) -> None:
        """Fail if any (transformed) line satisfies *matcher*."""
        view = self.transformed_view(transformer)
        offending = [line for line in view if matcher(line)]
        if not offending:
            return

        description = describe(matcher)
        raise LogAssertionError(
            f"Expected no log line {description}, but found {len(offending)}: {offending!r}",
            matcher_description=description,
            view=view,
            transcript=str(self),
        )
