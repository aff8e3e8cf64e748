"""Scoped capture: attach a handler for the duration of a ``with`` block."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TextIO

from list_log_capture.config import CaptureSettings
from list_log_capture.handler import ListHandler
from list_log_capture.levels import Level, LineFormatter


@contextmanager
def capturing(
    logger: logging.Logger | None = None,
    *,
    only_levels: Iterable[Level | str | int] | None = None,
    formatter: LineFormatter | logging.Formatter | None = None,
    dump_to: TextIO | None = None,
    settings: CaptureSettings | None = None,
) -> Iterator[ListHandler]:
    """Yield an attached :class:`ListHandler`, detaching it on the way out.

    When the block raises and *dump_to* is given, the captured lines are
    printed there before the exception continues.
    """
    if settings is not None:
        handler = settings.build_handler()
        target = logger if logger is not None else settings.resolve_logger()
    else:
        handler = ListHandler()
        target = logger
    if only_levels is not None:
        handler.set_only_levels(*only_levels)
    if formatter is not None:
        handler.setFormatter(formatter)  # type: ignore[arg-type]

    handler.attach(target)
    try:
        yield handler
    except BaseException:
        if dump_to is not None:
            handler.print_to(dump_to)
        raise
    finally:
        handler.detach()
