"""Tests for rendering records into captured lines."""

import logging
import os
import sys

from list_log_capture import formatting
from list_log_capture.formatting import CaptureFormatter
from tests.helpers import StubFormatter, make_record


def test_default_rendering_uses_capture_level_name():
    record = make_record("disk low", logging.WARNING)

    assert formatting.render(record) == "WARN: disk low"


def test_default_rendering_ignores_throwable():
    record = make_record("crashed", logging.ERROR, exc_text="a\nb")

    assert formatting.render(record) == "ERROR: crashed"


def test_formatter_that_keeps_throwables_appends_trace_lines():
    record = make_record("crashed", logging.ERROR, exc_text="a\nb")

    rendered = formatting.render(record, StubFormatter(prefix="x", ignores=False))

    assert rendered == "x|crashed" + os.linesep + "a" + os.linesep + "b"


def test_formatter_that_ignores_throwables_skips_trace_lines():
    record = make_record("crashed", logging.ERROR, exc_text="a\nb")

    assert formatting.render(record, StubFormatter(prefix="x", ignores=True)) == "x|crashed"


def test_stdlib_formatter_counts_as_ignoring_throwables():
    assert formatting.ignores_throwable(logging.Formatter()) is True
    assert formatting.ignores_throwable(None) is True
    assert formatting.ignores_throwable(CaptureFormatter(ignores_throwable=False)) is False


def test_throwable_lines_from_exc_info_keep_traceback_order():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = logging.LogRecord("t", logging.ERROR, __file__, 1, "oops", (), sys.exc_info())

    lines = formatting.throwable_lines(record)

    assert lines[0] == "Traceback (most recent call last):"
    assert lines[-1] == "ValueError: bad value"


def test_throwable_lines_empty_without_exception():
    assert formatting.throwable_lines(make_record("quiet")) == []


def test_capture_formatter_default_layout_matches_default_rendering():
    record = make_record("hello %s", logging.INFO)
    record.args = ("world",)

    assert CaptureFormatter().format(record) == "INFO: hello world"


def test_capture_formatter_custom_format():
    formatter = CaptureFormatter("[%(name)s] %(capture_level)s %(message)s")
    record = make_record("started", logging.CRITICAL, name="svc")

    assert formatter.format(record) == "[svc] FATAL started"


def test_capture_formatter_never_inlines_exception_text():
    formatter = CaptureFormatter(ignores_throwable=False)
    record = make_record("crashed", logging.ERROR, exc_text="trace")

    assert formatter.format(record) == "ERROR: crashed"
    assert formatting.render(record, formatter) == "ERROR: crashed" + os.linesep + "trace"
