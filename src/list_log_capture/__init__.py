"""In-memory log capture and assertions for tests.

The CLI is not imported here so that importing the library has no side
effects beyond registering the TRACE level name.
"""

from list_log_capture.capture import capturing
from list_log_capture.errors import ConfigError, ListLogCaptureError, LogAssertionError, SinkStateError
from list_log_capture.formatting import CaptureFormatter
from list_log_capture.handler import ListHandler
from list_log_capture.levels import ALL_LEVELS, Level

__all__: list[str] = [
    "ALL_LEVELS",
    "CaptureFormatter",
    "ConfigError",
    "Level",
    "ListHandler",
    "ListLogCaptureError",
    "LogAssertionError",
    "SinkStateError",
    "capturing",
]
