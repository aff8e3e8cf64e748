"""Make the list_handler fixture available without installing the package."""

from list_log_capture.pytest_plugin import (  # noqa: F401
    list_handler,
    pytest_addoption,
    pytest_runtest_makereport,
)
