"""pytest integration: a ``list_handler`` fixture scoped to one test.

The fixture attaches a :class:`ListHandler` to the root logger (or to the
logger named by the ``logcapture_config`` settings file), detaches it after
the test and dumps the captured lines to stderr when the test body fails.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator

import pytest

from list_log_capture.config import CaptureSettings
from list_log_capture.handler import ListHandler

_REPORT_KEY = pytest.StashKey[pytest.TestReport]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "logcapture_config",
        help="YAML file with list_log_capture settings for the list_handler fixture.",
        default="",
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.stash[_REPORT_KEY] = report


def load_settings(config: pytest.Config) -> CaptureSettings:
    path = config.getini("logcapture_config")
    if not path:
        return CaptureSettings()
    return CaptureSettings.from_yaml(config.rootpath / path)


@pytest.fixture
def list_handler(request: pytest.FixtureRequest) -> Iterator[ListHandler]:
    settings = load_settings(request.config)
    handler = settings.build_handler()
    handler.attach(settings.resolve_logger())
    try:
        yield handler
    finally:
        handler.detach()
        report = request.node.stash.get(_REPORT_KEY, None)
        if report is not None and report.failed:
            handler.print_to(sys.stderr)
