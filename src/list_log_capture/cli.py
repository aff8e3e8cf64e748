"""Console entrypoint: run a callable under log capture and check its output."""

import importlib
import re
from collections.abc import Callable

import typer
from rich.console import Console

from list_log_capture.capture import capturing
from list_log_capture.config import CaptureSettings
from list_log_capture.errors import ConfigError, LogAssertionError
from list_log_capture.levels import Level
from list_log_capture.logging_utils import DEFAULT_LOGGER, LoggingManager
from list_log_capture.matchers import search
from list_log_capture.report import print_transcript


def load_target(spec: str) -> Callable[[], object]:
    """Import ``module:attribute`` and return the callable it names."""

    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Target must look like 'package.module:function', got {spec!r}")

    target: object = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        target = getattr(target, attr)
    if not callable(target):
        raise ValueError(f"{spec} is not callable")
    return target


class ListLogCaptureCLI:
    """Object-oriented wrapper for the Typer command-line interface."""

    def __init__(self, logger: LoggingManager = DEFAULT_LOGGER, console: Console | None = None) -> None:
        self.logger = logger
        self.console = console
        self.app = typer.Typer(help="Capture log output from Python code and check it.")
        self.app.command("run")(self._run)
        self.app.command("check-config")(self._check_config)

    def _run(
        self,
        target: str = typer.Argument(..., help="Callable to run, as package.module:function."),
        only_level: list[str] | None = typer.Option(
            None,
            "--only-level",
            "-l",
            help="Keep only records at this level (repeatable).",
        ),
        expect: list[str] | None = typer.Option(
            None,
            "--expect",
            "-e",
            help="Regex that at least one captured line must contain (repeatable).",
        ),
        reject: list[str] | None = typer.Option(
            None,
            "--reject",
            "-r",
            help="Regex that no captured line may contain (repeatable).",
        ),
        config: str | None = typer.Option(
            None,
            "--config",
            "-c",
            help="YAML file with capture settings.",
        ),
        logger_name: str | None = typer.Option(
            None,
            "--logger",
            help="Logger to capture from (default: root logger).",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Enable verbose debug logging.",
        ),
    ) -> None:
        """Run TARGET with a capture handler attached and report what it logged."""
        self.logger.setup(verbose)

        try:
            settings = CaptureSettings.from_yaml(config) if config else CaptureSettings()
            if only_level:
                settings.only_levels = [Level.parse(label) for label in only_level]
            expected = [search(pattern) for pattern in expect or []]
            rejected = [search(pattern) for pattern in reject or []]
            func = load_target(target)
        except (ConfigError, ValueError, re.error, ImportError, AttributeError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc

        if logger_name is not None:
            settings.logger = logger_name

        raised: Exception | None = None
        with capturing(settings=settings) as handler:
            try:
                func()
            except Exception as exc:  # noqa: BLE001 - reported with the transcript below
                self.logger.debug("Target %s raised %r", target, exc)
                raised = exc

        print_transcript(handler, self.console, title=f"Captured log: {target}")

        failures = 0
        if raised is not None:
            failures += 1
            typer.echo(f"[ERROR] {target} raised {type(raised).__name__}: {raised}", err=True)
        for matcher in expected:
            try:
                handler.assert_has_log(matcher)
            except LogAssertionError:
                failures += 1
                typer.echo(f"[MISSING] no line {matcher.description}", err=True)
        for matcher in rejected:
            try:
                handler.assert_has_no_log(matcher)
            except LogAssertionError:
                failures += 1
                typer.echo(f"[UNEXPECTED] found a line {matcher.description}", err=True)

        summary = f"Captured {len(handler.lines)} lines; {failures} failures."
        if failures:
            typer.echo(summary, err=True)
            raise typer.Exit(code=1)

        typer.echo(summary)
        raise typer.Exit(code=0)

    def _check_config(
        self,
        path: str = typer.Argument(..., help="YAML file with capture settings."),
    ) -> None:
        """Validate a capture settings file."""

        try:
            settings = CaptureSettings.from_yaml(path)
        except ConfigError as exc:
            typer.echo(f"[FAIL] {exc}", err=True)
            raise typer.Exit(code=1) from exc

        levels = "all" if settings.only_levels is None else ", ".join(level.name for level in settings.only_levels) or "none"
        typer.echo(f"[OK] {path}")
        typer.echo(f"  logger:      {settings.logger or '(root)'}")
        typer.echo(f"  only_levels: {levels}")
        typer.echo(f"  format:      {settings.format or '(default)'}")
        typer.echo(f"  traceback:   {'included' if settings.include_traceback else 'ignored'}")

    def run(self) -> None:
        """Invoke the Typer application."""
        self.app()


cli = ListLogCaptureCLI()
app = cli.app


if __name__ == "__main__":
    cli.run()
