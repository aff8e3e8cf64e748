"""Capture settings loaded from YAML files."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from yaml import YAMLError

from list_log_capture.errors import ConfigError
from list_log_capture.formatting import CaptureFormatter
from list_log_capture.handler import ListHandler
from list_log_capture.levels import Level


@dataclasses.dataclass
class CaptureSettings:
    """How a capture handler should be built and where it attaches.

    ``logger`` is a logger name, the empty string meaning the root logger.
    ``only_levels`` of ``None`` keeps every level; an empty list keeps none.
    """

    logger: str = ""
    only_levels: list[Level] | None = None
    format: str | None = None
    datefmt: str | None = None
    include_traceback: bool = False
    capture_all: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> CaptureSettings:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Capture settings must be a mapping, got {type(data).__name__}")

        known = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown capture settings: {', '.join(map(str, unknown))}")

        values = dict(data)
        if values.get("logger") is None:
            values["logger"] = ""
        if "only_levels" in values and values["only_levels"] is not None:
            values["only_levels"] = _parse_levels(values["only_levels"])
        for key in ("include_traceback", "capture_all"):
            if key in values and not isinstance(values[key], bool):
                raise ConfigError(f"{key} must be true or false, got {values[key]!r}")
        for key in ("logger", "format", "datefmt"):
            if values.get(key) is not None and not isinstance(values[key], str):
                raise ConfigError(f"{key} must be a string, got {values[key]!r}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> CaptureSettings:
        """Load settings from a YAML file, optionally under a ``capture`` key."""
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc
        except YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

        if isinstance(data, Mapping) and "capture" in data:
            data = data["capture"]
        return cls.from_mapping(data)

    def resolve_logger(self) -> logging.Logger:
        return logging.getLogger(self.logger or None)

    def build_formatter(self) -> CaptureFormatter | None:
        if self.format is None and not self.include_traceback:
            return None
        return CaptureFormatter(
            self.format,
            self.datefmt,
            ignores_throwable=not self.include_traceback,
        )

    def build_handler(self) -> ListHandler:
        return ListHandler(
            only_levels=self.only_levels,
            formatter=self.build_formatter(),
            capture_all=self.capture_all,
        )


def _parse_levels(raw: Any) -> list[Level]:
    if isinstance(raw, (str, int)):
        raw = [raw]
    if not isinstance(raw, list):
        raise ConfigError(f"only_levels must be a list of level names, got {raw!r}")
    booleans = [item for item in raw if isinstance(item, bool)]
    if booleans:
        raise ConfigError(f"Invalid only_levels entry: {booleans[0]!r} is not a level name")
    try:
        return [Level.parse(item) for item in raw]
    except (ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid only_levels entry: {exc}") from exc
