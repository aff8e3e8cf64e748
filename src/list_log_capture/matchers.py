"""Ready-made matchers and transformers for log assertions.

Any ``str -> bool`` callable works as a matcher and any ``str -> str | None``
callable works as a transformer; these helpers only add readable failure
descriptions and cover the common cases.
"""

from __future__ import annotations

import dataclasses
import os
import re
from collections.abc import Callable

from list_log_capture.levels import Level, Matcher, Transformer


@dataclasses.dataclass(frozen=True)
class LineMatcher:
    """A matcher carrying the description used in assertion messages."""

    description: str
    predicate: Callable[[str], bool]

    def __call__(self, line: str) -> bool:
        return bool(self.predicate(line))


def describe(matcher: Matcher) -> str:
    """Return a human description of *matcher* for failure messages."""
    description = getattr(matcher, "description", None)
    if description:
        return str(description)
    name = getattr(matcher, "__qualname__", None)
    return f"satisfying {name}" if name else f"satisfying {matcher!r}"


def contains(text: str) -> LineMatcher:
    return LineMatcher(f"containing {text!r}", lambda line: text in line)


def equals(text: str) -> LineMatcher:
    return LineMatcher(f"equal to {text!r}", lambda line: line == text)


def starts_with(prefix: str) -> LineMatcher:
    return LineMatcher(f"starting with {prefix!r}", lambda line: line.startswith(prefix))


def matches(pattern: str | re.Pattern[str]) -> LineMatcher:
    """Match lines that *pattern* matches from start to end."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return LineMatcher(
        f"fully matching /{compiled.pattern}/",
        lambda line: compiled.fullmatch(line) is not None,
    )


def search(pattern: str | re.Pattern[str]) -> LineMatcher:
    """Match lines where *pattern* occurs anywhere."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return LineMatcher(
        f"containing a match for /{compiled.pattern}/",
        lambda line: compiled.search(line) is not None,
    )


def keep_if(predicate: Callable[[str], bool]) -> Transformer:
    """Keep lines accepted by *predicate* unchanged, reject the rest."""

    def _transform(line: str) -> str | None:
        return line if predicate(line) else None

    return _transform


def first_line() -> Transformer:
    """Drop traceback lines appended after the formatted message."""

    def _transform(line: str) -> str:
        return line.split(os.linesep, 1)[0]

    return _transform


_LEVEL_PREFIX = re.compile(rf"^(?:{'|'.join(level.name for level in Level)}): ")


def strip_level() -> Transformer:
    """Remove the ``"<LEVEL>: "`` prefix written by the default layout."""

    def _transform(line: str) -> str:
        return _LEVEL_PREFIX.sub("", line, count=1)

    return _transform


def regex_group(pattern: str | re.Pattern[str], group: int | str = 1) -> Transformer:
    """Replace each line with one group of *pattern*, rejecting lines it misses."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def _transform(line: str) -> str | None:
        found = compiled.search(line)
        if found is None:
            return None
        return found.group(group)

    return _transform
