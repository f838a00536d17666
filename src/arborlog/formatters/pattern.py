"""Pattern formatter: renders messages through a ``%``-marker template.

Supported markers::

    %l          level name (Debug, Info, Warning, Error, Fatal)
    %n          logger identifier
    %d{fmt}     timestamp, optional strftime format (default %Y-%m-%d %H:%M:%S)
    %t          thread name
    %m          message
    %x{key}     value of ``key`` in the caller supplied extra fields
    %%          a literal percent sign
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from arborlog.exceptions import ConfigurationError
from arborlog.formatters.base import Formatter
from arborlog.models.info import LogInfo
from arborlog.utils.timestamps import format_timestamp

PATTERN_KEY = "Pattern"

Segment = Callable[[str, LogInfo], str]


def _literal(text: str) -> Segment:
    return lambda message, info: text


def _date(option: str | None) -> Segment:
    return lambda message, info: format_timestamp(info.timestamp, option)


def _extra(option: str | None) -> Segment:
    key = option or ""
    return lambda message, info: str(info.extra.get(key, ""))


_SIMPLE_MARKERS: dict[str, Segment] = {
    "l": lambda message, info: info.level.display_name,
    "n": lambda message, info: info.logger_name,
    "t": lambda message, info: info.thread_name,
    "m": lambda message, info: message,
}

_OPTION_MARKERS: dict[str, Callable[[str | None], Segment]] = {
    "d": _date,
    "x": _extra,
}


def parse_pattern(pattern: str, owner: str = "pattern formatter") -> list[Segment]:
    """Compile a pattern into a list of segment renderers.

    Args:
        pattern: Template such as ``"[%l] %n: %m"``
        owner: Description used in error messages

    Returns:
        list of callables, each rendering one piece of the output

    Raises:
        ConfigurationError: On an unknown marker, a dangling ``%`` or an unclosed option
    """
    segments: list[Segment] = []
    literal: list[str] = []
    index = 0
    length = len(pattern)

    while index < length:
        char = pattern[index]
        if char != "%":
            literal.append(char)
            index += 1
            continue

        if index + 1 >= length:
            raise ConfigurationError(f"Dangling '%' at end of pattern for {owner}")
        marker = pattern[index + 1]
        index += 2

        if marker == "%":
            literal.append("%")
            continue

        option = None
        if index < length and pattern[index] == "{":
            closing = pattern.find("}", index)
            if closing == -1:
                raise ConfigurationError(f"Unclosed option for marker '%{marker}' in {owner}")
            option = pattern[index + 1:closing]
            index = closing + 1

        if literal:
            segments.append(_literal("".join(literal)))
            literal = []

        if marker in _SIMPLE_MARKERS:
            segments.append(_SIMPLE_MARKERS[marker])
        elif marker in _OPTION_MARKERS:
            segments.append(_OPTION_MARKERS[marker](option))
        else:
            raise ConfigurationError(f"Unknown marker '%{marker}' in pattern for {owner}")

    if literal:
        segments.append(_literal("".join(literal)))
    return segments


class PatternFormatter(Formatter):
    """Formatter driven by a ``Pattern`` template string."""

    def __init__(self, identifier: str, pattern: str = "%m") -> None:
        super().__init__(identifier)
        self.pattern = pattern
        self._segments = parse_pattern(pattern)

    def update_with_dictionary(self, dictionary: Mapping[str, Any]) -> None:
        pattern = dictionary.get(PATTERN_KEY)
        owner = f"formatter '{self.identifier}'"
        if pattern is None:
            raise ConfigurationError(f"Missing '{PATTERN_KEY}' parameter for {owner}")
        if not isinstance(pattern, str):
            raise ConfigurationError(f"'{PATTERN_KEY}' parameter for {owner} must be a string")
        self._segments = parse_pattern(pattern, owner)
        self.pattern = pattern

    def format(self, message: str, info: LogInfo) -> str:
        return "".join(segment(message, info) for segment in self._segments)
