"""Console appenders: plain standard streams and a rich console."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console

from arborlog.appenders.base import Appender
from arborlog.config.keys import threshold_from_dictionary
from arborlog.exceptions import ConfigurationError
from arborlog.formatters.base import Formatter
from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel

ERROR_THRESHOLD_KEY = "ErrorThresholdLevel"
STDERR_KEY = "Stderr"

LEVEL_STYLES: dict[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.FATAL: "bold red",
}


class StdOutAppender(Appender):
    """Write messages to standard output.

    Messages at or above ``error_threshold`` go to standard error instead.
    The streams are looked up on every call so redirections apply.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.error_threshold: LogLevel | None = None

    def update_with_dictionary(
        self, dictionary: Mapping[str, Any], available_formatters: Sequence[Formatter]
    ) -> None:
        super().update_with_dictionary(dictionary, available_formatters)
        error_threshold = threshold_from_dictionary(dictionary, self._owner, ERROR_THRESHOLD_KEY)
        if error_threshold is not None:
            self.error_threshold = error_threshold

    def perform_log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        if self.error_threshold is not None and level >= self.error_threshold:
            stream = sys.stderr
        else:
            stream = sys.stdout
        print(message, file=stream, flush=True)


class RichConsoleAppender(Appender):
    """Write messages through a rich console, styled by level."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.stderr = False
        self._console: Console | None = None

    def update_with_dictionary(
        self, dictionary: Mapping[str, Any], available_formatters: Sequence[Formatter]
    ) -> None:
        super().update_with_dictionary(dictionary, available_formatters)
        stderr = dictionary.get(STDERR_KEY)
        if stderr is not None:
            if not isinstance(stderr, bool):
                raise ConfigurationError(
                    f"'{STDERR_KEY}' parameter for {self._owner} must be a boolean"
                )
            self.stderr = stderr

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console(stderr=self.stderr, highlight=False, soft_wrap=True)
        return self._console

    def perform_log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        self.console.print(message, style=LEVEL_STYLES.get(level) or None, markup=False)
