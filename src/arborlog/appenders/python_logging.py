"""Appender forwarding to the Python standard ``logging`` module.

This is the platform log facility: whatever handlers the host application
installed on the standard library side receive the formatted messages.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from arborlog.appenders.base import Appender
from arborlog.config.keys import string_from_dictionary
from arborlog.formatters.base import Formatter
from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel

LOGGER_NAME_KEY = "LoggerName"

STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}


class LoggingAppender(Appender):
    """Send messages to a standard library logger.

    The target logger name defaults to the appender identifier.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.logger_name = identifier

    def update_with_dictionary(
        self, dictionary: Mapping[str, Any], available_formatters: Sequence[Formatter]
    ) -> None:
        super().update_with_dictionary(dictionary, available_formatters)
        logger_name = string_from_dictionary(dictionary, LOGGER_NAME_KEY, self._owner)
        if logger_name is not None:
            self.logger_name = logger_name

    def perform_log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        logging.getLogger(self.logger_name).log(
            STDLIB_LEVELS[level], message, extra={"arborlog_logger": info.logger_name}
        )
