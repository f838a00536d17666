"""Abstract base class for appenders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from arborlog.config.keys import DictionaryKey, string_from_dictionary, threshold_from_dictionary
from arborlog.exceptions import ConfigurationError
from arborlog.formatters.base import Formatter
from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel


class Appender(ABC):
    """Sends messages to a destination.

    Every appender applies its own threshold, independently of the logger
    that forwarded the message, then formats and delivers it.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        self.threshold = LogLevel.most_permissive()
        self.formatter: Formatter | None = None

    @property
    def _owner(self) -> str:
        return f"appender '{self.identifier}'"

    def update_with_dictionary(
        self, dictionary: Mapping[str, Any], available_formatters: Sequence[Formatter]
    ) -> None:
        """Apply the generic appender fields of a configuration entry.

        Subclasses reading their own fields must call this first.

        Args:
            dictionary: Appender entry from the configuration
            available_formatters: Formatters built by the same load

        Raises:
            ConfigurationError: On an invalid threshold or an unknown formatter id
        """
        threshold = threshold_from_dictionary(dictionary, self._owner)
        if threshold is not None:
            self.threshold = threshold

        formatter_id = string_from_dictionary(dictionary, DictionaryKey.FORMATTER_ID, self._owner)
        if formatter_id is not None:
            formatter = next(
                (f for f in available_formatters if f.identifier == formatter_id), None
            )
            if formatter is None:
                raise ConfigurationError(
                    f"No such formatter '{formatter_id}' for {self._owner}"
                )
            self.formatter = formatter

    def log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        """Format and deliver a message if it reaches this appender's threshold."""
        if level < self.threshold:
            return
        if self.formatter is not None:
            message = self.formatter.format(message, info)
        self.perform_log(message, level, info)

    @abstractmethod
    def perform_log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        """Write an already formatted message to the destination."""
        ...

    def close(self) -> None:
        """Release destination resources. Appenders may be used again afterwards."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r}, threshold={self.threshold.display_name})"
