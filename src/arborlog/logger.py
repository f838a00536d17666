"""Logger: a named node that gates messages by level and fans them out to appenders."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from arborlog.appenders.base import Appender
from arborlog.config.keys import DictionaryKey, threshold_from_dictionary
from arborlog.exceptions import ConfigurationError
from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel

logger = logging.getLogger(__name__)

ROOT_IDENTIFIER = ""
DEFAULT_THRESHOLD = LogLevel.DEBUG


@dataclass(frozen=True)
class LoggerSettings:
    """Threshold and appenders of a logger, swapped as a single value."""

    threshold: LogLevel = DEFAULT_THRESHOLD
    appenders: tuple[Appender, ...] = ()


@dataclass(frozen=True)
class LoggerUpdate:
    """Changes parsed from a logger configuration entry.

    A field left to None keeps the logger's current value.
    """

    threshold: LogLevel | None = None
    appenders: tuple[Appender, ...] | None = None

    @classmethod
    def from_dictionary(
        cls,
        dictionary: Mapping[str, Any],
        available_appenders: Sequence[Appender],
        owner: str,
    ) -> LoggerUpdate:
        """Parse and validate a logger entry without touching any logger.

        Args:
            dictionary: Logger entry (or the RootLogger mapping)
            available_appenders: Appenders built by the same configuration load
            owner: Description of the logger for error messages

        Raises:
            ConfigurationError: On an invalid threshold or an unknown appender id
        """
        threshold = threshold_from_dictionary(dictionary, owner)

        appenders = None
        appender_ids = dictionary.get(DictionaryKey.APPENDER_IDS)
        if appender_ids is not None:
            if not isinstance(appender_ids, (list, tuple)):
                raise ConfigurationError(
                    f"'{DictionaryKey.APPENDER_IDS}' parameter for {owner} must be a list"
                )
            resolved = []
            for appender_id in appender_ids:
                appender = next(
                    (a for a in available_appenders if a.identifier == appender_id), None
                )
                if appender is None:
                    raise ConfigurationError(f"No such appender '{appender_id}' for {owner}")
                resolved.append(appender)
            appenders = tuple(resolved)

        return cls(threshold=threshold, appenders=appenders)

    def applied_to(self, settings: LoggerSettings) -> LoggerSettings:
        changes: dict[str, Any] = {}
        if self.threshold is not None:
            changes["threshold"] = self.threshold
        if self.appenders is not None:
            changes["appenders"] = self.appenders
        return replace(settings, **changes)


class Logger:
    """A named logger.

    The logger drops messages below its own threshold and hands the rest to
    each of its appenders, which apply their own thresholds. Logging never
    raises: appender failures are reported on the ``arborlog.logger``
    standard library logger.
    """

    def __init__(
        self,
        identifier: str = ROOT_IDENTIFIER,
        threshold: LogLevel = DEFAULT_THRESHOLD,
        appenders: Iterable[Appender] = (),
    ) -> None:
        self.identifier = identifier
        self._settings = LoggerSettings(threshold, tuple(appenders))

    @property
    def is_root(self) -> bool:
        return self.identifier == ROOT_IDENTIFIER

    @property
    def display_name(self) -> str:
        return "root logger" if self.is_root else f"logger '{self.identifier}'"

    @property
    def settings(self) -> LoggerSettings:
        return self._settings

    @property
    def threshold(self) -> LogLevel:
        return self._settings.threshold

    @threshold.setter
    def threshold(self, level: LogLevel) -> None:
        self._settings = replace(self._settings, threshold=level)

    @property
    def appenders(self) -> tuple[Appender, ...]:
        return self._settings.appenders

    @appenders.setter
    def appenders(self, appenders: Iterable[Appender]) -> None:
        self._settings = replace(self._settings, appenders=tuple(appenders))

    def apply(self, update: LoggerUpdate) -> None:
        """Apply a validated update in a single assignment."""
        self._settings = update.applied_to(self._settings)

    def reset(self) -> None:
        self._settings = LoggerSettings()

    def update_with_dictionary(
        self, dictionary: Mapping[str, Any], available_appenders: Sequence[Appender]
    ) -> None:
        """Configure this logger from a configuration entry.

        Nothing changes if the entry is invalid.

        Raises:
            ConfigurationError: On an invalid threshold or an unknown appender id
        """
        self.apply(LoggerUpdate.from_dictionary(dictionary, available_appenders, self.display_name))

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self._settings.threshold

    def log(self, message: str, level: LogLevel, info: LogInfo | None = None) -> None:
        """Send an already built message to every appender if it passes the threshold."""
        settings = self._settings
        if level < settings.threshold:
            return
        if info is None:
            info = LogInfo(logger_name=self.identifier, level=level)
        for appender in settings.appenders:
            try:
                appender.log(message, level, info)
            except Exception:
                logger.exception(
                    "Appender '%s' of %s failed to deliver a message",
                    appender.identifier, self.display_name,
                )

    def _emit(
        self,
        level: LogLevel,
        message: str | Callable[[], str],
        args: tuple[Any, ...],
        extra: dict[str, Any],
    ) -> None:
        if not self.is_enabled_for(level):
            return
        if callable(message):
            try:
                message = message()
            except Exception:
                logger.exception("Could not build lazy message for %s", self.display_name)
                return
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                logger.exception(
                    "Could not interpolate arguments into message %r for %s",
                    message, self.display_name,
                )
                return
        self.log(str(message), level, LogInfo(logger_name=self.identifier, level=level, extra=extra))

    def debug(self, message: str | Callable[[], str], *args: Any, **extra: Any) -> None:
        self._emit(LogLevel.DEBUG, message, args, extra)

    def info(self, message: str | Callable[[], str], *args: Any, **extra: Any) -> None:
        self._emit(LogLevel.INFO, message, args, extra)

    def warning(self, message: str | Callable[[], str], *args: Any, **extra: Any) -> None:
        self._emit(LogLevel.WARNING, message, args, extra)

    def error(self, message: str | Callable[[], str], *args: Any, **extra: Any) -> None:
        self._emit(LogLevel.ERROR, message, args, extra)

    def fatal(self, message: str | Callable[[], str], *args: Any, **extra: Any) -> None:
        self._emit(LogLevel.FATAL, message, args, extra)

    warn = warning
    critical = fatal

    def __repr__(self) -> str:
        name = self.identifier or "<root>"
        return f"Logger({name!r}, threshold={self.threshold.display_name}, appenders={len(self.appenders)})"
