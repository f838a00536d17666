"""Configuration loader: turns a nested mapping into formatters, appenders and logger updates.

The loader never touches a registry. It builds and validates the complete
object graph first, so an invalid configuration leaves the installed one
untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from arborlog.appenders import APPENDER_TYPES
from arborlog.appenders.base import Appender
from arborlog.config.keys import DictionaryKey, identifier_from_dictionary
from arborlog.exceptions import ConfigurationError
from arborlog.formatters import FORMATTER_TYPES
from arborlog.formatters.base import Formatter
from arborlog.logger import LoggerUpdate

logger = logging.getLogger(__name__)


@dataclass
class ConfigurationPlan:
    """Everything one configuration load produced, ready to be installed."""

    formatters: list[Formatter] = field(default_factory=list)
    appenders: list[Appender] = field(default_factory=list)
    root_update: LoggerUpdate | None = None
    # Sorted by ascending identifier length so parents are registered before children
    logger_updates: list[tuple[str, LoggerUpdate]] = field(default_factory=list)


def _section_entries(
    configuration: Mapping[str, Any], key: DictionaryKey, section: str
) -> list[Mapping[str, Any]]:
    entries = configuration.get(key)
    if entries is None:
        return []
    if isinstance(entries, (str, Mapping)) or not isinstance(entries, list):
        raise ConfigurationError(f"The '{key}' parameter should be a list of dictionaries")
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ConfigurationError(
                f"Every entry of '{key}' should be a {section} dictionary, got {entry!r}"
            )
    return entries


def _class_name(entry: Mapping[str, Any], section: str, identifier: str) -> str:
    class_name = entry.get(DictionaryKey.CLASS_NAME)
    if not isinstance(class_name, str) or not class_name:
        raise ConfigurationError(
            f"Missing '{DictionaryKey.CLASS_NAME}' parameter for {section} '{identifier}'"
        )
    return class_name


class ConfigurationLoader:
    """Parse configuration mappings into a ConfigurationPlan.

    Sections are processed in a fixed order, each feeding the next:
    Formatters, Appenders, RootLogger, Loggers.
    """

    def parse(self, configuration: Mapping[str, Any]) -> ConfigurationPlan:
        """Build and validate the object graph described by a configuration.

        Args:
            configuration: Mapping with optional Formatters, Appenders,
                RootLogger and Loggers keys. Other keys are ignored.

        Returns:
            ConfigurationPlan holding the new formatters, appenders and logger updates

        Raises:
            ConfigurationError: On the first invalid entry
        """
        if not isinstance(configuration, Mapping):
            raise ConfigurationError(
                f"A configuration should be a dictionary, got {type(configuration).__name__}"
            )

        plan = ConfigurationPlan()

        for entry in _section_entries(configuration, DictionaryKey.FORMATTERS, "formatter"):
            plan.formatters.append(self._build_formatter(entry))

        for entry in _section_entries(configuration, DictionaryKey.APPENDERS, "appender"):
            plan.appenders.append(self._build_appender(entry, plan.formatters))

        root_dictionary = configuration.get(DictionaryKey.ROOT_LOGGER)
        if root_dictionary is not None:
            if not isinstance(root_dictionary, Mapping):
                raise ConfigurationError(
                    f"The '{DictionaryKey.ROOT_LOGGER}' parameter should be a dictionary"
                )
            plan.root_update = LoggerUpdate.from_dictionary(
                root_dictionary, plan.appenders, "root logger"
            )

        logger_entries = [
            (identifier_from_dictionary(entry, "logger"), entry)
            for entry in _section_entries(configuration, DictionaryKey.LOGGERS, "logger")
        ]
        logger_entries.sort(key=lambda item: len(item[0]))
        for identifier, entry in logger_entries:
            update = LoggerUpdate.from_dictionary(entry, plan.appenders, f"logger '{identifier}'")
            plan.logger_updates.append((identifier, update))

        logger.debug(
            "Parsed configuration: %d formatters, %d appenders, %d loggers",
            len(plan.formatters), len(plan.appenders), len(plan.logger_updates),
        )
        return plan

    def _build_formatter(self, entry: Mapping[str, Any]) -> Formatter:
        identifier = identifier_from_dictionary(entry, "formatter")
        class_name = _class_name(entry, "formatter", identifier)
        formatter_type = FORMATTER_TYPES.get(class_name)
        if formatter_type is None:
            raise ConfigurationError(
                f"Unknown formatter class '{class_name}' for formatter '{identifier}'"
            )
        formatter = formatter_type(identifier)
        formatter.update_with_dictionary(entry)
        return formatter

    def _build_appender(self, entry: Mapping[str, Any], formatters: list[Formatter]) -> Appender:
        identifier = identifier_from_dictionary(entry, "appender")
        class_name = _class_name(entry, "appender", identifier)
        appender_type = APPENDER_TYPES.get(class_name.lower())
        if appender_type is None:
            raise ConfigurationError(
                f"Unknown appender class '{class_name}' for appender '{identifier}'"
            )
        appender = appender_type(identifier)
        appender.update_with_dictionary(entry, formatters)
        return appender
