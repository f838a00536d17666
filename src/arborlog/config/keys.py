"""Dictionary keys recognised in logging configurations."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from arborlog.exceptions import ConfigurationError
from arborlog.models.levels import LogLevel


class DictionaryKey(StrEnum):
    """Keys shared by every section of a configuration."""

    CLASS_NAME = "Class"
    FORMATTERS = "Formatters"
    APPENDERS = "Appenders"
    LOGGERS = "Loggers"
    ROOT_LOGGER = "RootLogger"
    IDENTIFIER = "Identifier"
    THRESHOLD_LEVEL = "ThresholdLevel"
    FORMATTER_ID = "FormatterId"
    APPENDER_IDS = "AppenderIds"


def identifier_from_dictionary(dictionary: Mapping[str, Any], section: str) -> str:
    """Extract the mandatory identifier of a configuration entry.

    Args:
        dictionary: One entry of the Formatters, Appenders or Loggers list
        section: Entry kind used in error messages ("formatter", "appender", "logger")

    Returns:
        str: The non-empty identifier

    Raises:
        ConfigurationError: If the identifier is missing, not a string or empty
    """
    identifier = dictionary.get(DictionaryKey.IDENTIFIER)
    if identifier is None:
        raise ConfigurationError(
            f"Missing '{DictionaryKey.IDENTIFIER}' parameter in {section} dictionary"
        )
    if not isinstance(identifier, str):
        raise ConfigurationError(
            f"'{DictionaryKey.IDENTIFIER}' parameter in {section} dictionary must be a string, "
            f"got {type(identifier).__name__}"
        )
    if not identifier:
        raise ConfigurationError(
            f"Empty '{DictionaryKey.IDENTIFIER}' parameter in {section} dictionary"
        )
    return identifier


def threshold_from_dictionary(
    dictionary: Mapping[str, Any], owner: str, key: str = DictionaryKey.THRESHOLD_LEVEL
) -> LogLevel | None:
    """Parse an optional level field.

    Args:
        dictionary: Configuration entry
        owner: Description of the entry for error messages, e.g. "appender 'console'"
        key: Field holding the level name

    Returns:
        The parsed level, or None if the field is absent

    Raises:
        ConfigurationError: If the field is present but is not a known level name
    """
    value = dictionary.get(key)
    if value is None:
        return None
    level = LogLevel.parse(value) if isinstance(value, str) else None
    if level is None:
        raise ConfigurationError(f"Invalid '{key}' value '{value}' for {owner}")
    return level


def string_from_dictionary(
    dictionary: Mapping[str, Any], key: str, owner: str, *, required: bool = False
) -> str | None:
    """Read an optional (or required) string field of a configuration entry."""
    value = dictionary.get(key)
    if value is None:
        if required:
            raise ConfigurationError(f"Missing '{key}' parameter for {owner}")
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"'{key}' parameter for {owner} must be a string")
    return value
