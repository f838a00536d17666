"""Severity levels, ordered from least to most severe."""

from __future__ import annotations

from enum import IntEnum

# Configuration spellings accepted on top of the canonical level names
_ALIASES: dict[str, str] = {
    "warn": "warning",
    "critical": "fatal",
}


class LogLevel(IntEnum):
    """Severity of a log message.

    Only the ordering is meaningful; the numeric values are not part of
    the configuration format.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @property
    def display_name(self) -> str:
        """Name as written in configuration files (e.g. ``Warning``)."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> LogLevel | None:
        """Parse a level name case-insensitively.

        Args:
            text: Level name such as ``"Info"``, ``"warn"`` or ``"CRITICAL"``

        Returns:
            The matching level, or None if the name is unknown
        """
        key = text.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls[key.upper()]
        except KeyError:
            return None

    @classmethod
    def most_permissive(cls) -> LogLevel:
        return min(cls)

    def __str__(self) -> str:
        return self.display_name
