"""Appenders and the closed class-name table used by the configuration loader."""

from arborlog.appenders.base import Appender
from arborlog.appenders.console import RichConsoleAppender, StdOutAppender
from arborlog.appenders.file import FileAppender
from arborlog.appenders.python_logging import LoggingAppender

# Keys are lowercase; the 'Class' field of appender entries is matched case-insensitively
APPENDER_TYPES: dict[str, type[Appender]] = {
    "stdoutappender": StdOutAppender,
    "fileappender": FileAppender,
    "richconsoleappender": RichConsoleAppender,
    "loggingappender": LoggingAppender,
}

__all__ = [
    "Appender",
    "StdOutAppender",
    "RichConsoleAppender",
    "FileAppender",
    "LoggingAppender",
    "APPENDER_TYPES",
]
