"""arborlog: hierarchical, configuration-driven logging with live reload."""

from arborlog.appenders import Appender, FileAppender, LoggingAppender, RichConsoleAppender, StdOutAppender
from arborlog.exceptions import ArborlogError, ConfigurationError
from arborlog.formatters import Formatter, JsonFormatter, PatternFormatter
from arborlog.logger import Logger
from arborlog.models import LogInfo, LogLevel
from arborlog.registry import LoadedConfiguration, LoggerRegistry, default_registry, get_logger

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "Appender",
    "ArborlogError",
    "ConfigurationError",
    "FileAppender",
    "Formatter",
    "JsonFormatter",
    "LoadedConfiguration",
    "LogInfo",
    "LogLevel",
    "Logger",
    "LoggerRegistry",
    "LoggingAppender",
    "PatternFormatter",
    "RichConsoleAppender",
    "StdOutAppender",
    "default_registry",
    "get_logger",
]
