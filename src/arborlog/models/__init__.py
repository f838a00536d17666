"""Value types shared by loggers, appenders and formatters."""

from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel

__all__ = ["LogInfo", "LogLevel"]
