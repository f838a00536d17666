"""Metadata attached to every message handed to an appender."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from arborlog.models.levels import LogLevel
from arborlog.utils.timestamps import utc_now


def _current_thread_name() -> str:
    return threading.current_thread().name


class LogInfo(BaseModel):
    """Context of a single log call, passed to formatters alongside the message."""

    logger_name: str = Field("", description="Identifier of the emitting logger, empty for root")
    level: LogLevel = LogLevel.DEBUG
    timestamp: datetime = Field(default_factory=utc_now)
    thread_name: str = Field(default_factory=_current_thread_name)
    extra: dict[str, Any] = Field(default_factory=dict, description="Caller supplied fields")
