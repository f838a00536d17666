"""JSON formatter: one JSON object per message."""

from __future__ import annotations

import json

from arborlog.formatters.base import Formatter
from arborlog.models.info import LogInfo
from arborlog.utils.timestamps import iso_timestamp


class JsonFormatter(Formatter):
    """Render each message as a single-line JSON document."""

    def format(self, message: str, info: LogInfo) -> str:
        payload = {
            "timestamp": iso_timestamp(info.timestamp),
            "level": info.level.display_name,
            "logger": info.logger_name,
            "thread": info.thread_name,
            "message": message,
        }
        if info.extra:
            payload["extra"] = info.extra
        return json.dumps(payload, default=str)
