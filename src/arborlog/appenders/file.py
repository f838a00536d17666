"""File appender."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import IO, Any

from arborlog.appenders.base import Appender
from arborlog.config.keys import string_from_dictionary
from arborlog.formatters.base import Formatter
from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel

FILE_PATH_KEY = "FilePath"


class FileAppender(Appender):
    """Append messages to a file, one per line.

    The file is opened on first write. If it is deleted or moved while
    open (e.g. by an external rotation tool) it is re-created at the
    configured path. Once closed, the appender drops further messages.
    """

    def __init__(self, identifier: str, file_path: Path | str | None = None) -> None:
        super().__init__(identifier)
        self.file_path = Path(file_path).expanduser() if file_path is not None else None
        self._handle: IO[str] | None = None
        self._lock = threading.Lock()
        self._closed = False

    def update_with_dictionary(
        self, dictionary: Mapping[str, Any], available_formatters: Sequence[Formatter]
    ) -> None:
        super().update_with_dictionary(dictionary, available_formatters)
        file_path = string_from_dictionary(dictionary, FILE_PATH_KEY, self._owner, required=True)
        self.file_path = Path(file_path).expanduser()

    def perform_log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        if self.file_path is None:
            return
        with self._lock:
            if self._closed:
                return
            if self._handle is None or not self.file_path.exists():
                self._reopen()
            self._handle.write(message + "\n")
            self._handle.flush()

    def _reopen(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.file_path, "a", encoding="utf-8")

    def close(self) -> None:
        with self._lock:
            self._closed = True
            if self._handle is not None:
                self._handle.close()
                self._handle = None
