"""Abstract base class for formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from arborlog.models.info import LogInfo


class Formatter(ABC):
    """Turns a raw message and its metadata into the string an appender writes.

    Formatters are built once per configuration load and never mutated
    afterwards, so several appenders may share one.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier

    def update_with_dictionary(self, dictionary: Mapping[str, Any]) -> None:
        """Read formatter specific fields from its configuration entry."""

    @abstractmethod
    def format(self, message: str, info: LogInfo) -> str:
        """Render a message."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"
