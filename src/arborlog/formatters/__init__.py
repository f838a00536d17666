"""Formatters and the closed class-name table used by the configuration loader."""

from arborlog.formatters.base import Formatter
from arborlog.formatters.pattern import PatternFormatter
from arborlog.formatters.structured import JsonFormatter

# Matched case-sensitively against the 'Class' field of formatter entries
FORMATTER_TYPES: dict[str, type[Formatter]] = {
    "PatternFormatter": PatternFormatter,
    "JsonFormatter": JsonFormatter,
}

__all__ = ["Formatter", "PatternFormatter", "JsonFormatter", "FORMATTER_TYPES"]
