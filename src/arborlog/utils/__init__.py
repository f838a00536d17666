"""Utility functions for arborlog."""

from arborlog.utils.identifiers import candidate_identifiers, remove_last_component
from arborlog.utils.timestamps import DEFAULT_DATE_FORMAT, format_timestamp, iso_timestamp, utc_now

__all__ = [
    "utc_now",
    "format_timestamp",
    "iso_timestamp",
    "DEFAULT_DATE_FORMAT",
    "remove_last_component",
    "candidate_identifiers",
]
