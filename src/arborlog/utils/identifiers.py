"""Dot-delimited logger identifier helpers."""

from __future__ import annotations

from collections.abc import Iterator

DELIMITER = "."


def remove_last_component(identifier: str, delimiter: str = DELIMITER) -> str:
    """Strip the last delimited component of an identifier.

    The cut happens at the last delimiter, so empty components are kept
    as-is: ``"a..b"`` becomes ``"a."`` and ``".a"`` becomes ``""``.

    Args:
        identifier: Identifier such as ``"app.network.http"``
        delimiter: Component separator

    Returns:
        str: The parent identifier, or an empty string at the top level
    """
    head, found, _ = identifier.rpartition(delimiter)
    return head if found else ""


def candidate_identifiers(identifier: str) -> Iterator[str]:
    """Yield an identifier followed by each of its textual ancestors.

    The empty string (the root) is never yielded.
    """
    candidate = identifier
    while candidate:
        yield candidate
        candidate = remove_last_component(candidate)
