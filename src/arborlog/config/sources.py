"""Reading configuration mappings from YAML, JSON and plist files."""

from __future__ import annotations

import json
import plistlib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from xml.parsers.expat import ExpatError

from arborlog.exceptions import ConfigurationError


def _load_yaml(raw: bytes) -> Any:
    return yaml.safe_load(raw)


def _load_json(raw: bytes) -> Any:
    return json.loads(raw)


def _load_plist(raw: bytes) -> Any:
    return plistlib.loads(raw)


PARSERS = {
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".json": _load_json,
    ".plist": _load_plist,
}


def expand_path(path: Path | str) -> Path:
    return Path(path).expanduser()


def read_configuration_file(path: Path | str) -> Mapping[str, Any]:
    """Read a configuration file into a mapping.

    The parser is chosen from the file suffix; unknown suffixes are read as
    YAML, which also accepts JSON documents.

    Args:
        path: Path to the configuration file (``~`` is expanded)

    Returns:
        The top-level mapping of the document

    Raises:
        OSError: If the file cannot be read
        ConfigurationError: If the document cannot be parsed or is not a mapping
    """
    path = expand_path(path)
    raw = path.read_bytes()
    parser = PARSERS.get(path.suffix.lower(), _load_yaml)
    try:
        data = parser(raw)
    except (yaml.YAMLError, ValueError, ExpatError) as exc:
        raise ConfigurationError(f"Could not parse configuration file '{path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Configuration file '{path}' should contain a dictionary, got {type(data).__name__}"
        )
    return data
