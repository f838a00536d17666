"""Exception types raised by arborlog."""


class ArborlogError(Exception):
    """Base class for all arborlog errors."""


class ConfigurationError(ArborlogError, ValueError):
    """Raised when a logging configuration cannot be loaded.

    The whole load is aborted; the previously installed configuration stays
    in effect.
    """
