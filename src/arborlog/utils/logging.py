"""Diagnostic logging for arborlog itself.

Reload failures and appender errors go through the standard ``logging``
module, never through an arborlog logger that may be mid-reload.
"""

import logging
import sys
from typing import TextIO

DIAGNOSTIC_LOGGER = "arborlog"
DIAGNOSTIC_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get the diagnostic logger of an arborlog module.

    Args:
        name: Module name (e.g., 'arborlog.registry')
    """
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DIAGNOSTIC_FORMAT,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Send arborlog diagnostics to a stream, stderr by default.

    Calling it again replaces the handler installed by the previous call;
    handlers added by the application are left alone.

    Args:
        level: Threshold for the ``arborlog`` logger hierarchy
        fmt: ``logging.Formatter`` format string
        stream: Destination stream

    Returns:
        The installed handler
    """
    logger = logging.getLogger(DIAGNOSTIC_LOGGER)
    for existing in list(logger.handlers):
        if getattr(existing, "_arborlog_diagnostics", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._arborlog_diagnostics = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
