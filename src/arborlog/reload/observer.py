"""Polling file observer.

The observer compares the file's (mtime, size) signature on every poll and
calls ``on_change`` with the path whenever it differs, including when a
missing file appears. A file that disappears is not reported.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_RELOAD_INTERVAL = 5.0

Signature = tuple[int, int]


def file_signature(path: Path) -> Signature | None:
    """Return the (mtime_ns, size) of a file, or None if it does not exist."""
    try:
        stat = os.stat(path)
    except FileNotFoundError:
        return None
    return (stat.st_mtime_ns, stat.st_size)


class FileObserver:
    """Watches one file on a background daemon thread."""

    def __init__(
        self,
        path: Path,
        on_change: Callable[[Path], None],
        interval: float = DEFAULT_RELOAD_INTERVAL,
    ) -> None:
        """Initialize observer.

        Args:
            path: File to watch
            on_change: Called with ``path`` after each detected change
            interval: Seconds between two polls
        """
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self.path = path
        self.interval = interval
        self._on_change = on_change
        self._last_signature = file_signature(path)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name=f"arborlog-observer-{self.path.name}", daemon=True
        )
        self._thread.start()
        logger.debug("Watching %s every %.1fs", self.path, self.interval)

    def stop(self) -> None:
        """Stop polling. Safe to call from the observer's own callback."""
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval + 1.0)

    def poll(self) -> bool:
        """Check the file once and notify if it changed.

        Returns:
            True if a change was reported
        """
        signature = file_signature(self.path)
        if signature == self._last_signature:
            return False
        self._last_signature = signature
        if signature is None:
            return False
        self._on_change(self.path)
        return True

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.poll()
            except Exception:
                logger.exception("Change handler for %s failed", self.path)
