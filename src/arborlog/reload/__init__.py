"""File watching for configuration live reload."""

from arborlog.reload.observer import DEFAULT_RELOAD_INTERVAL, FileObserver

__all__ = ["FileObserver", "DEFAULT_RELOAD_INTERVAL"]
