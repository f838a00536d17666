"""Logger registry: name resolution, configuration install and live reload."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, NamedTuple

from arborlog.appenders.base import Appender
from arborlog.appenders.console import StdOutAppender
from arborlog.config.loader import ConfigurationLoader, ConfigurationPlan
from arborlog.config.sources import expand_path, read_configuration_file
from arborlog.exceptions import ConfigurationError
from arborlog.formatters.base import Formatter
from arborlog.logger import ROOT_IDENTIFIER, Logger
from arborlog.reload.observer import DEFAULT_RELOAD_INTERVAL, FileObserver
from arborlog.utils.identifiers import candidate_identifiers, remove_last_component

logger = logging.getLogger(__name__)

DEFAULT_APPENDER_ID = "defaultAppender"

ObserverFactory = Callable[[Path, Callable[[Path], None], float], FileObserver]


class LoadedConfiguration(NamedTuple):
    """Objects created by one configuration load, in processing order."""

    formatters: list[Formatter]
    appenders: list[Appender]
    loggers: list[Logger]


class LoggerRegistry:
    """Holds the root logger and every configured logger.

    Loggers are found by longest-prefix match on their dot-delimited
    identifier, falling back to the root logger. A configuration load
    replaces the whole set of registered loggers at once; loggers that
    survive a reload are updated in place so cached handles stay valid.
    """

    def __init__(
        self,
        observer_factory: ObserverFactory = FileObserver,
        loader: ConfigurationLoader | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._root_logger = Logger(ROOT_IDENTIFIER)
        self._root_logger.appenders = (StdOutAppender(DEFAULT_APPENDER_ID),)
        # Replaced wholesale, never mutated, so readers always see a complete mapping
        self._loggers: dict[str, Logger] = {}
        self._loader = loader or ConfigurationLoader()
        self._observer_factory = observer_factory
        self._observer: FileObserver | None = None
        self._installed_appenders: list[Appender] = []

    # Accessing loggers

    @property
    def root_logger(self) -> Logger:
        return self._root_logger

    @property
    def loggers(self) -> list[Logger]:
        """Registered non-root loggers, in registration order."""
        return list(self._loggers.values())

    def get_logger(self, identifier: str) -> Logger:
        """Return the registered logger with the longest matching identifier.

        ``"a.b.c"`` is looked up as ``"a.b.c"``, then ``"a.b"``, then ``"a"``;
        the root logger is returned when none of them is registered.
        """
        loggers = self._loggers
        for candidate in candidate_identifiers(identifier):
            found = loggers.get(candidate)
            if found is not None:
                return found
        return self._root_logger

    def register_logger(self, new_logger: Logger) -> None:
        """Add a logger, replacing any registered logger with the same identifier."""
        if new_logger.is_root:
            raise ValueError("The root logger cannot be registered")
        with self._lock:
            loggers = dict(self._loggers)
            loggers.pop(new_logger.identifier, None)
            loggers[new_logger.identifier] = new_logger
            self._loggers = loggers

    # Configuration

    def load_configuration(self, configuration: Mapping[str, Any]) -> LoadedConfiguration:
        """Load a configuration and install it, returning the created objects.

        Args:
            configuration: Mapping with Formatters, Appenders, RootLogger and Loggers

        Returns:
            LoadedConfiguration with the new formatters, appenders and the
            loggers configured by the Loggers section

        Raises:
            ConfigurationError: If the configuration is invalid. The registry
                is left unchanged.
        """
        plan = self._loader.parse(configuration)
        return self._install(plan)

    def read_configuration(self, configuration: Mapping[str, Any]) -> None:
        """Replace the current configuration with the one described by a mapping."""
        self.load_configuration(configuration)

    def read_configuration_from_file(
        self,
        path: Path | str,
        auto_reload: bool = False,
        reload_interval: float = DEFAULT_RELOAD_INTERVAL,
    ) -> None:
        """Load a YAML, JSON or plist configuration file.

        Args:
            path: Configuration file (``~`` is expanded)
            auto_reload: Reload the file whenever it changes. Only one file is
                watched at a time; arming a new watch cancels the previous one.
                A missing file is still watched and loaded once it is created.
            reload_interval: Seconds between two checks of the file

        Raises:
            OSError: If the file cannot be read
            ConfigurationError: If the file content is invalid
        """
        path = expand_path(path)
        try:
            self._load_file(path)
        except FileNotFoundError:
            if auto_reload:
                self.watch(path, reload_interval)
            raise
        if auto_reload:
            self.watch(path, reload_interval)

    def file_changed(self, path: Path) -> None:
        """Reload a watched configuration file.

        Failures are logged, not raised: a broken edit keeps the previous
        configuration active until the next change.
        """
        logger.info("Configuration file %s changed, reloading", path)
        try:
            self._load_file(path)
        except (ConfigurationError, OSError) as exc:
            logger.error("Failed to reload configuration file %s: %s", path, exc)

    def reset_configuration(self) -> None:
        """Unregister every logger, stop watching and restore root defaults."""
        self.stop_watching()
        with self._lock:
            previous = self._installed_appenders
            self._loggers = {}
            self._installed_appenders = []
            self._root_logger.reset()
            self._root_logger.appenders = (StdOutAppender(DEFAULT_APPENDER_ID),)
            for appender in previous:
                appender.close()

    def close(self) -> None:
        self.reset_configuration()

    def __enter__(self) -> LoggerRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Live reload

    @property
    def watched_path(self) -> Path | None:
        observer = self._observer
        return observer.path if observer is not None else None

    def watch(self, path: Path, interval: float = DEFAULT_RELOAD_INTERVAL) -> None:
        """Reload ``path`` whenever it changes, replacing any current watch."""
        observer = self._observer_factory(path, self.file_changed, interval)
        with self._lock:
            previous, self._observer = self._observer, observer
        if previous is not None:
            previous.stop()
        observer.start()

    def stop_watching(self) -> None:
        with self._lock:
            observer = self._observer
            self._observer = None
        if observer is not None:
            observer.stop()

    # Internals

    def _load_file(self, path: Path) -> None:
        self.read_configuration(read_configuration_file(path))
        logger.info("Loaded logging configuration from %s", path)

    def _install(self, plan: ConfigurationPlan) -> LoadedConfiguration:
        with self._lock:
            previous_appenders = self._installed_appenders

            if plan.root_update is not None:
                self._root_logger.apply(plan.root_update)

            loggers: dict[str, Logger] = {}
            configured: list[Logger] = []
            for identifier, update in plan.logger_updates:
                target = (
                    loggers.get(identifier)
                    or self._loggers.get(identifier)
                    or self._new_logger(identifier, loggers)
                )
                target.apply(update)
                loggers.pop(identifier, None)
                loggers[identifier] = target
                configured.append(target)

            self._loggers = loggers
            attached = self._attached_appenders()
            self._close_unused([*previous_appenders, *plan.appenders], attached)
            self._installed_appenders = attached

        return LoadedConfiguration(list(plan.formatters), list(plan.appenders), configured)

    def _new_logger(self, identifier: str, loggers: Mapping[str, Logger]) -> Logger:
        """Create a logger starting from the settings of its closest configured ancestor."""
        parent = self._root_logger
        for candidate in candidate_identifiers(remove_last_component(identifier)):
            if candidate in loggers:
                parent = loggers[candidate]
                break
        return Logger(identifier, parent.threshold, parent.appenders)

    def _attached_appenders(self) -> list[Appender]:
        """Every appender attached to the root or a registered logger, without duplicates."""
        seen: set[int] = set()
        attached = []
        for owner in (self._root_logger, *self._loggers.values()):
            for appender in owner.appenders:
                if id(appender) not in seen:
                    seen.add(id(appender))
                    attached.append(appender)
        return attached

    @staticmethod
    def _close_unused(candidates: list[Appender], attached: list[Appender]) -> None:
        in_use = {id(appender) for appender in attached}
        closed: set[int] = set()
        for appender in candidates:
            if id(appender) not in in_use and id(appender) not in closed:
                closed.add(id(appender))
                appender.close()


_default_registry: LoggerRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> LoggerRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = LoggerRegistry()
        return _default_registry


def get_logger(identifier: str = ROOT_IDENTIFIER) -> Logger:
    """Resolve a logger on the process-wide registry."""
    return default_registry().get_logger(identifier)
