"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from arborlog.appenders import APPENDER_TYPES
from arborlog.appenders.base import Appender
from arborlog.formatters.pattern import PatternFormatter
from arborlog.models.info import LogInfo
from arborlog.models.levels import LogLevel
from arborlog.registry import LoggerRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RecordingAppender(Appender):
    """Appender keeping delivered messages in memory."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.records: list[tuple[str, LogLevel]] = []
        self.closed = False

    def perform_log(self, message: str, level: LogLevel, info: LogInfo) -> None:
        self.records.append((message, level))

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.records]

    def close(self) -> None:
        self.closed = True


class FakeObserver:
    """Stands in for FileObserver; tests trigger changes by hand."""

    instances: list["FakeObserver"] = []

    def __init__(self, path, on_change, interval):
        self.path = path
        self.on_change = on_change
        self.interval = interval
        self.started = False
        self.stopped = False
        FakeObserver.instances.append(self)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def trigger(self) -> None:
        self.on_change(self.path)


@pytest.fixture
def recording_class(monkeypatch) -> type[RecordingAppender]:
    monkeypatch.setitem(APPENDER_TYPES, "recordingappender", RecordingAppender)
    return RecordingAppender


@pytest.fixture
def registry(recording_class):
    reg = LoggerRegistry(observer_factory=FakeObserver)
    yield reg
    reg.close()


@pytest.fixture(autouse=True)
def _reset_fake_observers():
    FakeObserver.instances.clear()
    yield
    FakeObserver.instances.clear()


@pytest.fixture
def info() -> LogInfo:
    return LogInfo(logger_name="app.network", level=LogLevel.INFO)


@pytest.fixture
def short_formatter() -> PatternFormatter:
    return PatternFormatter("short", "[%l] %n: %m")


@pytest.fixture
def sample_configuration() -> dict:
    return {
        "Formatters": [
            {"Identifier": "short", "Class": "PatternFormatter", "Pattern": "[%l] %n: %m"},
        ],
        "Appenders": [
            {"Identifier": "memory", "Class": "RecordingAppender", "FormatterId": "short"},
            {
                "Identifier": "alerts",
                "Class": "RecordingAppender",
                "ThresholdLevel": "Error",
            },
        ],
        "RootLogger": {"ThresholdLevel": "Warning", "AppenderIds": ["memory"]},
        "Loggers": [
            {"Identifier": "app.network", "ThresholdLevel": "Info", "AppenderIds": ["memory", "alerts"]},
            {"Identifier": "app", "ThresholdLevel": "Debug", "AppenderIds": ["memory"]},
        ],
    }


@pytest.fixture
def sample_config_path() -> Path:
    return FIXTURES_DIR / "sample_config.yaml"
