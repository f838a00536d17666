"""Tests for file based configuration and live reload."""

import json
import logging
import plistlib
import time

import pytest

from arborlog.config.sources import read_configuration_file
from arborlog.exceptions import ConfigurationError
from arborlog.models.levels import LogLevel
from arborlog.reload.observer import FileObserver
from conftest import FIXTURES_DIR, FakeObserver

APP_INFO = """
Appenders:
  - Identifier: memory
    Class: RecordingAppender
Loggers:
  - Identifier: app
    ThresholdLevel: Info
    AppenderIds: [memory]
"""

APP_ERROR = APP_INFO.replace("Info", "Error")


class TestSources:
    def test_yaml_fixture(self, sample_config_path):
        data = read_configuration_file(sample_config_path)
        assert [entry["Identifier"] for entry in data["Loggers"]] == [
            "app.network.http", "app", "app.network",
        ]

    def test_json_fixture(self):
        data = read_configuration_file(FIXTURES_DIR / "sample_config.json")
        assert data["RootLogger"]["ThresholdLevel"] == "Error"

    def test_plist(self, tmp_path):
        path = tmp_path / "logging.plist"
        path.write_bytes(plistlib.dumps({"RootLogger": {"ThresholdLevel": "Info"}}))
        assert read_configuration_file(path) == {"RootLogger": {"ThresholdLevel": "Info"}}

    def test_unknown_suffix_is_read_as_yaml(self, tmp_path):
        path = tmp_path / "logging.conf"
        path.write_text(json.dumps({"Loggers": []}))
        assert read_configuration_file(path) == {"Loggers": []}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert read_configuration_file(path) == {}

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            read_configuration_file(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="should contain a dictionary"):
            read_configuration_file(path)

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            read_configuration_file(tmp_path / "absent.yaml")


class TestReadConfigurationFromFile:
    def test_loads_yaml_fixture(self, registry, sample_config_path):
        registry.read_configuration_from_file(sample_config_path)
        assert registry.get_logger("app.network.http.client").identifier == "app.network.http"
        assert registry.get_logger("app.network.tcp").threshold == LogLevel.INFO
        assert registry.watched_path is None

    def test_broken_file_surfaces_error(self, registry):
        with pytest.raises(ConfigurationError, match="No such appender 'missing' for logger 'app'"):
            registry.read_configuration_from_file(FIXTURES_DIR / "broken_config.yaml", auto_reload=True)
        assert FakeObserver.instances == []

    def test_auto_reload_arms_observer(self, registry, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text(APP_INFO)
        registry.read_configuration_from_file(path, auto_reload=True, reload_interval=0.5)

        observer = FakeObserver.instances[-1]
        assert observer.started
        assert observer.path == path
        assert observer.interval == 0.5
        assert registry.watched_path == path

    def test_change_reloads(self, registry, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text(APP_INFO)
        registry.read_configuration_from_file(path, auto_reload=True)
        handle = registry.get_logger("app")
        assert handle.threshold == LogLevel.INFO

        path.write_text(APP_ERROR)
        FakeObserver.instances[-1].trigger()
        assert handle.threshold == LogLevel.ERROR
        assert registry.get_logger("app") is handle

    def test_failed_reload_keeps_previous_configuration(self, registry, tmp_path, caplog):
        path = tmp_path / "logging.yaml"
        path.write_text(APP_INFO)
        registry.read_configuration_from_file(path, auto_reload=True)
        observer = FakeObserver.instances[-1]

        path.write_text(APP_INFO.replace("[memory]", "[ghost]"))
        with caplog.at_level(logging.ERROR, logger="arborlog"):
            observer.trigger()

        assert "Failed to reload" in caplog.text
        assert "ghost" in caplog.text
        assert registry.get_logger("app").threshold == LogLevel.INFO
        assert not observer.stopped

        # the watch keeps going: a fixed edit is picked up
        path.write_text(APP_ERROR)
        observer.trigger()
        assert registry.get_logger("app").threshold == LogLevel.ERROR

    def test_deleted_file_reload_is_reported(self, registry, tmp_path, caplog):
        path = tmp_path / "logging.yaml"
        path.write_text(APP_INFO)
        registry.read_configuration_from_file(path, auto_reload=True)
        path.unlink()
        with caplog.at_level(logging.ERROR, logger="arborlog"):
            FakeObserver.instances[-1].trigger()
        assert "Failed to reload" in caplog.text
        assert registry.get_logger("app").identifier == "app"

    def test_missing_file_is_loaded_once_created(self, registry, tmp_path):
        path = tmp_path / "later.yaml"
        with pytest.raises(FileNotFoundError):
            registry.read_configuration_from_file(path, auto_reload=True)

        observer = FakeObserver.instances[-1]
        assert observer.started
        assert registry.watched_path == path

        path.write_text(APP_INFO)
        observer.trigger()
        assert registry.get_logger("app").threshold == LogLevel.INFO

    def test_missing_file_without_auto_reload_is_not_watched(self, registry, tmp_path):
        with pytest.raises(FileNotFoundError):
            registry.read_configuration_from_file(tmp_path / "absent.yaml")
        assert FakeObserver.instances == []
        assert registry.watched_path is None

    def test_new_watch_replaces_previous(self, registry, tmp_path):
        first, second = tmp_path / "first.yaml", tmp_path / "second.yaml"
        first.write_text(APP_INFO)
        second.write_text(APP_ERROR)

        registry.read_configuration_from_file(first, auto_reload=True)
        registry.read_configuration_from_file(second, auto_reload=True)

        old, new = FakeObserver.instances
        assert old.stopped
        assert new.started and not new.stopped
        assert registry.watched_path == second

    def test_close_stops_watch(self, registry, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text(APP_INFO)
        registry.read_configuration_from_file(path, auto_reload=True)
        registry.close()
        assert FakeObserver.instances[-1].stopped
        assert registry.watched_path is None

    def test_expands_home(self, registry, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "logging.yaml").write_text(APP_INFO)
        registry.read_configuration_from_file("~/logging.yaml", auto_reload=True)
        assert registry.watched_path == tmp_path / "logging.yaml"


class TestFileObserver:
    def test_poll_reports_changes(self, tmp_path):
        path = tmp_path / "watched.yaml"
        path.write_text("a: 1\n")
        changes = []
        observer = FileObserver(path, changes.append, interval=1.0)

        assert observer.poll() is False
        path.write_text("a: 10\n")
        assert observer.poll() is True
        assert changes == [path]
        assert observer.poll() is False

    def test_poll_reports_creation_not_deletion(self, tmp_path):
        path = tmp_path / "later.yaml"
        changes = []
        observer = FileObserver(path, changes.append, interval=1.0)

        path.write_text("a: 1\n")
        assert observer.poll() is True
        path.unlink()
        assert observer.poll() is False
        assert changes == [path]

    def test_interval_must_be_positive(self, tmp_path):
        with pytest.raises(ValueError):
            FileObserver(tmp_path / "x", lambda p: None, interval=0)

    def test_background_thread_notifies(self, tmp_path):
        path = tmp_path / "watched.yaml"
        path.write_text("a: 1\n")
        changes = []
        observer = FileObserver(path, changes.append, interval=0.05)
        observer.start()
        try:
            assert observer.is_running
            path.write_text("a: 100\n")
            deadline = time.monotonic() + 5.0
            while not changes and time.monotonic() < deadline:
                time.sleep(0.02)
        finally:
            observer.stop()
        assert changes == [path]
        assert not observer.is_running

    def test_handler_failure_keeps_polling(self, tmp_path, caplog):
        path = tmp_path / "watched.yaml"
        path.write_text("a: 1\n")
        calls = []

        def flaky(changed):
            calls.append(changed)
            if len(calls) == 1:
                raise RuntimeError("first reload exploded")

        observer = FileObserver(path, flaky, interval=0.05)
        with caplog.at_level(logging.ERROR, logger="arborlog"):
            observer.start()
            try:
                path.write_text("a: 22\n")
                deadline = time.monotonic() + 5.0
                while not calls and time.monotonic() < deadline:
                    time.sleep(0.02)
                path.write_text("a: 333\n")
                deadline = time.monotonic() + 5.0
                while len(calls) < 2 and time.monotonic() < deadline:
                    time.sleep(0.02)
            finally:
                observer.stop()
        assert len(calls) == 2
        assert "first reload exploded" in caplog.text
