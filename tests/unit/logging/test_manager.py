"""
Tests for the logger slot: install, build_logger, flush-on-replace and
the new_logger() quick start.
"""

import io
import threading
from unittest.mock import Mock, patch

import pytest

from logkit.exceptions import ConfigurationError, FlushError, LogDirectoryError
from logkit.logging import manager as manager_module
from logkit.logging.config import with_log_file_path, with_log_level
from logkit.logging.handlers import ConsoleSink, FileSink
from logkit.logging.levels import Level
from logkit.logging.loggers import LoggerHandle
from logkit.logging.manager import LoggingManager, new_logger
from logkit.logging.sinks import with_console_core, with_file_core


def console_builder(stream, level="debug"):
    return with_console_core(with_log_level(level), stream=stream)


@pytest.mark.unit
class TestLoggingManager:
    """Test LoggingManager."""

    def test_starts_empty(self):
        assert LoggingManager().handle is None

    def test_managers_are_independent(self):
        assert LoggingManager() is not LoggingManager()

    def test_build_logger_installs_handle(self, manager, console_stream):
        handle = manager.build_logger(console_builder(console_stream))

        assert isinstance(handle, LoggerHandle)
        assert manager.handle is handle

    def test_build_logger_passes_handle_options(self, manager, console_stream):
        hook = Mock()

        handle = manager.build_logger(console_builder(console_stream), fatal_hook=hook, name="svc")

        assert handle.fatal_hook is hook
        assert handle.tee.name == "svc"

    def test_failed_build_keeps_previous_handle(self, manager, console_stream):
        first = manager.build_logger(console_builder(console_stream))

        with pytest.raises(ConfigurationError):
            manager.build_logger(with_file_core(with_log_file_path("")))

        assert manager.handle is first

    def test_install_flushes_previous_handle(self, manager):
        previous = Mock(spec=LoggerHandle)
        replacement = Mock(spec=LoggerHandle)
        manager.install(previous)

        manager.install(replacement)

        previous.flush.assert_called_once()
        replacement.flush.assert_not_called()
        assert manager.handle is replacement

    def test_install_ignores_flush_failure(self, manager):
        previous = Mock(spec=LoggerHandle)
        previous.flush.side_effect = FlushError([OSError("disk gone")])
        manager.install(previous)
        replacement = Mock(spec=LoggerHandle)

        assert manager.install(replacement) is replacement
        assert manager.handle is replacement

    def test_reinstalling_same_handle_does_not_flush(self, manager):
        handle = Mock(spec=LoggerHandle)
        manager.install(handle)

        manager.install(handle)

        handle.flush.assert_not_called()

    def test_previous_records_flushed_before_replacement_writes(self, manager, temp_dir, read_json_lines):
        path = temp_dir / "app.log"
        first = manager.build_logger(with_file_core(with_log_file_path(path)))
        first.info("from first")

        second = manager.build_logger(with_console_core(stream=io.StringIO()))

        assert [entry["msg"] for entry in read_json_lines(path)] == ["from first"]
        assert manager.handle is second

    def test_old_handle_stays_usable(self, manager):
        old_stream, new_stream = io.StringIO(), io.StringIO()
        old = manager.build_logger(console_builder(old_stream))
        manager.build_logger(console_builder(new_stream))

        old.info("late write")

        assert "late write" in old_stream.getvalue()
        assert new_stream.getvalue() == ""

    def test_flush_delegates_to_handle(self, manager):
        handle = Mock(spec=LoggerHandle)
        manager.install(handle)

        manager.flush()

        handle.flush.assert_called_once()

    def test_flush_without_handle_is_noop(self, manager):
        manager.flush()

    def test_reset_empties_slot_without_flush(self, manager):
        handle = Mock(spec=LoggerHandle)
        manager.install(handle)

        manager.reset()

        assert manager.handle is None
        handle.flush.assert_not_called()

    def test_concurrent_installs_leave_one_winner(self, manager):
        handles = [Mock(spec=LoggerHandle) for _ in range(16)]
        threads = [threading.Thread(target=manager.install, args=(h,)) for h in handles]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert manager.handle in handles
        flushed = [h for h in handles if h.flush.called]
        assert len(flushed) == len(handles) - 1
        assert manager.handle not in flushed


@pytest.mark.unit
class TestModuleFunctions:
    """Test the default-slot helpers."""

    def test_build_logger_uses_default_slot(self, console_stream):
        handle = manager_module.build_logger(console_builder(console_stream))

        assert manager_module.get_logger() is handle
        assert manager_module.logging_manager.handle is handle

    def test_get_logger_before_build_is_none(self):
        assert manager_module.get_logger() is None

    def test_install_and_flush(self):
        handle = Mock(spec=LoggerHandle)

        manager_module.install(handle)
        manager_module.flush()

        handle.flush.assert_called_once()


@pytest.mark.unit
class TestNewLogger:
    """Test new_logger()."""

    def test_builds_file_and_console_sinks(self, manager, temp_dir, console_stream, monkeypatch, read_json_lines):
        monkeypatch.setattr("sys.stdout", console_stream)
        log_dir = temp_dir / "logs"

        handle = new_logger("debug", log_dir=str(log_dir), manager=manager)
        handle.flush()

        file_sink, console_sink = handle.tee.sinks
        assert isinstance(file_sink, FileSink)
        assert isinstance(console_sink, ConsoleSink)
        assert file_sink.level == console_sink.level == Level.DEBUG
        assert file_sink.maxBytes == 10 * 1024 * 1024
        assert file_sink.rotation.max_age == 7
        assert file_sink.rotation.compress is True
        assert manager.handle is handle

        entries = read_json_lines(log_dir / "logkit.log")
        assert entries[0]["msg"] == "Logger initialized with file and console sinks"
        assert "Logger initialized with file and console sinks" in console_stream.getvalue()

    def test_directory_failure(self, manager, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("")

        with pytest.raises(LogDirectoryError) as exc_info:
            new_logger("info", log_dir=str(blocker / "logs"), manager=manager)

        assert exc_info.value.error_code == "CONFIG_LOG_DIR"
        assert manager.handle is None

    def test_rejects_unknown_level(self, manager, temp_dir):
        with pytest.raises(ConfigurationError):
            new_logger("chatty", log_dir=str(temp_dir), manager=manager)

    def test_defaults_to_process_slot(self, temp_dir, console_stream):
        with patch("sys.stdout", console_stream):
            handle = new_logger(Level.INFO, log_dir=str(temp_dir))

        assert manager_module.get_logger() is handle
