"""
Unit tests for logging manager
"""

import json
import logging
import pytest

from utils.logging_manager import (
    LoggingManager, LogConfig, logging_manager, log_performance, ModuleLoggers
)
from utils.config_manager import UnifiedConfigManager


@pytest.fixture
def restore_root_logger():
    """Keep the root logger untouched by configure()"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def restore_performance_settings():
    """Keep performance monitoring settings untouched by configure_from_config_file()"""
    enabled = logging_manager._performance_enabled
    threshold = logging_manager._slow_operation_threshold
    yield
    logging_manager._performance_enabled = enabled
    logging_manager._slow_operation_threshold = threshold


@pytest.fixture
def quiet_config(temp_dir):
    """Config with a custom format and performance monitoring switched off"""
    config_dir = temp_dir / "config"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(json.dumps({
        "logging_config": {
            "level": "INFO",
            "format": "%(name)s | %(message)s",
            "date_format": "%H:%M",
            "file_config": {"enabled": False},
            "performance_monitoring": {"enabled": False, "slow_operation_threshold": 0.1}
        }
    }), encoding="utf-8")
    return UnifiedConfigManager(str(config_dir))


@pytest.mark.unit
class TestLoggingManager:
    """Test cases for LoggingManager class"""

    def test_singleton(self):
        """Test that LoggingManager is a singleton"""
        assert LoggingManager() is logging_manager

    def test_get_logger(self):
        """Test named logger lookup"""
        assert logging_manager.get_logger("API") is ModuleLoggers.API
        assert logging_manager.get_logger().name == "quoteserver"

    def test_configure_file_handler(self, temp_dir, restore_root_logger):
        """Test configuring console and file output"""
        logging_manager.configure(LogConfig(
            level="DEBUG",
            log_directory=str(temp_dir / "log"),
            log_filename="test.log"
        ))

        logging.getLogger("Renderer").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        assert "written to file" in (temp_dir / "log" / "test.log").read_text(encoding="utf-8")

    def test_configure_without_file(self, temp_dir, restore_root_logger):
        """Test that disabling file output creates no log directory"""
        logging_manager.configure(LogConfig(
            enable_file=False,
            log_directory=str(temp_dir / "log")
        ))

        assert not (temp_dir / "log").exists()
        assert len(logging.getLogger().handlers) == 1

    def test_set_level(self):
        """Test setting a module logger level"""
        logger = logging_manager.get_logger("LevelTest")
        logging_manager.set_level("error", "LevelTest")

        assert logger.level == logging.ERROR

    def test_configure_from_config_file(self, quiet_config, restore_root_logger,
                                        restore_performance_settings):
        """Test that format and performance settings come from the config file"""
        logging_manager.configure_from_config_file(quiet_config)

        formatter = logging.getLogger().handlers[0].formatter
        assert formatter._fmt == "%(name)s | %(message)s"
        assert formatter.datefmt == "%H:%M"
        assert logging_manager.performance_enabled is False
        assert logging_manager.slow_operation_threshold == 0.1


@pytest.mark.unit
class TestLogPerformance:
    """Test cases for log_performance decorator"""

    def test_fast_operation(self, caplog):
        """Test that fast operations are logged at debug level"""
        @log_performance("PerfTest", threshold=10.0)
        def fast():
            return 42

        with caplog.at_level(logging.DEBUG, logger="PerfTest"):
            assert fast() == 42

        assert any("completed in" in record.message for record in caplog.records)

    def test_slow_operation(self, caplog):
        """Test that slow operations produce a warning"""
        @log_performance("PerfTest", threshold=-1.0)
        def slow():
            return "done"

        with caplog.at_level(logging.DEBUG, logger="PerfTest"):
            slow()

        warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
        assert warnings and "Slow operation: slow" in warnings[0].message

    async def test_async_operation(self, caplog):
        """Test decorating a coroutine function"""
        @log_performance("PerfTest", threshold=-1.0)
        async def slow_async():
            return "async done"

        with caplog.at_level(logging.WARNING, logger="PerfTest"):
            assert await slow_async() == "async done"

        assert any("slow_async" in record.message for record in caplog.records)

    def test_monitoring_disabled(self, caplog, restore_performance_settings):
        """Test that disabled performance monitoring logs nothing"""
        logging_manager._performance_enabled = False

        @log_performance("PerfTest", threshold=-1.0)
        def slow():
            return "done"

        with caplog.at_level(logging.DEBUG, logger="PerfTest"):
            assert slow() == "done"

        assert not [record for record in caplog.records if record.name == "PerfTest"]
