"""
Tests for mediaflow.utils.logging_config
"""

import logging

import pytest

from mediaflow.utils.logging_config import LoggingConfig


@pytest.fixture
def logging_setup():
    config = LoggingConfig()
    yield config
    root = logging.getLogger()
    for handler in (config._console_handler, config._log_file_handler):
        if handler is not None:
            root.removeHandler(handler)
            handler.close()


class TestLoggingConfig:
    def test_level_mapping(self, logging_setup):
        logging_setup.configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging_setup.is_debug_enabled()

    def test_unknown_level_falls_back_to_info(self, logging_setup):
        logging_setup.configure_logging(level="loud")
        assert logging.getLogger().level == logging.INFO

    def test_configure_is_idempotent_without_force(self, logging_setup):
        logging_setup.configure_logging(level="error")
        logging_setup.configure_logging(level="debug")
        assert logging.getLogger().level == logging.ERROR

        logging_setup.configure_logging(level="debug", force=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_log_file(self, logging_setup, tmp_path):
        log_file = tmp_path / "logs" / "mediaflow.log"
        logging_setup.configure_logging(level="info", log_file=str(log_file))

        logging.getLogger("mediaflow.test").info("pipeline validated")
        logging_setup._log_file_handler.flush()

        assert "pipeline validated" in log_file.read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, logging_setup):
        logging_setup.configure_logging(level="info")
        first = logging_setup._console_handler
        logging_setup.configure_logging(level="info", force=True)

        assert logging_setup._console_handler is not first
        assert first not in logging.getLogger().handlers
