"""Tests for environment configuration and its logging."""

import logging

import pytest

from ajaxsubmit_core.config import Config
from ajaxsubmit_core.config_logger import get_all_config_variables, log_all_config
from ajaxsubmit_core.diagnostics import enable_diagnostics, get_logger


class TestConfig:

    def test_explicit_values(self):
        cfg = Config(request_timeout=5.0, enable_debug=False, log_level="WARNING", verify_ssl=False)

        assert cfg.request_timeout == 5.0
        assert cfg.log_level == "WARNING"
        assert cfg.verify_ssl is False

    def test_debug_forces_debug_level(self):
        cfg = Config(enable_debug=True, log_level="INFO")

        assert cfg.log_level == "DEBUG"

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError):
            Config(request_timeout=0)


class TestConfigLogger:

    def test_variables_map_env_names(self):
        cfg = Config(request_timeout=None, enable_debug=False, log_level="INFO", user_agent=None)

        variables = get_all_config_variables(cfg)

        assert variables["AJAXSUBMIT_REQUEST_TIMEOUT"] == "default"
        assert variables["AJAXSUBMIT_LOG_LEVEL"] == "INFO"
        assert variables["AJAXSUBMIT_USER_AGENT"] == "None"
        assert set(variables) == {
            "AJAXSUBMIT_REQUEST_TIMEOUT",
            "AJAXSUBMIT_DEBUG",
            "AJAXSUBMIT_LOG_LEVEL",
            "AJAXSUBMIT_VERIFY_SSL",
            "AJAXSUBMIT_USER_AGENT",
        }

    def test_log_all_config(self, caplog):
        logger = logging.getLogger("ajaxsubmit_core.tests.config")
        cfg = Config(request_timeout=2.5, enable_debug=False, log_level="INFO")

        with caplog.at_level(logging.INFO, logger="ajaxsubmit_core.tests.config"):
            log_all_config(logger, cfg)

        assert "AJAXSUBMIT_REQUEST_TIMEOUT=2.5" in caplog.text


class TestDiagnostics:

    def test_get_logger_is_cached(self):
        assert get_logger("ajaxsubmit_core.tests.cached") is get_logger("ajaxsubmit_core.tests.cached")

    def test_get_logger_has_single_handler(self):
        lg = get_logger("ajaxsubmit_core.tests.handlers")
        get_logger("ajaxsubmit_core.tests.handlers")

        assert len(lg.handlers) == 1

    def test_enable_diagnostics_sets_package_level(self):
        package_logger = logging.getLogger("ajaxsubmit_core")
        try:
            enable_diagnostics("warning")

            assert package_logger.level == logging.WARNING
        finally:
            package_logger.setLevel(logging.NOTSET)
