"""Tests for environment and command-line settings."""

import logging

import pytest

from ferrydeck.config import Settings, build_arg_parser, load_settings
from ferrydeck.engine.api import DEFAULT_API_BASE_URL


class TestFromEnv:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s.api_base_url == DEFAULT_API_BASE_URL
        assert s.timeout == 30.0
        assert s.verify_ssl is True
        assert s.log_level == "INFO"
        assert s.log_file is None

    def test_values(self):
        s = Settings.from_env(
            {
                "FERRYDECK_API_URL": "https://ferry.example:9000",
                "FERRYDECK_TIMEOUT": "5",
                "FERRYDECK_VERIFY_SSL": "false",
                "FERRYDECK_LOG_LEVEL": "debug",
                "FERRYDECK_LOG_FILE": "/tmp/ferrydeck.log",
            }
        )
        assert s.api_base_url == "https://ferry.example:9000"
        assert s.timeout == 5.0
        assert s.verify_ssl is False
        assert s.log_level == "DEBUG"
        assert s.log_file == "/tmp/ferrydeck.log"

    def test_blank_values_ignored(self):
        s = Settings.from_env({"FERRYDECK_API_URL": "  "})
        assert s.api_base_url == DEFAULT_API_BASE_URL


class TestArgs:
    def test_cli_overrides_env(self):
        s = load_settings(
            ["--api-url", "http://cli:1", "--log-level", "warning"],
            environ={
                "FERRYDECK_API_URL": "http://env:2",
                "FERRYDECK_TIMEOUT": "7",
            },
        )
        assert s.api_base_url == "http://cli:1"
        assert s.log_level == "WARNING"
        assert s.timeout == 7.0

    def test_invalid_log_level_rejected(self):
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(["--log-level", "loud"])


class TestDerived:
    def test_log_level_value(self):
        assert Settings(log_level="DEBUG").log_level_value == logging.DEBUG

    def test_unknown_log_level_value(self):
        with pytest.raises(ValueError):
            _ = Settings(log_level="LOUD").log_level_value

    def test_api_config(self):
        cfg = Settings(
            api_base_url="http://x", timeout=3, verify_ssl=False
        ).api_config()
        assert cfg.base_url == "http://x"
        assert cfg.timeout == 3
        assert cfg.verify_ssl is False
