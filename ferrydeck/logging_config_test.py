"""Tests for logging setup."""

import logging

import pytest

from ferrydeck.logging_config import LOG_FORMAT, setup_logging


@pytest.fixture
def ferrydeck_logger():
    logger = logging.getLogger("ferrydeck")
    http = logging.getLogger("urllib3")
    http_level = http.level
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    http.setLevel(http_level)


def test_returns_package_logger(ferrydeck_logger):
    assert setup_logging() is ferrydeck_logger


def test_repeated_setup_does_not_stack_handlers(ferrydeck_logger):
    setup_logging(logging.INFO)
    setup_logging(logging.DEBUG)
    assert len(ferrydeck_logger.handlers) == 1
    assert ferrydeck_logger.level == logging.DEBUG
    assert ferrydeck_logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_log_file_is_appended(ferrydeck_logger, tmp_path):
    path = tmp_path / "ferrydeck.log"
    path.write_text("earlier run\n", encoding="utf-8")
    setup_logging(logging.INFO, str(path))
    logging.getLogger("ferrydeck.engine.api").info("hello deck")
    for handler in ferrydeck_logger.handlers:
        handler.flush()
    text = path.read_text(encoding="utf-8")
    assert text.startswith("earlier run\n")
    assert "INFO    ferrydeck.engine.api: hello deck" in text


class TestHttpLogger:
    def test_quiet_unless_debug(self, ferrydeck_logger):
        setup_logging(logging.INFO)
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_follows_debug(self, ferrydeck_logger):
        setup_logging(logging.DEBUG)
        assert logging.getLogger("urllib3").level == logging.DEBUG
