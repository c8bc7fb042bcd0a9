"""Tests for orcid_profile.logging_config module."""

import logging

from orcid_profile.logging_config import get_logger, setup_logging


def test_setup_logging_configures_package_logger():
    logger = setup_logging(level="DEBUG")

    assert logger.name == "orcid_profile"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logging_does_not_duplicate_handlers():
    setup_logging()
    logger = setup_logging()

    assert len(logger.handlers) == 1


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "orcid.log"
    logger = setup_logging(level="INFO", log_file=log_file)

    get_logger("test").info("hello from the test")
    for handler in logger.handlers:
        handler.flush()

    assert log_file.exists()
    assert "hello from the test" in log_file.read_text()
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_get_logger_is_namespaced():
    assert get_logger("profile").name == "orcid_profile.profile"
