"""Tests for logging configuration."""

import logging

from intake_tracker.app_logging import LOG_FORMAT, LOGGER_NAME, configure_logging


def test_repeated_configuration_keeps_one_handler() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    configure_logging("warning")

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_configured_logger_does_not_propagate() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    returned = configure_logging("debug")

    assert returned is logger
    assert logger.propagate is False
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT
