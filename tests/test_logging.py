"""Tests for logging utilities."""

import logging
from io import StringIO

from qcircuit.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "qcircuit.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("qcircuit.circuit.execution").name == "qcircuit.circuit.execution"
    assert get_logger().name == "qcircuit"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("handler_count_module")
    logger2 = get_logger("handler_count_module")
    assert logger1 is logger2
    stream_handlers = [h for h in logger1.handlers if type(h) is logging.StreamHandler]
    assert len(stream_handlers) == 1


def test_get_logger_different_modules():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level_accepts_names():
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)
    finally:
        set_log_level(logging.WARNING)


def test_set_log_level_applies_to_new_loggers():
    try:
        set_log_level(logging.INFO)
        assert get_logger("created_after_level_change").level == logging.INFO
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_stream_and_format():
    stream = StringIO()
    logger = get_logger("test_module")
    try:
        configure_logging(level=logging.DEBUG, format_string="%(levelname)s|%(message)s", stream=stream)
        logger.debug("Debug message")
    finally:
        configure_logging(level=logging.WARNING)

    assert stream.getvalue() == "DEBUG|Debug message\n"


def test_default_format_includes_level_and_name():
    stream = StringIO()
    logger = get_logger("test_module")
    try:
        configure_logging(level=logging.INFO, stream=stream)
        logger.info("Test message")
    finally:
        configure_logging(level=logging.WARNING)

    assert stream.getvalue() == "[INFO] qcircuit.test_module: Test message\n"


def test_execution_logs_debug_summary(torch_rng):
    from qcircuit.presets import bell_state

    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        bell_state().execute(shots=8, generator=torch_rng)
    finally:
        configure_logging(level=logging.WARNING)

    assert "Executed 'bell': 4 gates, 8 shots" in stream.getvalue()


def test_logger_does_not_propagate():
    assert get_logger("test_module").propagate is False
