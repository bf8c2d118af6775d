"""Tests for logging utilities."""

import logging
from io import StringIO

from qkron import QuantumState, apply
from qkron.gates import HADAMARD
from qkron.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_returns_logger():
    """Test that get_logger returns a namespaced logger."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "qkron.test_module"


def test_get_logger_keeps_package_names():
    """Test that names already under qkron are not prefixed twice."""
    assert get_logger("qkron.engine.apply").name == "qkron.engine.apply"
    assert get_logger().name == "qkron"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_logger_output():
    """Test that logger outputs messages to the configured stream."""
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        get_logger("test_module").info("Test message")
        output = stream.getvalue()
        assert "Test message" in output
        assert "[INFO] qkron.test_module" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_new_loggers_pick_up_configuration():
    """Test loggers created after configure_logging use its settings."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream, format_string="%(message)s")
        get_logger("created_later").debug("late message")
        assert stream.getvalue() == "late message\n"
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")
    try:
        set_log_level(logging.INFO)
        assert logger.level == logging.INFO
    finally:
        set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("test_module").propagate is False


def test_engine_logs_expansion_at_debug():
    """Test the engine reports gate expansion when DEBUG is enabled."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        apply(HADAMARD, QuantumState.zero(2), 1)
        assert "expanding Gate(H, num_qubits=1)" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_engine_silent_by_default():
    """Test nothing is logged at the default WARNING level."""
    stream = StringIO()
    try:
        configure_logging(level=logging.WARNING, stream=stream)
        apply(HADAMARD, QuantumState.zero(2), 1)
        assert stream.getvalue() == ""
    finally:
        configure_logging(level=logging.WARNING)
