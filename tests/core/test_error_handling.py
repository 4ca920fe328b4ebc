"""
Tests for the central error handler.
"""

from autobattle.core.error_handling import (
    BattleConfigurationError,
    ContentError,
    ErrorHandler,
    ErrorSeverity,
    GameException,
    LoopStateError,
)


def test_exception_hierarchy():
    for error in (LoopStateError, BattleConfigurationError, ContentError):
        assert issubclass(error, GameException)


def test_handle_records_history():
    handler = ErrorHandler()
    error = handler.handle("Something odd", ErrorSeverity.LOW, {"key": "value"})
    assert handler.error_history == [error]
    assert error.context == {"key": "value"}


def test_safe_execute_success():
    handler = ErrorHandler()
    result, error = handler.safe_execute(lambda: 42, 0, "never fails")
    assert result == 42
    assert error is None
    assert handler.error_history == []


def test_safe_execute_failure_returns_default():
    handler = ErrorHandler()

    def explode():
        raise RuntimeError("boom")

    result, error = handler.safe_execute(explode, -1, "Operation failed", ErrorSeverity.HIGH)
    assert result == -1
    assert error.severity == ErrorSeverity.HIGH
    assert isinstance(error.exception, RuntimeError)
    assert error.message == "Operation failed: boom"
    handler.clear()
    assert handler.error_history == []
