"""
Centralized error handling for the combat core.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class GameException(Exception):
    """Base class for every error raised by the combat core."""


class LoopStateError(GameException):
    """Raised when a battle-loop operation is invalid in the current phase."""


class BattleConfigurationError(GameException):
    """Raised when a battle cannot start because it could never finish."""


class ContentError(GameException):
    """Raised when a content file cannot be read or parsed."""


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class GameError:
    """Represents an error with severity, context, and optional exception."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Centralized error handling for the combat core."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("autobattle.errors")
        self.error_history: list[GameError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> GameError:
        """Record an error and log it according to its severity."""
        error = GameError(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        # Prefix context keys to avoid conflicts with logging reserved keys.
        safe_context = {f"ctx_{key}": value for key, value in error.context.items()}

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)
        return error

    def safe_execute(
        self,
        operation: Callable[[], T],
        default: T,
        error_message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[dict[str, Any]] = None,
    ) -> tuple[T, Optional[GameError]]:
        """
        Execute an operation, converting any exception into a recorded error.

        Returns:
            tuple[T, GameError | None]:
                The operation result (or the default on failure) and the
                recorded error, if any.

        """
        try:
            return operation(), None
        except Exception as e:
            error = self.handle(
                f"{error_message}: {e}",
                severity,
                context,
                e,
            )
            return default, error

    def clear(self) -> None:
        """Forget every recorded error."""
        self.error_history.clear()


# Global error handler instance
ERROR_HANDLER = ErrorHandler()
