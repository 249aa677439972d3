"""
Error codes and error handling for Digital Rain.

Provides a registry of machine-readable error codes, the exception
hierarchy raised by the core, and a logging helper for errors that are
handled in place (e.g. a failed terminal size query mid-animation).

USAGE:
    from digital_rain.errors import ConfigError, EMPTY_CHARSET, handle_error

    raise ConfigError(EMPTY_CHARSET, "character set cannot be empty")

    try:
        height, width = size_provider()
    except TerminalSizeError as e:
        handle_error(e, "terminal_size", ErrorCategory.TERMINAL)
"""

import logging
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorCode:
    """A single error code with metadata."""
    code: str
    message: str
    hint: str = ""


# Configuration
EMPTY_CHARSET = ErrorCode("R001", "Empty character set", "Pass a set name or a non-empty string to --chars.")
UNKNOWN_COLOR = ErrorCode("R002", "Unknown color", "Run with --list to see the available colors, or pass #RRGGBB.")
FPS_OUT_OF_RANGE = ErrorCode("R003", "Frame rate out of range", "Use a value between 1 and 60.")
DENSITY_OUT_OF_RANGE = ErrorCode("R004", "Density out of range", "Use a value between 0.1 and 3.0.")
INVALID_DROP_LENGTH = ErrorCode("R005", "Invalid drop length bounds", "Require 1 <= min length <= max length.")
INVALID_PROBABILITY = ErrorCode("R006", "Invalid probability", "Probabilities must be between 0.0 and 1.0.")

# Environment & internal
TERMINAL_UNAVAILABLE = ErrorCode("R007", "Terminal unavailable", "Run inside an interactive terminal.")
INTERNAL_ERROR = ErrorCode("R008", "Internal error", "Re-run with --debug --log-file PATH for details.")

# Registry for code-based lookup
_ALL: Dict[str, ErrorCode] = {
    ec.code: ec
    for ec in [
        EMPTY_CHARSET, UNKNOWN_COLOR, FPS_OUT_OF_RANGE, DENSITY_OUT_OF_RANGE,
        INVALID_DROP_LENGTH, INVALID_PROBABILITY, TERMINAL_UNAVAILABLE,
        INTERNAL_ERROR,
    ]
}


def lookup(code: str) -> ErrorCode:
    """Look up an error code by its string code (e.g. 'R001')."""
    return _ALL.get(code, INTERNAL_ERROR)


class RainError(Exception):
    """Base class for all Digital Rain errors."""

    def __init__(self, error_code: ErrorCode, detail: str = ""):
        self.error_code = error_code
        self.detail = detail or error_code.message
        super().__init__(self.detail)

    @property
    def hint(self) -> str:
        return self.error_code.hint


class ConfigError(RainError):
    """Invalid configuration, raised before any Engine is built."""


class TerminalSizeError(RainError):
    """The terminal size could not be determined."""

    def __init__(self, detail: str = ""):
        super().__init__(TERMINAL_UNAVAILABLE, detail)


class ErrorCategory(Enum):
    """Categories of errors for logging."""
    CONFIG = "configuration"
    TERMINAL = "terminal"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Context captured for a handled error."""
    error: Exception
    category: ErrorCategory
    operation: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)
    stack_trace: str = ""
    additional_context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.stack_trace:
            self.stack_trace = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'error_type': type(self.error).__name__,
            'error_message': str(self.error),
            'category': self.category.value,
            'operation': self.operation,
            'timestamp': self.timestamp,
            'thread_name': self.thread_name,
            'additional_context': self.additional_context,
        }

    def format_log_message(self) -> str:
        """Format a log message with the error details."""
        lines = [
            f"{type(self.error).__name__} in {self.operation}: {self.error}",
            f"  Category: {self.category.value}",
            f"  Thread: {self.thread_name}",
        ]
        code = getattr(self.error, 'error_code', None)
        if code is not None:
            lines.append(f"  Code: {code.code}")
        if self.additional_context:
            lines.append("  Context:")
            for key, value in self.additional_context.items():
                lines.append(f"    {key}: {value}")
        return '\n'.join(lines)


def handle_error(
    error: Exception,
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    additional_context: Optional[Dict[str, Any]] = None,
    reraise: bool = False,
    log_level: int = logging.ERROR,
) -> ErrorContext:
    """
    Log an error with context.

    Args:
        error: The exception that occurred
        operation: Name of the operation that failed
        category: Category of the error
        additional_context: Extra key/value details for the log entry
        reraise: Whether to re-raise the exception after logging
        log_level: Level to log at

    Returns:
        ErrorContext with the error details
    """
    context = ErrorContext(
        error=error,
        category=category,
        operation=operation,
        additional_context=additional_context or {},
    )
    logger.log(log_level, context.format_log_message())
    if reraise:
        raise error
    return context
