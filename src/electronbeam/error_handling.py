"""Standardized Error Handling Utilities

Exception hierarchy for ElectronBeam plus helpers that wrap foreign
exceptions (Pillow, OS errors) into it with consistent logging.
"""

from __future__ import annotations

import logging
import traceback
from contextlib import contextmanager
from enum import Enum
from typing import Any


class ErrorLevel(Enum):
    """Error severity levels for consistent logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ElectronBeamError(Exception):
    """Base exception class for all ElectronBeam errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class ConfigurationError(ElectronBeamError):
    """Raised when an animation configuration is invalid."""

    pass


class InvalidStretchFractionError(ConfigurationError):
    """Raised when a stretch fraction lies outside [0, 1]."""

    pass


class InvalidModeError(ConfigurationError):
    """Raised when an animation mode name is not recognised."""

    pass


class InvalidTimingError(ConfigurationError):
    """Raised when frame count or frame duration is not positive."""

    pass


class ValidationError(ElectronBeamError, ValueError):
    """Raised when user-supplied input fails validation."""

    pass


class InvalidDimensionsError(ElectronBeamError):
    """Raised when the requested or supplied image size is empty."""

    pass


class ResizeFailedError(ElectronBeamError):
    """Raised when the source cannot be resampled to the output size."""

    pass


class NotPreparedError(ElectronBeamError):
    """Raised when a frame is requested before a source was prepared."""

    def __init__(self, message: str = "Animation not prepared", **kwargs: Any):
        super().__init__(message, **kwargs)


class ImageIOError(ElectronBeamError):
    """Raised when an image cannot be read or an animation cannot be written."""

    pass


class FrameGenerationError(ElectronBeamError):
    """Raised when one or more frames of a batch could not be drawn."""

    pass


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[ElectronBeamError] = ImageIOError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
    reraise: bool = True,
) -> ElectronBeamError | None:
    """Standardized error handling with consistent logging and error transformation.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of ElectronBeamError to raise
        level: Logging level for the error
        context: Additional context information
        logger: Logger to use (defaults to module logger)
        reraise: Whether to reraise the transformed exception

    Returns:
        The transformed error if reraise=False, otherwise None

    Raises:
        ElectronBeamError: Transformed error if reraise=True
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    message = f"Failed to {operation}: {error}"

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
        }
    )

    transformed_error = error_type(message, cause=error, context=error_context)

    log_message = f"🚨 {operation.capitalize()} failed: {error}"
    context_str = ", ".join(f"{k}={v}" for k, v in error_context.items())
    if context_str:
        log_message += f" (context: {context_str})"

    log_func = getattr(logger, level.value)
    log_func(log_message)

    if level in (ErrorLevel.ERROR, ErrorLevel.CRITICAL):
        logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    if reraise:
        raise transformed_error from error
    return transformed_error


@contextmanager
def error_context(
    operation: str,
    error_type: type[ElectronBeamError] = ImageIOError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Context manager for standardized error handling.

    Usage:
        with error_context("read image", ImageIOError, context={"path": path}):
            Image.open(path)

    ElectronBeam errors raised inside the block pass through unchanged;
    anything else is wrapped into *error_type*.
    """
    try:
        yield
    except ElectronBeamError:
        raise
    except Exception as e:
        handle_error(e, operation, error_type, level, context, logger, reraise=True)


def log_warning_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log a warning with standardized context formatting."""
    if logger is None:
        logger = logging.getLogger(__name__)

    warning_msg = f"⚠️  {message}"
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        warning_msg += f" (context: {context_str})"

    logger.warning(warning_msg)
