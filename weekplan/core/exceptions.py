"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class WeekplanError(Exception):
    """Base exception for weekplan."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(WeekplanError):
    """Resource not found."""

    pass


class ValidationError(WeekplanError):
    """Validation error."""

    pass


class ConfigurationError(WeekplanError):
    """Profile or working-hours configuration prevents planning."""

    pass


class PartialWriteError(WeekplanError):
    """A planning run failed while writing its results."""

    def __init__(self, message: str, intended: int, written: int, stage: str):
        super().__init__(
            message,
            details={"intended": intended, "written": written, "stage": stage},
        )
        self.intended = intended
        self.written = written
        self.stage = stage

