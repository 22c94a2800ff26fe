"""
Exceptions raised by the automation helpers.
"""

from __future__ import annotations


class AutomationError(Exception):
    """
    Base exception for automation failures.

    Attributes:
        error: Machine-readable error code
        message: Human-readable description
        details: Additional context
    """

    def __init__(
        self,
        error: str,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        self.error = error
        self.message = message
        if details is None:
            self.details: dict[str, object] = {}
        else:
            self.details = details
        super().__init__(message)


class ApiError(AutomationError):
    """
    Raised when a request to the API under test cannot be completed.

    Covers timeouts, refused connections, and retry policies that ran out
    of attempts before the expected condition was met.
    """

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(error, message, details)
