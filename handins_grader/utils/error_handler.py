"""Custom exception classes for the application."""

from typing import Sequence


class BaseGraderException(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigError(BaseGraderException):
    """Error related to configuration or command-line values."""
    pass

class AuthenticationError(BaseGraderException):
    """Error while logging in to the handins server."""
    pass

class FetchError(BaseGraderException):
    """Error retrieving or parsing the assignment listing."""
    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        details = []
        if self.url:
            details.append(f"URL: {self.url}")
        if self.status_code:
            details.append(f"Status Code: {self.status_code}")
        if details:
            return f"{base} ({', '.join(details)})"
        return base

class EmptyGradeSetError(BaseGraderException):
    """No graded assignments exist, so the aggregate grade is undefined.

    The records are kept on the exception so callers can still show them.
    """
    def __init__(self, records: Sequence = (), message: str = "No graded assignments yet."):
        super().__init__(message)
        self.records = list(records)

class UserCancelledError(BaseGraderException):
    """Error raised when the user cancels an operation."""
    pass

