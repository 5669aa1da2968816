from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the caller inside the response envelope. These errors
    should not contain any sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested session is unknown or expired."""

    def __init__(self, message: str = "Session not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when caller input fails validation."""
