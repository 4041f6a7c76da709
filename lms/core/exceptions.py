"""
Custom exceptions for the LMS.
"""

from typing import Optional, Any, Dict


class LMSException(Exception):
    """Base exception for all LMS-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(LMSException):
    """Raised when data validation fails."""
    pass


class NotFoundError(LMSException):
    """Raised when a referenced course, content item or student does not exist."""
    pass


class InvalidIndexError(NotFoundError, IndexError):
    """Raised when a positional index is outside the valid range."""
    pass


class ConflictError(LMSException):
    """Raised when an operation would violate a uniqueness rule."""
    pass


class DuplicateAccountError(ConflictError):
    """Raised when an account with the same email already exists."""
    pass


class TeacherAlreadyAssignedError(ConflictError):
    """Raised when a teacher already owns another course."""
    pass


class AlreadyEnrolledError(ConflictError, ValidationError):
    """Raised when a student is already on a course roster."""
    pass


class NotEnrolledError(ValidationError):
    """Raised when a student is not on the roster of the course."""
    pass


class AuthError(LMSException):
    """Raised when authentication fails."""
    pass


class InvalidCredentials(AuthError):
    """Raised when no identity matches the supplied email and password."""
    pass


class AuthorizationError(LMSException):
    """Raised when access is denied."""
    pass


class ConfigurationError(LMSException):
    """Raised when configuration is invalid."""
    pass
