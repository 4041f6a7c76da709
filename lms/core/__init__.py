"""
Core module containing the domain model, validation rules and configuration.
"""

from .entities import *
from .exceptions import *
from .enums import *
from .config import LMSConfig, load_config
from . import validator

__all__ = [
    # Entities
    "AbstractEntity",
    "Identity",
    "Course",
    "GradeEntry",
    "CourseListing",

    # Enums
    "Role",
    "SessionState",
    "AuditAction",

    # Exceptions
    "LMSException",
    "ValidationError",
    "NotFoundError",
    "InvalidIndexError",
    "ConflictError",
    "DuplicateAccountError",
    "TeacherAlreadyAssignedError",
    "AlreadyEnrolledError",
    "NotEnrolledError",
    "AuthError",
    "InvalidCredentials",
    "AuthorizationError",
    "ConfigurationError",

    # Configuration
    "LMSConfig",
    "load_config",
    "validator",
]
