"""
Enumerations and constants for the LMS.
"""

from enum import Enum


class Role(Enum):
    """Roles an identity can log in as."""
    ADMINISTRATOR = "administrator"
    TEACHER = "teacher"
    STUDENT = "student"


class SessionState(Enum):
    """States of a role session."""
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


class AuditAction(Enum):
    """Actions recorded in operation results and log lines."""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    ENROLL = "enroll"
    UNENROLL = "unenroll"
    GRADE = "grade"
    LOGIN = "login"
    LOGOUT = "logout"
