"""
Services module: the course registry, the user directory and the
role-scoped operations built on them.
"""

from .registry import CourseRegistry
from .directory import UserDirectory
from .context import LMSContext
from .results import OperationResult
from .admin_service import AdministratorService
from .teacher_service import TeacherService
from .student_service import StudentService
from .session import Session, operations_for

__all__ = [
    "CourseRegistry",
    "UserDirectory",
    "LMSContext",
    "OperationResult",
    "AdministratorService",
    "TeacherService",
    "StudentService",
    "Session",
    "operations_for",
]
