"""
Shared plumbing for the role-scoped services.
"""

from typing import Any, Callable, Dict, List, Tuple, Union

from ..core.entities import Course, Identity
from ..core.enums import AuditAction, Role
from ..core.exceptions import AuthorizationError
from .context import LMSContext
from .results import OperationResult, run_operation


def course_report(course: Course) -> Dict[str, Any]:
    """Roster and grade log of one course as plain data."""
    return {
        'course_id': course.course_id,
        'name': course.name,
        'teacher_email': course.teacher_email,
        'students': course.get_students(),
        'grades': course.get_grades(),
    }


class RoleService:
    """Base class binding an identity of one role to the shared context.

    ``OPERATIONS`` names the public operations a session in this role may
    invoke.
    """

    ROLE: Role = None
    OPERATIONS: Tuple[str, ...] = ()

    def __init__(self, identity: Identity, context: LMSContext):
        if identity.role is not self.ROLE:
            raise AuthorizationError(
                f"{identity.email} cannot act as {self.ROLE.value}",
                error_code="wrong_role",
                details={'email': identity.email, 'role': identity.role.value})
        self._identity = identity
        self._context = context

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def email(self) -> str:
        return self._identity.email

    @property
    def context(self) -> LMSContext:
        return self._context

    def _run(self, action: AuditAction, operation: Callable[[], Any],
             success_message: Union[str, Callable[[Any], str]]) -> OperationResult:
        return run_operation(action, self.email, operation, success_message)

    def list_courses(self) -> OperationResult:
        """All courses as listing rows."""
        return self._run(AuditAction.READ,
                         lambda: list(self._context.registry.list_courses()),
                         "Courses listed")

    def _enrolled_courses(self, student_email: str) -> List[Course]:
        return [course for course in self._context.registry.courses() if course.is_enrolled(student_email)]
