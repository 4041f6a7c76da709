"""
Student operations: self-enrollment and views restricted to the student's
own courses and grades.
"""

from typing import Any, Dict, List

from ..core.entities import Course, CourseListing
from ..core.enums import AuditAction, Role
from ..core.exceptions import AlreadyEnrolledError
from .base_service import RoleService
from .results import OperationResult


class StudentService(RoleService):
    """Operations available to a student session.

    Every view is filtered by roster membership, so a student only ever sees
    courses they are enrolled in.
    """

    ROLE = Role.STUDENT
    OPERATIONS = (
        "list_courses",
        "available_courses",
        "enroll_in_course",
        "view_enrolled_courses",
        "view_grades",
    )

    def enroll_in_course(self, course_index: int) -> OperationResult:
        """Enroll this student in the course at ``course_index``."""
        def operation() -> Course:
            course = self.context.registry.get_course(course_index)
            if course.is_enrolled(self.email):
                raise AlreadyEnrolledError("You are already enrolled in this course.",
                                           error_code="already_enrolled",
                                           details={'email': self.email, 'course': course.name})
            course.enroll_student(self.email)
            return course

        return self._run(AuditAction.ENROLL, operation,
                         lambda course: f"Successfully enrolled in the course: {course.name}")

    def available_courses(self) -> OperationResult:
        """Courses this student is not enrolled in, keeping registry display indices."""
        def operation() -> List[CourseListing]:
            registry = self.context.registry
            return [listing for listing, course in zip(registry.list_courses(), registry.courses())
                    if not course.is_enrolled(self.email)]

        return self._run(AuditAction.READ, operation, "Available courses listed")

    def view_enrolled_courses(self) -> OperationResult:
        """The student's courses with their contents; empty when enrolled nowhere."""
        def operation() -> List[Dict[str, Any]]:
            return [
                {
                    'display_index': position,
                    'course_id': course.course_id,
                    'name': course.name,
                    'teacher_email': course.teacher_email,
                    'contents': course.get_contents(),
                }
                for position, course in enumerate(self._enrolled_courses(self.email), start=1)
            ]

        return self._run(AuditAction.READ, operation, "Enrolled courses listed")

    def view_grades(self) -> OperationResult:
        """The student's own grade entries per enrolled course; empty when enrolled nowhere."""
        def operation() -> List[Dict[str, Any]]:
            return [
                {
                    'display_index': position,
                    'course_id': course.course_id,
                    'name': course.name,
                    'teacher_email': course.teacher_email,
                    'grades': [entry.grade for entry in course.grades_for(self.email)],
                }
                for position, course in enumerate(self._enrolled_courses(self.email), start=1)
            ]

        return self._run(AuditAction.READ, operation, "Grades listed")
