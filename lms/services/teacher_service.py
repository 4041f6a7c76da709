"""
Teacher operations: grading, course content and own-course reports.
"""

from ..core.entities import Course, GradeEntry
from ..core.enums import AuditAction, Role
from ..core.exceptions import NotEnrolledError, ValidationError
from ..core import validator
from .base_service import RoleService, course_report
from .results import OperationResult


class TeacherService(RoleService):
    """Operations available to a teacher session. Teachers cannot enroll students."""

    ROLE = Role.TEACHER
    OPERATIONS = (
        "list_courses",
        "view_course",
        "add_content",
        "add_grade",
        "list_students",
        "view_own_reports",
    )

    def add_grade(self, course_index: int, student_email: str, grade: int) -> OperationResult:
        """Record a grade for a student on the course roster."""
        def operation() -> GradeEntry:
            course = self.context.registry.get_course(course_index)
            if not validator.is_valid_email(student_email):
                raise ValidationError("Invalid email format.", error_code="invalid_email",
                                      details={'email': student_email})
            if not course.is_enrolled(student_email):
                raise NotEnrolledError("Student is not enrolled in this course.",
                                       error_code="not_enrolled",
                                       details={'email': student_email, 'course': course.name})
            return course.add_grade(student_email, grade)

        return self._run(AuditAction.GRADE, operation,
                         f"Grade added successfully for student: {student_email}")

    def view_own_reports(self) -> OperationResult:
        """Roster and grade log of each course this teacher teaches."""
        return self._run(AuditAction.READ,
                         lambda: [course_report(course) for course in self.context.registry.courses()
                                  if course.teacher_email == self.email],
                         f"Courses report for {self.email}")

    def view_course(self, course_index: int) -> OperationResult:
        """Contents of a course."""
        return self._run(AuditAction.READ,
                         lambda: self.context.registry.get_course(course_index).get_contents(),
                         "Course contents listed")

    def add_content(self, course_index: int, content: str) -> OperationResult:
        def operation() -> Course:
            course = self.context.registry.get_course(course_index)
            course.add_content(content)
            return course

        return self._run(AuditAction.UPDATE, operation,
                         lambda course: f"Content added to the course: {course.name}")

    def list_students(self, course_index: int) -> OperationResult:
        return self._run(AuditAction.READ,
                         lambda: self.context.registry.get_course(course_index).get_students(),
                         "Enrolled students listed")
