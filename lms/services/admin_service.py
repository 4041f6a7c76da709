"""
Administrator operations: course management, account creation on
enrollment, roster maintenance and global reports.
"""

from typing import Optional

from ..core.entities import Course, Identity
from ..core.enums import AuditAction, Role
from ..core.exceptions import (
    DuplicateAccountError, LMSException, NotFoundError, TeacherAlreadyAssignedError, ValidationError
)
from ..core import validator
from .base_service import RoleService, course_report
from .results import OperationResult


class AdministratorService(RoleService):
    """Operations available to an administrator session."""

    ROLE = Role.ADMINISTRATOR
    OPERATIONS = (
        "list_courses",
        "add_course",
        "delete_course",
        "edit_course",
        "view_reports",
        "enroll_student_with_account_creation",
        "remove_student",
    )

    def add_course(self, name: str, teacher_email: str) -> OperationResult:
        """Create a course.

        With ``enforce_unique_teacher`` on, a teacher who already owns a
        course cannot be assigned another one.
        """
        def operation() -> Course:
            registry = self.context.registry
            if self.context.config.enforce_unique_teacher and registry.teacher_has_course(teacher_email):
                raise TeacherAlreadyAssignedError(
                    "Teacher is already assigned to another course.",
                    error_code="teacher_already_assigned", details={'email': teacher_email})
            return registry.add_course(Course(name, teacher_email))

        return self._run(AuditAction.CREATE, operation, f"Course '{name}' added")

    def delete_course(self, course_index: int) -> OperationResult:
        """Remove a course; the value is a detached snapshot of it."""
        return self._run(AuditAction.DELETE,
                         lambda: self.context.registry.remove_course(course_index),
                         lambda removed: f"Successfully deleted course: {removed.name}")

    def edit_course(self, course_index: int, add_content: Optional[str] = None,
                    remove_content_index: Optional[int] = None) -> OperationResult:
        """Add or remove one content item of a course.

        Exactly one of ``add_content`` and ``remove_content_index`` must be given.
        """
        def operation() -> Course:
            course = self.context.registry.get_course(course_index)
            if (add_content is None) == (remove_content_index is None):
                raise ValidationError("Choose exactly one edit: add content or remove content",
                                      error_code="invalid_edit")
            if add_content is not None:
                course.add_content(add_content)
            else:
                course.remove_content(remove_content_index)
            return course

        message = "Content added successfully." if add_content is not None else "Content removed successfully."
        return self._run(AuditAction.UPDATE, operation, message)

    def view_reports(self) -> OperationResult:
        """Roster and grade log of every course."""
        return self._run(AuditAction.READ,
                         lambda: [course_report(course) for course in self.context.registry.courses()],
                         "Courses report generated")

    def enroll_student_with_account_creation(self, course_index: int, student_email: str,
                                             password: str) -> OperationResult:
        """Create a student account and enroll it in a course.

        The username is the local part of the email. If enrollment fails after
        the account was created, the account is removed again while
        ``rollback_orphan_accounts`` is on.
        """
        def operation() -> Identity:
            course = self.context.registry.get_course(course_index)
            if not validator.is_valid_email(student_email):
                raise ValidationError("Invalid email format.", error_code="invalid_email",
                                      details={'email': student_email})
            directory = self.context.directory
            if directory.exists(student_email):
                raise DuplicateAccountError(
                    "Student with this email already exists. Cannot create a duplicate account.",
                    error_code="duplicate_account", details={'email': student_email})
            student = directory.create(validator.username_from_email(student_email),
                                       student_email, password, Role.STUDENT)
            try:
                course.enroll_student(student_email)
            except LMSException:
                if self.context.config.rollback_orphan_accounts:
                    directory.discard(student)
                raise
            return student

        return self._run(AuditAction.ENROLL, operation,
                         "Student enrolled successfully and account created.")

    def remove_student(self, course_index: int, student_email: str) -> OperationResult:
        """Remove a student from a course roster."""
        def operation() -> Course:
            course = self.context.registry.get_course(course_index)
            if not course.get_students():
                raise NotFoundError("There is no student here.", error_code="empty_roster",
                                    details={'course': course.name})
            course.remove_student(student_email,
                                  purge_grades=self.context.config.purge_grades_on_student_removal)
            return course

        return self._run(AuditAction.UNENROLL, operation, "Student removed successfully.")
