"""
Core entities for the LMS: identities, courses and grade entries.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, NamedTuple, Optional

from .enums import Role
from .exceptions import AlreadyEnrolledError, InvalidIndexError, NotFoundError, ValidationError
from . import validator


class GradeEntry(NamedTuple):
    """One entry of a course's grade log."""
    student_email: str
    grade: int


class CourseListing(NamedTuple):
    """Presentation row for a course; ``display_index`` is 1-based."""
    display_index: int
    name: str
    teacher_email: str
    course_id: Optional[int]


class AbstractEntity:
    """Base entity with timestamps and versioning."""

    def __init__(self):
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def touch(self) -> None:
        """Record a modification."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1


class Identity(AbstractEntity):
    """A registered user: username, email, password and role.

    Passwords are stored and compared as given.
    """

    def __init__(self, username: str, email: str, password: str, role: Role):
        super().__init__()
        if not validator.is_valid_email(email):
            raise ValidationError("Invalid email", error_code="invalid_email", details={'email': email})
        self._username = username
        self._email = email
        self._password = password
        self._role = role

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email

    @property
    def role(self) -> Role:
        return self._role

    def check_password(self, password: str) -> bool:
        return self._password == password

    def __repr__(self) -> str:
        return f"Identity(email={self._email!r}, role={self._role.value})"


class Course(AbstractEntity):
    """Course entity: contents, enrolled-student roster and grade log.

    A course handed out by the registry is live until the registry removes
    it; after that it is detached and every mutation raises ``NotFoundError``.
    """

    def __init__(self, name: str, teacher_email: str):
        super().__init__()
        if not validator.is_valid_string(name):
            raise ValidationError("Invalid course name", error_code="invalid_course_name")
        if not validator.is_valid_email(teacher_email):
            raise ValidationError("Invalid teacher email", error_code="invalid_email",
                                  details={'email': teacher_email})
        self._name = name
        self._teacher_email = teacher_email
        self._course_id: Optional[int] = None
        self._contents: List[str] = []
        self._roster: List[str] = []
        self._grades: List[GradeEntry] = []
        self._detached = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def teacher_email(self) -> str:
        return self._teacher_email

    @property
    def course_id(self) -> Optional[int]:
        return self._course_id

    @property
    def is_detached(self) -> bool:
        return self._detached

    def _ensure_attached(self) -> None:
        if self._detached:
            raise NotFoundError(f"Course '{self._name}' is no longer in the registry",
                                error_code="course_removed")

    def _attach(self, course_id: int) -> None:
        self._course_id = course_id
        self._detached = False

    def _detach(self) -> None:
        self._detached = True
        self.touch()

    # Contents

    def add_content(self, content: str) -> None:
        """Append a content item."""
        self._ensure_attached()
        if not validator.is_valid_string(content):
            raise ValidationError("Invalid content", error_code="invalid_content")
        self._contents.append(content)
        self.touch()

    def remove_content(self, index: int) -> str:
        """Remove the content item at ``index`` and return it."""
        self._ensure_attached()
        if not validator.is_valid_index(index, len(self._contents)):
            raise InvalidIndexError("Invalid content index", error_code="invalid_index",
                                    details={'index': index, 'size': len(self._contents)})
        removed = self._contents.pop(index)
        self.touch()
        return removed

    def get_contents(self) -> List[str]:
        return list(self._contents)

    # Roster

    def enroll_student(self, student_email: str) -> None:
        """Add a student to the roster."""
        self._ensure_attached()
        if not validator.is_valid_email(student_email):
            raise ValidationError("Invalid student email", error_code="invalid_email",
                                  details={'email': student_email})
        if student_email in self._roster:
            raise AlreadyEnrolledError("Student already enrolled", error_code="already_enrolled",
                                       details={'email': student_email, 'course': self._name})
        self._roster.append(student_email)
        self.touch()

    def remove_student(self, student_email: str, purge_grades: bool = False) -> None:
        """Remove a student from the roster.

        Grade entries for the student are kept unless ``purge_grades`` is set.
        """
        self._ensure_attached()
        if student_email not in self._roster:
            raise NotFoundError("Student not found", error_code="student_not_found",
                                details={'email': student_email, 'course': self._name})
        self._roster.remove(student_email)
        if purge_grades:
            self._grades = [entry for entry in self._grades if entry.student_email != student_email]
        self.touch()

    def is_enrolled(self, student_email: str) -> bool:
        return student_email in self._roster

    def get_students(self) -> List[str]:
        return list(self._roster)

    # Grades

    def add_grade(self, student_email: str, grade: int) -> GradeEntry:
        """Append a grade entry.

        Whether the student is enrolled is the caller's concern.
        """
        self._ensure_attached()
        if not validator.is_valid_email(student_email):
            raise ValidationError("Invalid student email", error_code="invalid_email",
                                  details={'email': student_email})
        if not validator.is_valid_grade(grade):
            raise ValidationError("Invalid grade", error_code="invalid_grade", details={'grade': grade})
        entry = GradeEntry(student_email, grade)
        self._grades.append(entry)
        self.touch()
        return entry

    def get_grades(self) -> List[GradeEntry]:
        return list(self._grades)

    def grades_for(self, student_email: str) -> List[GradeEntry]:
        return [entry for entry in self._grades if entry.student_email == student_email]

    def snapshot(self) -> 'Course':
        """Return a detached copy for display."""
        clone = copy.deepcopy(self)
        clone._detached = True
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form of the course, as served by the REST API."""
        return {
            'course_id': self._course_id,
            'name': self._name,
            'teacher_email': self._teacher_email,
            'contents': list(self._contents),
            'students': list(self._roster),
            'grades': [entry._asdict() for entry in self._grades],
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'version': self.version,
        }

    def __repr__(self) -> str:
        return f"Course(course_id={self._course_id}, name={self._name!r}, teacher={self._teacher_email!r})"
