"""
Course registry: the ordered collection that exclusively owns every course.
"""

import itertools
import logging
from typing import Iterable, Iterator, List, Optional

from ..core.entities import Course, CourseListing
from ..core.exceptions import InvalidIndexError, NotFoundError
from ..core import validator

logger = logging.getLogger(__name__)


class _CourseListingView:
    """Restartable view over the registry; each iteration starts afresh."""

    def __init__(self, courses: List[Course]):
        self._courses = courses

    def __iter__(self) -> Iterator[CourseListing]:
        for position, course in enumerate(self._courses, start=1):
            yield CourseListing(position, course.name, course.teacher_email, course.course_id)


class CourseRegistry:
    """Ordered, index-addressable course collection.

    Positions are 0-based here and shift down when a course is removed.
    Every course also carries a stable ``course_id`` so callers that must
    survive a structural mutation can re-resolve by key.
    """

    def __init__(self, courses: Optional[Iterable[Course]] = None):
        self._courses: List[Course] = []
        self._ids = itertools.count(1)
        self._revision = 0
        for course in courses or ():
            self.add_course(course)

    @property
    def revision(self) -> int:
        """Counter bumped on every add or remove."""
        return self._revision

    def __len__(self) -> int:
        return len(self._courses)

    def is_empty(self) -> bool:
        return not self._courses

    def add_course(self, course: Course) -> Course:
        """Append a course and assign its surrogate id."""
        if course.course_id is not None and not course.is_detached:
            raise ValueError(f"{course!r} is already owned by a registry")
        course._attach(next(self._ids))
        self._courses.append(course)
        self._revision += 1
        logger.debug("Registered course %r at position %d", course.name, len(self._courses) - 1)
        return course

    def get_course(self, index: int) -> Course:
        """Return the live course at ``index``."""
        if not validator.is_valid_index(index, len(self._courses)):
            raise InvalidIndexError("Invalid course index!", error_code="invalid_course_index",
                                    details={'index': index, 'size': len(self._courses)})
        return self._courses[index]

    def get_course_by_id(self, course_id: int) -> Course:
        return self._courses[self.index_of(course_id)]

    def index_of(self, course_id: int) -> int:
        """Current 0-based position of the course with ``course_id``."""
        for index, course in enumerate(self._courses):
            if course.course_id == course_id:
                return index
        raise NotFoundError("Course not found", error_code="course_not_found",
                            details={'course_id': course_id})

    def remove_course(self, index: int) -> Course:
        """Remove the course at ``index`` and return a snapshot of it."""
        course = self.get_course(index)
        del self._courses[index]
        course._detach()
        self._revision += 1
        logger.debug("Removed course %r from position %d", course.name, index)
        return course.snapshot()

    def list_courses(self) -> _CourseListingView:
        """Listing rows in insertion order with 1-based display indices."""
        return _CourseListingView(self._courses)

    def courses(self) -> Iterator[Course]:
        return iter(list(self._courses))

    def teacher_has_course(self, teacher_email: str) -> bool:
        return any(course.teacher_email == teacher_email for course in self._courses)
