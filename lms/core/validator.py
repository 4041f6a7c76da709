"""
Validation predicates shared by the entities, services and boundary layers.

Every function here is total: it returns a value for any input and never
raises. Callers decide which exception to raise on a ``False``.
"""

from typing import Any, Optional

MAX_STRING_LENGTH = 100
MIN_GRADE = 0
MAX_GRADE = 100


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_email(email: Any) -> bool:
    """Check the basic ``local@domain.tld`` shape.

    ``@`` must not be the first character and the last ``.`` must come after
    the ``@`` without being the final character. Nothing else is checked.
    """
    if not isinstance(email, str):
        return False
    at_pos = email.find('@')
    dot_pos = email.rfind('.')
    return 0 < at_pos < dot_pos < len(email) - 1


def is_valid_grade(grade: Any) -> bool:
    """Check that a grade is an integer in [0, 100]."""
    return _is_int(grade) and MIN_GRADE <= grade <= MAX_GRADE


def is_valid_index(index: Any, size: int) -> bool:
    """Check that ``index`` addresses an element of a sequence of ``size``."""
    return _is_int(index) and 0 <= index < size


def is_valid_string(value: Any) -> bool:
    """Check that a string is non-empty and at most 100 characters."""
    return isinstance(value, str) and 0 < len(value) <= MAX_STRING_LENGTH


def validate_int_in_range(value: Any, minimum: int, maximum: int) -> bool:
    """Check that ``value`` is an integer in the inclusive range."""
    return _is_int(value) and minimum <= value <= maximum


def parse_int(text: Any) -> Optional[int]:
    """Parse user text as an integer, returning None when it is not one."""
    if _is_int(text):
        return text
    if not isinstance(text, str):
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def username_from_email(email: str) -> str:
    """Derive a username from the local part of an email address."""
    return email.split('@', 1)[0]
