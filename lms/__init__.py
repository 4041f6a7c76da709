"""
LMS: a minimal Learning Management System.

Courses with content items, enrolled-student rosters and grade logs, used by
administrators, teachers and students through role-scoped operations.
"""

__version__ = "1.0.0"
__author__ = "LMS Development Team"
__description__ = "Minimal Learning Management System"
