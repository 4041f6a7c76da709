#!/usr/bin/env python3
"""
Demo scenario for the LMS: one pass through every role.
"""

import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lms.core.config import LMSConfig
from lms.main import LMSPlatform
from lms.services import Session


def run_demo():
    """Run a walkthrough of the seeded platform; returns the platform."""
    print("=" * 60)
    print("LEARNING MANAGEMENT SYSTEM - DEMO")
    print("=" * 60)

    platform = LMSPlatform(LMSConfig())
    session = Session(platform.context)

    print("\n1. Administrator manages courses and enrolls a student...")
    demonstrate_administrator(session)

    print("\n2. Teacher grades the student...")
    demonstrate_teacher(session)

    print("\n3. Student views own courses and grades...")
    demonstrate_student(session)

    print("\n" + "=" * 60)
    print("DEMO COMPLETED SUCCESSFULLY!")
    print("=" * 60)
    return platform


def demonstrate_administrator(session: Session):
    admin = session.login("admin1@example.com", "adminpass")
    for listing in admin.list_courses().value:
        print(f"  {listing.display_index}: {listing.name} (Teacher: {listing.teacher_email})")

    result = admin.enroll_student_with_account_creation(0, "s1@example.com", "s1pass")
    print(f"  Enroll s1@example.com: {result.message}")

    result = admin.enroll_student_with_account_creation(0, "s1@example.com", "s1pass")
    print(f"  Enroll s1@example.com again: {result.message}")

    result = admin.add_course("Chemistry", "teacher1@example.com")
    print(f"  Assign teacher1 a second course: {result.message}")
    session.logout()


def demonstrate_teacher(session: Session):
    teacher = session.login("teacher1@example.com", "teacherpass")
    print(f"  Available operations: {', '.join(session.available_operations())}")

    result = teacher.add_grade(0, "s1@example.com", 95)
    print(f"  {result.message}")

    for report in teacher.view_own_reports().value:
        print(f"  Course: {report['name']}")
        for entry in report['grades']:
            print(f"    {entry.student_email}: {entry.grade}%")
    session.logout()


def demonstrate_student(session: Session):
    student = session.login("s1@example.com", "s1pass")
    for course in student.view_grades().value:
        print(f"  {course['name']}: {course['grades']}")

    result = student.enroll_in_course(1)
    print(f"  Enroll in Physics: {result.message}")
    result = student.enroll_in_course(1)
    print(f"  Enroll in Physics again: {result.message}")
    session.logout()


if __name__ == "__main__":
    run_demo()
