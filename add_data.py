"""
Script to add sample data to a running LMS via the REST API.
Make sure the server is running before executing this script.

Usage:
    python -m lms --serve
    python add_data.py
"""

import sys

from lms.client import ApiError, LMSClient, detect_base_url


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"

ADMIN_EMAIL = "admin1@example.com"
ADMIN_PASSWORD = "adminpass"

COURSES = [
    ("Chemistry", "teacher3@example.com", ["Atomic Structure", "Chemical Bonding"]),
    ("Biology", "teacher4@example.com", ["Cell Theory", "Genetics"]),
]

STUDENTS = [
    (1, "alice@example.com", "alicepass"),
    (1, "bob@example.com", "bobpass"),
    (2, "carol@example.com", "carolpass"),
]


def check_server(client: LMSClient) -> bool:
    """Check if the server is running."""
    if client.is_healthy():
        print(f"{_OK_CHAR} Server is running")
        return True
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  python -m lms --serve --port 8000")
    return False


def add_sample_data(client: LMSClient) -> int:
    """Create the sample courses and students; returns the number of failures."""
    failures = 0

    print("\nCreating courses...")
    for name, teacher_email, contents in COURSES:
        try:
            client.create_course(name, teacher_email)
            print(f"{_OK_CHAR} Created course: {name} ({teacher_email})")
        except ApiError as e:
            print(f"{_FAIL_CHAR} Failed to create course {name}: {e.message}")
            failures += 1
            continue
        position = len(client.list_courses())
        for content in contents:
            try:
                client.add_content(position, content)
            except ApiError as e:
                print(f"{_FAIL_CHAR} Failed to add content to {name}: {e.message}")
                failures += 1

    print("\nEnrolling students...")
    for position, email, password in STUDENTS:
        try:
            client.enroll_new_student(position, email, password)
            print(f"{_OK_CHAR} Enrolled {email} in course {position}")
        except ApiError as e:
            print(f"{_FAIL_CHAR} Failed to enroll {email}: {e.message}")
            failures += 1

    print("\nCourses:")
    for listing in client.list_courses():
        print(f"  {listing['display_index']}: {listing['name']} (Teacher: {listing['teacher_email']})")
    return failures


def main() -> int:
    client = LMSClient(ADMIN_EMAIL, ADMIN_PASSWORD, base_url=detect_base_url())
    if not check_server(client):
        return 1
    failures = add_sample_data(client)
    print("\n" + "=" * 60)
    if failures:
        print(f"{_FAIL_CHAR} Sample data added with {failures} failure(s)")
    else:
        print(f"{_OK_CHAR} Sample data added successfully!")
    print("=" * 60)
    print(f"\nAPI docs: {client.base_url}/docs")
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
