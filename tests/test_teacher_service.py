from lms.core.enums import Role
from lms.core.exceptions import InvalidIndexError, NotEnrolledError, ValidationError
from lms.services import LMSContext, Session


def test_scenario_admin_enrolls_then_teacher_grades(context: LMSContext) -> None:
    session = Session(context)
    session.login("teacher1@example.com", "teacherpass")
    assert "enroll_student_with_account_creation" not in session.available_operations()
    assert not hasattr(session.operations, "enroll_student")
    session.logout()

    admin = session.login("admin1@example.com", "adminpass")
    assert admin.enroll_student_with_account_creation(0, "s1@example.com", "s1pass").success
    session.logout()

    teacher = session.login("teacher1@example.com", "teacherpass")
    result = teacher.add_grade(0, "s1@example.com", 95)
    assert result.success
    assert ("s1@example.com", 95) in context.registry.get_course(0).get_grades()


def test_add_grade_requires_enrollment(teacher, context: LMSContext) -> None:
    result = teacher.add_grade(0, "s1@example.com", 95)
    assert isinstance(result.error, NotEnrolledError)
    assert context.registry.get_course(0).get_grades() == []


def test_add_grade_validates_input(teacher, context: LMSContext) -> None:
    context.registry.get_course(0).enroll_student("s1@example.com")
    assert isinstance(teacher.add_grade(0, "s1", 95).error, ValidationError)
    assert isinstance(teacher.add_grade(0, "s1@example.com", 101).error, ValidationError)
    assert isinstance(teacher.add_grade(7, "s1@example.com", 95).error, InvalidIndexError)
    assert context.registry.get_course(0).get_grades() == []


def test_grades_accumulate(teacher, context: LMSContext) -> None:
    context.registry.get_course(0).enroll_student("s1@example.com")
    teacher.add_grade(0, "s1@example.com", 60)
    teacher.add_grade(0, "s1@example.com", 85)
    assert context.registry.get_course(0).grades_for("s1@example.com") == [
        ("s1@example.com", 60), ("s1@example.com", 85)]


def test_view_own_reports_filters_by_teacher(teacher, context: LMSContext) -> None:
    context.registry.get_course(0).enroll_student("s1@example.com")
    context.registry.get_course(1).enroll_student("s2@example.com")
    reports = teacher.view_own_reports().value
    assert [report['name'] for report in reports] == ["Mathematics"]
    assert reports[0]['students'] == ["s1@example.com"]


def test_view_own_reports_empty_for_teacher_without_course(context: LMSContext) -> None:
    context.directory.create("teacher3", "teacher3@example.com", "pw", Role.TEACHER)
    teacher = Session(context).login("teacher3@example.com", "pw")
    result = teacher.view_own_reports()
    assert result.success
    assert result.value == []


def test_view_course_and_add_content(teacher) -> None:
    assert teacher.view_course(0).value == ["Introduction to Algebra", "Advanced Calculus"]
    result = teacher.add_content(1, "Optics")
    assert result.message == "Content added to the course: Physics"
    assert teacher.view_course(1).value[-1] == "Optics"
    assert isinstance(teacher.add_content(1, "").error, ValidationError)


def test_list_students(teacher, context: LMSContext) -> None:
    context.registry.get_course(0).enroll_student("s1@example.com")
    assert teacher.list_students(0).value == ["s1@example.com"]
    assert teacher.list_students(1).value == []
