"""
Interactive text console: the login loop and the role menus.

The console only collects input, calls the role services and prints their
results. Input and output functions are injectable so scripted sessions can
drive it.
"""

from typing import Callable, Iterable, List, Optional

from .core import validator
from .core.entities import CourseListing
from .core.exceptions import AuthError
from .services import (
    AdministratorService, LMSContext, OperationResult, Session, StudentService, TeacherService
)


class LMSConsole:
    """Menu-driven console over a shared ``LMSContext``."""

    def __init__(self, context: LMSContext, input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print, max_attempts: Optional[int] = None):
        self._context = context
        self._input = input_func
        self._output = output
        self._max_attempts = max_attempts or context.config.max_prompt_attempts
        self._session = Session(context)

    @property
    def session(self) -> Session:
        return self._session

    # Input helpers

    def prompt(self, text: str) -> str:
        return self._input(text).strip()

    def prompt_int(self, text: str, minimum: int, maximum: int) -> Optional[int]:
        """Ask for an integer in [minimum, maximum], retrying a bounded number of times.

        Returns None once the attempts are used up.
        """
        for _ in range(self._max_attempts):
            value = validator.parse_int(self.prompt(text))
            if value is None:
                self._output("Invalid input. Please enter a number.")
            elif not validator.validate_int_in_range(value, minimum, maximum):
                self._output(f"Please enter a number between {minimum} and {maximum}.")
            else:
                return value
        self._output("Too many invalid attempts.")
        return None

    def _choose_course(self, verb: str) -> Optional[int]:
        """Show the course list and return the chosen 0-based index."""
        listings = list(self._context.registry.list_courses())
        if not listings:
            self._output("There are no courses available.")
            return None
        self._show_listings(listings)
        position = self.prompt_int(f"Enter course index to {verb} (1-{len(listings)}): ", 1, len(listings))
        return None if position is None else position - 1

    def _show_listings(self, listings: Iterable[CourseListing]) -> None:
        for listing in listings:
            self._output(f"{listing.display_index}: {listing.name} (Teacher: {listing.teacher_email})")

    def _report(self, result: OperationResult) -> None:
        self._output(result.message)

    def _show_course_reports(self, reports: List[dict]) -> None:
        for report in reports:
            self._output(f"Course: {report['name']} (Teacher: {report['teacher_email']})")
            self._output("Enrolled Students:")
            for student in report['students']:
                self._output(student)
            self._output("Grades:")
            for entry in report['grades']:
                self._output(f"{entry.student_email}: {entry.grade}%")
            self._output("----------------------")

    # Login loop

    def run(self) -> int:
        """Run the login loop until the user exits."""
        self._output("Learning Management System Login")
        self._output("================================")
        try:
            while True:
                email = self.prompt("Enter your email (or type '0' to exit): ")
                if email == "0":
                    self._output("Exiting program...")
                    return 0
                password = self.prompt("Enter your password: ")
                try:
                    operations = self._session.login(email, password)
                except AuthError as e:
                    self._output(f"{e.message}. Please try again.")
                    continue
                self._output(f"Welcome, {operations.identity.username}!")
                self._menu_for(operations)()
                self._session.logout()
                answer = self.prompt("Do you want to log in as a different role? (y/n): ")
                if answer.lower() == 'n':
                    self._output("Logging out...")
                    return 0
        except EOFError:
            self._session.logout()
            self._output("Exiting program...")
            return 0

    def _menu_for(self, operations) -> Callable[[], None]:
        if isinstance(operations, AdministratorService):
            return lambda: self.admin_menu(operations)
        if isinstance(operations, TeacherService):
            return lambda: self.teacher_menu(operations)
        return lambda: self.student_menu(operations)

    # Administrator

    def admin_menu(self, admin: AdministratorService) -> None:
        while True:
            self._output("\nAdmin Menu:\n1. Manage Courses\n2. View Reports\n3. Enroll Student\n"
                         "4. Remove Student\n5. Log Out")
            choice = self.prompt_int("Enter choice (1-5): ", 1, 5)
            if choice is None or choice == 5:
                self._output("Logging out...")
                return
            if choice == 1:
                self.admin_manage_courses(admin)
            elif choice == 2:
                reports = admin.view_reports().value
                if not reports:
                    self._output("No courses available to generate reports.")
                else:
                    self._output("Courses Report:")
                    self._show_course_reports(reports)
            elif choice == 3:
                self.admin_enroll_student(admin)
            elif choice == 4:
                self.admin_remove_student(admin)

    def admin_manage_courses(self, admin: AdministratorService) -> None:
        while True:
            self._output("\nManage Courses:\n1. Add Course\n2. Delete Course\n3. Edit Course\n"
                         "4. Display Courses\n5. Back")
            choice = self.prompt_int("Enter choice (1-5): ", 1, 5)
            if choice is None or choice == 5:
                self._output("Returning...")
                return
            if choice == 1:
                name = self.prompt("Enter course name: ")
                teacher_email = self.prompt("Enter teacher's email: ")
                self._report(admin.add_course(name, teacher_email))
            elif choice == 2:
                index = self._choose_course("delete")
                if index is not None:
                    self._report(admin.delete_course(index))
            elif choice == 3:
                self.admin_edit_course(admin)
            elif choice == 4:
                listings = list(self._context.registry.list_courses())
                if listings:
                    self._show_listings(listings)
                else:
                    self._output("There are no courses available.")

    def admin_edit_course(self, admin: AdministratorService) -> None:
        index = self._choose_course("edit")
        if index is None:
            return
        course = self._context.registry.get_course(index)
        self._output(f"Editing course: {course.name}")
        action = self.prompt_int("1. Add content\n2. Remove content\nEnter choice: ", 1, 2)
        if action == 1:
            content = self.prompt("Enter content: ")
            self._report(admin.edit_course(index, add_content=content))
        elif action == 2:
            contents = course.get_contents()
            if not contents:
                self._output("There is no content to remove.")
                return
            self._output("\nCurrent content:")
            for position, content in enumerate(contents, start=1):
                self._output(f"{position}. {content}")
            position = self.prompt_int(f"Enter content index to remove (1-{len(contents)}): ", 1, len(contents))
            if position is not None:
                self._report(admin.edit_course(index, remove_content_index=position - 1))

    def admin_enroll_student(self, admin: AdministratorService) -> None:
        index = self._choose_course("enroll student")
        if index is None:
            return
        email = self.prompt("Enter student's email: ")
        password = self.prompt("Enter password for the student: ")
        result = admin.enroll_student_with_account_creation(index, email, password)
        self._report(result)
        if result.success:
            self._output(f"Username: {result.value.email}")

    def admin_remove_student(self, admin: AdministratorService) -> None:
        index = self._choose_course("remove student")
        if index is None:
            return
        email = self.prompt("Enter student's email to remove: ")
        self._report(admin.remove_student(index, email))

    # Teacher

    def teacher_menu(self, teacher: TeacherService) -> None:
        while True:
            self._output("\nTeacher Menu:\n1. Manage Courses\n2. View Reports\n3. Add Grade\n4. Log Out")
            choice = self.prompt_int("Enter choice (1-4): ", 1, 4)
            if choice is None or choice == 4:
                self._output("Logging out...")
                return
            if choice == 1:
                self.teacher_manage_courses(teacher)
            elif choice == 2:
                self._output(f"Courses Report for {teacher.email}:")
                reports = teacher.view_own_reports().value
                if reports:
                    self._show_course_reports(reports)
                else:
                    self._output("No courses assigned to you.")
            elif choice == 3:
                self.teacher_add_grade(teacher)

    def teacher_manage_courses(self, teacher: TeacherService) -> None:
        while True:
            self._output("\nManage Courses:\n1. View Course\n2. Add Content\n3. Add Grade\n"
                         "4. Display Students\n5. Back")
            choice = self.prompt_int("Enter choice (1-5): ", 1, 5)
            if choice is None or choice == 5:
                self._output("Returning...")
                return
            if choice == 1:
                index = self._choose_course("view")
                if index is not None:
                    result = teacher.view_course(index)
                    if not result.success:
                        self._report(result)
                    elif not result.value:
                        self._output("No contents available for this course.")
                    else:
                        for position, content in enumerate(result.value, start=1):
                            self._output(f"{position}: {content}")
            elif choice == 2:
                index = self._choose_course("add content to")
                if index is not None:
                    content = self.prompt("Enter the content to add: ")
                    self._report(teacher.add_content(index, content))
            elif choice == 3:
                self.teacher_add_grade(teacher)
            elif choice == 4:
                index = self._choose_course("display students of")
                if index is not None:
                    for student in teacher.list_students(index).value or []:
                        self._output(student)

    def teacher_add_grade(self, teacher: TeacherService) -> None:
        index = self._choose_course("grade")
        if index is None:
            return
        email = self.prompt("Enter student's email: ")
        if not self._context.registry.get_course(index).is_enrolled(email):
            self._output("Student is not enrolled in this course.")
            return
        grade = self.prompt_int("Enter grade (0-100): ", validator.MIN_GRADE, validator.MAX_GRADE)
        if grade is not None:
            self._report(teacher.add_grade(index, email, grade))

    # Student

    def student_menu(self, student: StudentService) -> None:
        while True:
            self._output("\nStudent Menu:\n1. View Enrolled Courses\n2. View Grades\n3. Enroll in Course\n4. Log Out")
            choice = self.prompt_int("Enter choice (1-4): ", 1, 4)
            if choice is None or choice == 4:
                self._output("Logging out...")
                return
            if choice == 1:
                self.student_view_courses(student)
            elif choice == 2:
                self.student_view_grades(student)
            elif choice == 3:
                self.student_enroll(student)

    def _pick_enrolled(self, courses: List[dict], verb: str) -> Optional[dict]:
        if not courses:
            self._output("You are not enrolled in any courses.")
            return None
        self._output("Your Enrolled Courses:")
        for course in courses:
            self._output(f"{course['display_index']}: {course['name']} (Teacher: {course['teacher_email']})")
        position = self.prompt_int(f"Enter course index to {verb} (or 0 to go back): ", 0, len(courses))
        if not position:
            return None
        return courses[position - 1]

    def student_view_courses(self, student: StudentService) -> None:
        course = self._pick_enrolled(student.view_enrolled_courses().value, "view content")
        if course is None:
            return
        if not course['contents']:
            self._output("No contents available for this course.")
        for position, content in enumerate(course['contents'], start=1):
            self._output(f"{position}: {content}")

    def student_view_grades(self, student: StudentService) -> None:
        course = self._pick_enrolled(student.view_grades().value, "view grades")
        if course is None:
            return
        if not course['grades']:
            self._output("No grade available for this course.")
        for grade in course['grades']:
            self._output(f"Your Grade in {course['name']}: {grade}%")

    def student_enroll(self, student: StudentService) -> None:
        listings = student.available_courses().value
        if not listings:
            self._output("No courses available for enrollment.")
            return
        self._output("Available Courses:")
        self._show_listings(listings)
        chosen = self.prompt_int("Enter course index to enroll (or 0 to go back): ",
                                 0, len(self._context.registry))
        if not chosen:
            return
        self._report(student.enroll_in_course(chosen - 1))
