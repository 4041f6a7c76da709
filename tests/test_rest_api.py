import pytest
from fastapi.testclient import TestClient

from lms.api import LMSRestAPI
from lms.api.rest_api import status_for
from lms.core.exceptions import (
    AlreadyEnrolledError, InvalidCredentials, InvalidIndexError, NotEnrolledError
)
from lms.services import LMSContext

ADMIN = ("admin1@example.com", "adminpass")
TEACHER = ("teacher1@example.com", "teacherpass")


@pytest.fixture
def client(context: LMSContext) -> TestClient:
    return TestClient(LMSRestAPI(context).app)


def _enroll(client: TestClient, position: int = 1, email: str = "s1@example.com", password: str = "s1pass"):
    return client.post(f"/courses/{position}/students", json={'email': email, 'password': password}, auth=ADMIN)


def test_health_needs_no_credentials(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()['status'] == "healthy"


def test_requests_without_valid_credentials_are_rejected(client: TestClient) -> None:
    assert client.get("/courses").status_code == 401
    response = client.get("/courses", auth=("admin1@example.com", "wrong"))
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Basic"


def test_me(client: TestClient) -> None:
    assert client.get("/me", auth=TEACHER).json() == {
        'username': "teacher1", 'email': "teacher1@example.com", 'role': "teacher"}


def test_list_courses_uses_display_positions(client: TestClient) -> None:
    rows = client.get("/courses", auth=TEACHER).json()
    assert [(row['display_index'], row['name']) for row in rows] == [(1, "Mathematics"), (2, "Physics")]


def test_create_and_delete_course(client: TestClient) -> None:
    response = client.post("/courses", json={'name': "Chemistry", 'teacher_email': "teacher3@example.com"},
                           auth=ADMIN)
    assert response.status_code == 201
    assert response.json()['name'] == "Chemistry"

    response = client.post("/courses", json={'name': "Biology", 'teacher_email': "teacher1@example.com"},
                           auth=ADMIN)
    assert response.status_code == 409

    assert client.delete("/courses/1", auth=ADMIN).json()['name'] == "Mathematics"
    names = [row['name'] for row in client.get("/courses", auth=ADMIN).json()]
    assert names == ["Physics", "Chemistry"]
    assert client.delete("/courses/9", auth=ADMIN).status_code == 404


def test_teacher_cannot_manage_courses_or_enroll(client: TestClient, context: LMSContext) -> None:
    response = client.post("/courses", json={'name': "Chemistry", 'teacher_email': "teacher3@example.com"},
                           auth=TEACHER)
    assert response.status_code == 403
    response = client.post("/courses/1/students", json={'email': "s1@example.com", 'password': "pw"},
                           auth=TEACHER)
    assert response.status_code == 403
    assert not context.directory.exists("s1@example.com")


def test_enroll_then_grade(client: TestClient, context: LMSContext) -> None:
    response = _enroll(client)
    assert response.status_code == 201
    assert response.json() == {'username': "s1", 'email': "s1@example.com", 'role': "student"}
    assert _enroll(client).status_code == 409

    response = client.post("/courses/1/grades", json={'student_email': "s1@example.com", 'grade': 95},
                           auth=TEACHER)
    assert response.status_code == 201
    assert ("s1@example.com", 95) in context.registry.get_course(0).get_grades()


def test_grade_rejections(client: TestClient) -> None:
    response = client.post("/courses/1/grades", json={'student_email': "s1@example.com", 'grade': 95},
                           auth=TEACHER)
    assert response.status_code == 400
    assert response.json()['detail'] == "Student is not enrolled in this course."
    _enroll(client)
    response = client.post("/courses/1/grades", json={'student_email': "s1@example.com", 'grade': 150},
                           auth=TEACHER)
    assert response.status_code == 400


def test_content_endpoints(client: TestClient) -> None:
    assert client.post("/courses/2/contents", json={'text': "Optics"}, auth=TEACHER).status_code == 201
    assert client.post("/courses/2/contents", json={'text': "Waves"}, auth=ADMIN).status_code == 201
    assert client.get("/courses/2/contents", auth=TEACHER).json() == [
        "Newton's Laws", "Thermodynamics", "Optics", "Waves"]
    response = client.delete("/courses/2/contents/1", auth=ADMIN)
    assert response.json()['contents'] == ["Thermodynamics", "Optics", "Waves"]
    assert client.delete("/courses/2/contents/7", auth=ADMIN).status_code == 404


def test_remove_student_endpoint(client: TestClient) -> None:
    assert client.delete("/courses/1/students/s1@example.com", auth=ADMIN).status_code == 404
    _enroll(client)
    response = client.delete("/courses/1/students/s1@example.com", auth=ADMIN)
    assert response.json() == {'success': True, 'message': "Student removed successfully."}
    assert client.get("/courses/1/students", auth=TEACHER).json() == []


def test_student_endpoints(client: TestClient) -> None:
    _enroll(client, position=1)
    student = ("s1@example.com", "s1pass")
    assert client.get("/reports", auth=student).status_code == 403

    assert client.post("/courses/2/enrollment", auth=student).status_code == 201
    assert client.post("/courses/2/enrollment", auth=student).status_code == 409
    client.post("/courses/2/grades", json={'student_email': "s1@example.com", 'grade': 80},
                auth=("teacher2@example.com", "teacherpass"))

    courses = client.get("/me/courses", auth=student).json()
    assert [course['name'] for course in courses] == ["Mathematics", "Physics"]
    grades = client.get("/me/grades", auth=student).json()
    assert [(row['name'], row['grades']) for row in grades] == [("Mathematics", []), ("Physics", [80])]


def test_reports_are_scoped_by_role(client: TestClient) -> None:
    assert [report['name'] for report in client.get("/reports", auth=ADMIN).json()] == ["Mathematics", "Physics"]
    assert [report['name'] for report in client.get("/reports", auth=TEACHER).json()] == ["Mathematics"]


def test_status_mapping() -> None:
    assert status_for(InvalidCredentials("x")) == 401
    assert status_for(InvalidIndexError("x")) == 404
    assert status_for(AlreadyEnrolledError("x")) == 409
    assert status_for(NotEnrolledError("x")) == 400


@pytest.mark.parametrize("grade", [True, 95.0, "95"])
def test_grade_must_be_a_json_integer(client: TestClient, context: LMSContext, grade) -> None:
    _enroll(client)
    response = client.post("/courses/1/grades", json={'student_email': "s1@example.com", 'grade': grade},
                           auth=TEACHER)
    assert response.status_code == 400
    assert context.registry.get_course(0).get_grades() == []


def test_malformed_bodies_are_bad_requests(client: TestClient, context: LMSContext) -> None:
    response = client.post("/courses", json={'name': "x" * 101, 'teacher_email': "teacher3@example.com"},
                           auth=ADMIN)
    assert response.status_code == 400
    assert client.post("/courses/1/contents", json={'text': ""}, auth=TEACHER).status_code == 400
    assert client.post("/courses", json={}, auth=ADMIN).status_code == 400
    assert len(context.registry) == 2


def test_course_response_carries_course_state(client: TestClient) -> None:
    body = client.post("/courses/2/contents", json={'text': "Optics"}, auth=TEACHER).json()
    assert body['course_id'] is not None
    assert body['contents'][-1] == "Optics"
    assert body['version'] > 1
