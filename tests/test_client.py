import pytest
from fastapi.testclient import TestClient

import add_data
from lms.api import LMSRestAPI
from lms.client import ApiError, LMSClient, detect_base_url
from lms.services import LMSContext


@pytest.fixture
def http(context: LMSContext) -> TestClient:
    return TestClient(LMSRestAPI(context).app)


def _client(http: TestClient, email: str = "admin1@example.com", password: str = "adminpass") -> LMSClient:
    return LMSClient(email, password, base_url="http://testserver", session=http)


def test_detect_base_url(monkeypatch) -> None:
    monkeypatch.delenv("LMS_BASE_URL", raising=False)
    assert detect_base_url() == "http://127.0.0.1:8000"
    monkeypatch.setenv("LMS_BASE_URL", "http://lms.test:9000")
    assert detect_base_url() == "http://lms.test:9000"


def test_client_round_trip(http: TestClient) -> None:
    admin = _client(http)
    assert admin.is_healthy()
    admin.create_course("Chemistry", "teacher3@example.com")
    admin.enroll_new_student(3, "s1@example.com", "pw")

    teacher = _client(http, "teacher3@example.com", "x")
    with pytest.raises(ApiError) as excinfo:
        teacher.list_courses()
    assert excinfo.value.status_code == 401

    student = _client(http, "s1@example.com", "pw")
    student.enroll_self(1)
    assert [row['name'] for row in student.my_grades()] == ["Mathematics", "Chemistry"]


def test_client_surfaces_error_detail(http: TestClient) -> None:
    with pytest.raises(ApiError) as excinfo:
        _client(http).delete_course(5)
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Invalid course index!"


def test_add_sample_data(http: TestClient, context: LMSContext, capsys) -> None:
    client = _client(http)
    assert add_data.check_server(client)
    assert add_data.add_sample_data(client) == 0
    assert [row.name for row in context.registry.list_courses()] == [
        "Mathematics", "Physics", "Chemistry", "Biology"]
    assert context.registry.get_course(2).get_contents() == ["Atomic Structure", "Chemical Bonding"]
    assert context.registry.get_course(0).get_students() == ["alice@example.com", "bob@example.com"]
    assert "Enrolled carol@example.com in course 2" in capsys.readouterr().out


def test_add_sample_data_counts_failures(http: TestClient) -> None:
    client = _client(http)
    add_data.add_sample_data(client)
    # Every course and student now exists, so a second run fails on each of them.
    assert add_data.add_sample_data(client) == len(add_data.COURSES) + len(add_data.STUDENTS)
