"""
HTTP client for the LMS REST API.
"""

import os
from typing import Any, Dict, List, Optional

import requests

from .core.exceptions import LMSException

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
BASE_URL_ENV_VAR = "LMS_BASE_URL"


class ApiError(LMSException):
    """Raised when the REST API answers with an error status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message, error_code=f"http_{status_code}", details={'status_code': status_code})
        self.status_code = status_code


def detect_base_url() -> str:
    """Base URL from ``LMS_BASE_URL``, else the local default."""
    return os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL


class LMSClient:
    """Thin wrapper around the REST endpoints, authenticating as one user.

    ``session`` may be any object with the ``requests.Session`` request
    methods.
    """

    def __init__(self, email: str, password: str, base_url: Optional[str] = None,
                 session: Optional[Any] = None, timeout: float = 5.0):
        self._base_url = (base_url or detect_base_url()).rstrip('/')
        self._auth = (email, password)
        self._http = session or requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        response = getattr(self._http, method)(
            f"{self._base_url}{path}", auth=self._auth, timeout=self._timeout,
            **({'json': json} if json is not None else {}))
        if response.status_code >= 400:
            try:
                detail = response.json().get('detail', response.text)
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, str(detail))
        return response.json()

    def is_healthy(self) -> bool:
        try:
            response = self._http.get(f"{self._base_url}/health", timeout=self._timeout)
        except requests.exceptions.RequestException:
            return False
        return response.status_code == 200

    def list_courses(self) -> List[Dict[str, Any]]:
        return self._request('get', "/courses")

    def create_course(self, name: str, teacher_email: str) -> Dict[str, Any]:
        return self._request('post', "/courses", {'name': name, 'teacher_email': teacher_email})

    def delete_course(self, position: int) -> Dict[str, Any]:
        return self._request('delete', f"/courses/{position}")

    def add_content(self, position: int, text: str) -> Dict[str, Any]:
        return self._request('post', f"/courses/{position}/contents", {'text': text})

    def enroll_new_student(self, position: int, email: str, password: str) -> Dict[str, Any]:
        return self._request('post', f"/courses/{position}/students", {'email': email, 'password': password})

    def enroll_self(self, position: int) -> Dict[str, Any]:
        return self._request('post', f"/courses/{position}/enrollment")

    def add_grade(self, position: int, student_email: str, grade: int) -> Dict[str, Any]:
        return self._request('post', f"/courses/{position}/grades",
                             {'student_email': student_email, 'grade': grade})

    def reports(self) -> List[Dict[str, Any]]:
        return self._request('get', "/reports")

    def my_grades(self) -> List[Dict[str, Any]]:
        return self._request('get', "/me/grades")
