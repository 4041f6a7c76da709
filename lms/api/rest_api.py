"""
REST API implementation for the LMS using FastAPI.

Course and content positions in paths are 1-based, as shown to users.
Every request except ``/`` and ``/health`` authenticates with HTTP Basic
credentials checked against the user directory.
"""

import threading
from typing import Dict, List, Optional, Type
from datetime import datetime, timezone

from pydantic import BaseModel, Field, StrictInt

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .. import __version__
from ..core.entities import Course, Identity
from ..core.exceptions import (
    AuthError, AuthorizationError, ConflictError, LMSException, NotFoundError, ValidationError
)
from ..services import (
    AdministratorService, LMSContext, OperationResult, StudentService, TeacherService, operations_for
)
from ..services.base_service import RoleService


# Pydantic models for API
class CourseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    teacher_email: str = Field(..., min_length=1)


class ContentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=100)


class StudentAccountCreate(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class GradeCreate(BaseModel):
    student_email: str = Field(..., min_length=1)
    grade: StrictInt


class GradeResponse(BaseModel):
    student_email: str
    grade: int


class CourseListingResponse(BaseModel):
    display_index: int
    name: str
    teacher_email: str
    course_id: Optional[int] = None


class CourseResponse(BaseModel):
    course_id: Optional[int] = None
    name: str
    teacher_email: str
    contents: List[str] = []
    students: List[str] = []
    grades: List[GradeResponse] = []
    created_at: datetime
    updated_at: datetime
    version: int


class CourseReportResponse(BaseModel):
    course_id: Optional[int] = None
    name: str
    teacher_email: str
    students: List[str] = []
    grades: List[GradeResponse] = []


class AccountResponse(BaseModel):
    username: str
    email: str
    role: str


class EnrolledCourseResponse(BaseModel):
    display_index: int
    course_id: Optional[int] = None
    name: str
    teacher_email: str
    contents: List[str] = []


class StudentGradesResponse(BaseModel):
    display_index: int
    course_id: Optional[int] = None
    name: str
    teacher_email: str
    grades: List[int] = []


class MessageResponse(BaseModel):
    success: bool
    message: str


def status_for(error: LMSException) -> int:
    """HTTP status for a business-rule violation."""
    if isinstance(error, AuthError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(error, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class LMSRestAPI:
    """REST API implementation for the LMS."""

    def __init__(self, context: LMSContext):
        self._context = context
        self._lock = threading.RLock()
        self._security = HTTPBasic()

        self.app = FastAPI(
            title="Learning Management System API",
            description="Courses, rosters and grades for administrators, teachers and students",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self._setup_routes()

    def _authenticate(self, credentials: HTTPBasicCredentials) -> Identity:
        try:
            return self._context.directory.authenticate(credentials.username, credentials.password)
        except AuthError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=e.message,
                headers={"WWW-Authenticate": "Basic"},
            )

    def _service(self, identity: Identity, *allowed: Type[RoleService]) -> RoleService:
        if not any(identity.role is service.ROLE for service in allowed):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail=f"Operation not available to a {identity.role.value}")
        return operations_for(identity, self._context)

    @staticmethod
    def _unwrap(result: OperationResult):
        if not result.success:
            raise HTTPException(status_code=status_for(result.error), detail=result.message)
        return result.value

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.exception_handler(RequestValidationError)
        async def invalid_request(request: Request, exc: RequestValidationError):
            """Malformed bodies and parameters are validation errors like any other."""
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": jsonable_encoder(exc.errors())}
            )

        def current_identity(credentials: HTTPBasicCredentials = Depends(self._security)) -> Identity:
            return self._authenticate(credentials)

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Learning Management System API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        @self.app.get("/me", response_model=AccountResponse)
        async def who_am_i(identity: Identity = Depends(current_identity)):
            return AccountResponse(username=identity.username, email=identity.email, role=identity.role.value)

        # Course endpoints
        @self.app.get("/courses", response_model=List[CourseListingResponse])
        async def list_courses(identity: Identity = Depends(current_identity)):
            """List all courses."""
            with self._lock:
                service = operations_for(identity, self._context)
                listings = self._unwrap(service.list_courses())
                return [CourseListingResponse(**listing._asdict()) for listing in listings]

        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(course_data: CourseCreate, identity: Identity = Depends(current_identity)):
            """Create a new course."""
            with self._lock:
                service = self._service(identity, AdministratorService)
                course = self._unwrap(service.add_course(course_data.name, course_data.teacher_email))
                return self._course_to_response(course)

        @self.app.delete("/courses/{position}", response_model=CourseResponse)
        async def delete_course(position: int, identity: Identity = Depends(current_identity)):
            """Delete a course; later positions shift down by one."""
            with self._lock:
                service = self._service(identity, AdministratorService)
                removed = self._unwrap(service.delete_course(position - 1))
                return self._course_to_response(removed)

        @self.app.get("/courses/{position}/contents", response_model=List[str])
        async def view_course(position: int, identity: Identity = Depends(current_identity)):
            """Contents of a course."""
            with self._lock:
                service = self._service(identity, TeacherService)
                return self._unwrap(service.view_course(position - 1))

        @self.app.post("/courses/{position}/contents", response_model=CourseResponse,
                       status_code=status.HTTP_201_CREATED)
        async def add_content(position: int, content: ContentCreate,
                              identity: Identity = Depends(current_identity)):
            """Append a content item to a course."""
            with self._lock:
                service = self._service(identity, AdministratorService, TeacherService)
                if isinstance(service, AdministratorService):
                    result = service.edit_course(position - 1, add_content=content.text)
                else:
                    result = service.add_content(position - 1, content.text)
                return self._course_to_response(self._unwrap(result))

        @self.app.delete("/courses/{position}/contents/{content_position}", response_model=CourseResponse)
        async def remove_content(position: int, content_position: int,
                                 identity: Identity = Depends(current_identity)):
            """Remove a content item from a course."""
            with self._lock:
                service = self._service(identity, AdministratorService)
                course = self._unwrap(service.edit_course(position - 1,
                                                          remove_content_index=content_position - 1))
                return self._course_to_response(course)

        # Roster endpoints
        @self.app.post("/courses/{position}/students", response_model=AccountResponse,
                       status_code=status.HTTP_201_CREATED)
        async def enroll_new_student(position: int, account: StudentAccountCreate,
                                     identity: Identity = Depends(current_identity)):
            """Create a student account and enroll it."""
            with self._lock:
                service = self._service(identity, AdministratorService)
                student = self._unwrap(service.enroll_student_with_account_creation(
                    position - 1, account.email, account.password))
                return AccountResponse(username=student.username, email=student.email, role=student.role.value)

        @self.app.delete("/courses/{position}/students/{email}", response_model=MessageResponse)
        async def remove_student(position: int, email: str, identity: Identity = Depends(current_identity)):
            """Remove a student from a course roster."""
            with self._lock:
                service = self._service(identity, AdministratorService)
                result = service.remove_student(position - 1, email)
                self._unwrap(result)
                return MessageResponse(success=True, message=result.message)

        @self.app.get("/courses/{position}/students", response_model=List[str])
        async def list_students(position: int, identity: Identity = Depends(current_identity)):
            """Roster of a course."""
            with self._lock:
                service = self._service(identity, TeacherService)
                return self._unwrap(service.list_students(position - 1))

        @self.app.post("/courses/{position}/enrollment", response_model=MessageResponse,
                       status_code=status.HTTP_201_CREATED)
        async def self_enroll(position: int, identity: Identity = Depends(current_identity)):
            """Enroll the authenticated student."""
            with self._lock:
                service = self._service(identity, StudentService)
                result = service.enroll_in_course(position - 1)
                self._unwrap(result)
                return MessageResponse(success=True, message=result.message)

        # Grade endpoints
        @self.app.post("/courses/{position}/grades", response_model=GradeResponse,
                       status_code=status.HTTP_201_CREATED)
        async def add_grade(position: int, grade_data: GradeCreate,
                            identity: Identity = Depends(current_identity)):
            """Record a grade for an enrolled student."""
            with self._lock:
                service = self._service(identity, TeacherService)
                entry = self._unwrap(service.add_grade(position - 1, grade_data.student_email, grade_data.grade))
                return GradeResponse(**entry._asdict())

        # Report endpoints
        @self.app.get("/reports", response_model=List[CourseReportResponse])
        async def reports(identity: Identity = Depends(current_identity)):
            """All courses for administrators, own courses for teachers."""
            with self._lock:
                service = self._service(identity, AdministratorService, TeacherService)
                if isinstance(service, AdministratorService):
                    report = self._unwrap(service.view_reports())
                else:
                    report = self._unwrap(service.view_own_reports())
                return [self._report_to_response(entry) for entry in report]

        @self.app.get("/me/courses", response_model=List[EnrolledCourseResponse])
        async def my_courses(identity: Identity = Depends(current_identity)):
            with self._lock:
                service = self._service(identity, StudentService)
                return [EnrolledCourseResponse(**entry) for entry in self._unwrap(service.view_enrolled_courses())]

        @self.app.get("/me/grades", response_model=List[StudentGradesResponse])
        async def my_grades(identity: Identity = Depends(current_identity)):
            with self._lock:
                service = self._service(identity, StudentService)
                return [StudentGradesResponse(**entry) for entry in self._unwrap(service.view_grades())]

    def _course_to_response(self, course: Course) -> CourseResponse:
        """Convert Course entity to response model."""
        return CourseResponse(**course.to_dict())

    def _report_to_response(self, report: dict) -> CourseReportResponse:
        return CourseReportResponse(
            course_id=report['course_id'],
            name=report['name'],
            teacher_email=report['teacher_email'],
            students=report['students'],
            grades=[GradeResponse(**entry._asdict()) for entry in report['grades']],
        )
