"""
REST API for the CCRM platform using FastAPI.

A thin adapter: request bodies are parsed by pydantic models, every call is
forwarded to the core services, and core exceptions are mapped to HTTP
status codes in one place.
"""

import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..core.entities import Course, Enrollment, Student
from ..core.exceptions import (
    CCRMException, DuplicateEntityError, EnrollmentError, ResourceNotFoundError, ValidationError
)
from ..services import CourseCatalog, EnrollmentLedger, ReportingEngine, StudentRegistry

logger = logging.getLogger("ccrm.api")


# Pydantic models for API
class StudentCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=20)
    registration_number: str = Field(..., min_length=1, max_length=40)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=r'^[^@]+@[^@]+\.[^@]+$')


class StudentUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None


class StudentResponse(BaseModel):
    id: str
    registration_number: str
    full_name: str
    email: str
    enrollment_date: date
    enrolled_course_codes: List[str] = []
    active: bool


class CourseCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=200)
    credits: int = Field(..., ge=1)
    instructor: str = Field(..., min_length=1, max_length=100)
    department: str = Field(..., min_length=1, max_length=100)
    semester: Optional[str] = None


class CourseResponse(BaseModel):
    code: str
    title: str
    credits: int
    instructor: str
    semester: str
    department: str
    active: bool


class EnrollmentCreate(BaseModel):
    student_id: str = Field(..., min_length=1)
    course_code: str = Field(..., min_length=1)


class MarksUpdate(BaseModel):
    marks: float


class EnrollmentResponse(BaseModel):
    student_id: str
    course_code: str
    enrollment_date: date
    marks: float
    grade: str
    points: float


class TranscriptRowResponse(BaseModel):
    course_code: str
    marks: float
    grade: str
    points: float


class TranscriptResponse(BaseModel):
    student: StudentResponse
    rows: List[TranscriptRowResponse] = []
    gpa: float


class StatisticsResponse(BaseModel):
    total_courses: int
    by_department: Dict[str, int]


def status_for(exc: CCRMException) -> int:
    """HTTP status code for a core exception."""
    if isinstance(exc, ResourceNotFoundError):
        return 404
    if isinstance(exc, (DuplicateEntityError, EnrollmentError)):
        return 409
    if isinstance(exc, ValidationError):
        return 422
    return 400


class CCRMRestAPI:
    """REST API implementation for the CCRM platform."""

    def __init__(self, students: StudentRegistry, courses: CourseCatalog,
                 ledger: EnrollmentLedger, reports: ReportingEngine):
        self._students = students
        self._courses = courses
        self._ledger = ledger
        self._reports = reports

        self.app = FastAPI(
            title="CCRM API",
            description="Campus Course Records Manager",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        @self.app.exception_handler(CCRMException)
        async def handle_core_error(request: Request, exc: CCRMException):
            code = status_for(exc)
            logger.info("%s %s -> %d %s", request.method, request.url.path, code, exc.error_code)
            return JSONResponse(
                status_code=code,
                content={"detail": exc.message, "error_code": exc.error_code},
            )

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def create_student(student_data: StudentCreate):
            student = self._students.add_student(
                student_data.id,
                student_data.registration_number,
                student_data.full_name,
                student_data.email,
            )
            return self._student_to_response(student)

        @self.app.get("/students", response_model=List[StudentResponse])
        async def list_students():
            """List active students."""
            return [self._student_to_response(s) for s in self._students.list_active()]

        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        async def get_student(student_id: str):
            return self._student_to_response(self._students.find_by_id(student_id))

        @self.app.patch("/students/{student_id}", response_model=StudentResponse)
        async def update_student(student_id: str, update: StudentUpdate):
            student = self._students.update_profile(student_id, update.full_name, update.email)
            return self._student_to_response(student)

        @self.app.post("/students/{student_id}/deactivate", response_model=StudentResponse)
        async def deactivate_student(student_id: str):
            return self._student_to_response(self._students.deactivate(student_id))

        @self.app.get("/students/{student_id}/enrollments", response_model=List[EnrollmentResponse])
        async def get_student_enrollments(student_id: str):
            self._students.find_by_id(student_id)
            return [self._enrollment_to_response(e) for e in self._ledger.enrollments_for(student_id)]

        @self.app.get("/students/{student_id}/transcript", response_model=TranscriptResponse)
        async def get_transcript(student_id: str):
            transcript = self._reports.transcript_for(student_id)
            return TranscriptResponse(
                student=self._student_to_response(transcript.student),
                rows=[TranscriptRowResponse(**vars(row)) for row in transcript.rows],
                gpa=round(transcript.gpa, 2),
            )

        # Course endpoints
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(course_data: CourseCreate):
            course = self._courses.add_course(
                code=course_data.code,
                title=course_data.title,
                credits=course_data.credits,
                instructor=course_data.instructor,
                semester=course_data.semester,
                department=course_data.department,
            )
            return self._course_to_response(course)

        @self.app.get("/courses", response_model=List[CourseResponse])
        async def list_courses(instructor: Optional[str] = None, department: Optional[str] = None):
            """List active courses matching every filter given."""
            courses = list(self._courses.list_active())
            if instructor:
                matching = self._courses.search_by_instructor(instructor)
                courses = [c for c in courses if c in matching]
            if department:
                matching = self._courses.search_by_department(department)
                courses = [c for c in courses if c in matching]
            return [self._course_to_response(c) for c in courses]

        @self.app.get("/courses/{code}", response_model=CourseResponse)
        async def get_course(code: str):
            return self._course_to_response(self._courses.find_by_code(code))

        @self.app.post("/courses/{code}/deactivate", response_model=CourseResponse)
        async def deactivate_course(code: str):
            return self._course_to_response(self._courses.deactivate(code))

        # Enrollment endpoints
        @self.app.post("/enrollments", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
        async def enroll_student(enrollment_data: EnrollmentCreate):
            enrollment = self._ledger.enroll(enrollment_data.student_id, enrollment_data.course_code)
            return self._enrollment_to_response(enrollment)

        @self.app.put("/enrollments/{student_id}/{course_code}/marks", response_model=EnrollmentResponse)
        async def record_marks(student_id: str, course_code: str, marks: MarksUpdate):
            enrollment = self._ledger.record_marks(student_id, course_code, marks.marks)
            return self._enrollment_to_response(enrollment)

        # Report endpoints
        @self.app.get("/reports/departments", response_model=Dict[str, int])
        async def department_counts():
            return self._reports.course_counts_by_department()

        @self.app.get("/reports/statistics", response_model=StatisticsResponse)
        async def course_statistics():
            stats = self._reports.course_statistics()
            return StatisticsResponse(total_courses=stats.total_courses, by_department=stats.by_department)

    def _student_to_response(self, student: Student) -> StudentResponse:
        """Convert Student entity to response model."""
        return StudentResponse(
            id=student.id,
            registration_number=student.registration_number,
            full_name=student.full_name,
            email=student.email,
            enrollment_date=student.enrollment_date,
            enrolled_course_codes=student.enrolled_course_codes,
            active=student.is_active,
        )

    def _course_to_response(self, course: Course) -> CourseResponse:
        """Convert Course entity to response model."""
        return CourseResponse(
            code=course.code,
            title=course.title,
            credits=course.credits,
            instructor=course.instructor,
            semester=course.semester.value,
            department=course.department,
            active=course.is_active,
        )

    def _enrollment_to_response(self, enrollment: Enrollment) -> EnrollmentResponse:
        return EnrollmentResponse(
            student_id=enrollment.student_id,
            course_code=enrollment.course_code,
            enrollment_date=enrollment.enrollment_date,
            marks=enrollment.marks,
            grade=enrollment.grade.letter,
            points=enrollment.points,
        )
