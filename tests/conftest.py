"""
Pytest configuration and shared fixtures for the CCRM test suite.

AnyIO is pinned to the asyncio backend for the in-process API tests.
"""
import pytest

from ccrm.config import AppConfig
from ccrm.core.enums import Semester
from ccrm.main import CCRMPlatform
from ccrm.services import CourseCatalog, EnrollmentLedger, ReportingEngine, StudentRegistry


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def students() -> StudentRegistry:
    return StudentRegistry()


@pytest.fixture
def courses() -> CourseCatalog:
    return CourseCatalog()


@pytest.fixture
def ledger(students: StudentRegistry, courses: CourseCatalog) -> EnrollmentLedger:
    return EnrollmentLedger(students, courses)


@pytest.fixture
def reports(students, courses, ledger) -> ReportingEngine:
    return ReportingEngine(students, courses, ledger)


@pytest.fixture
def sample_courses(courses: CourseCatalog) -> CourseCatalog:
    courses.add_course("CS101", "Introduction to Programming", 3, "Dr. Smith",
                       Semester.FALL, "Computer Science")
    courses.add_course("MATH201", "Calculus I", 4, "Prof. Johnson",
                       Semester.FALL, "Mathematics")
    courses.add_course("PHY101", "Physics Fundamentals", 3, "Dr. Brown",
                       Semester.SPRING, "Physics")
    return courses


@pytest.fixture
def alice(students: StudentRegistry):
    return students.add_student("S1", "REG-001", "Alice Johnson", "alice@university.edu")


@pytest.fixture
def platform() -> CCRMPlatform:
    return CCRMPlatform(AppConfig(seed_sample_data=False))
