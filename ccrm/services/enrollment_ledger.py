"""
Enrollment ledger: links students to courses and records their marks.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.entities import Course, Enrollment, Student, canonical_code
from ..core.exceptions import (
    CreditLimitExceededError, DuplicateEnrollmentError, EnrollmentError, EnrollmentNotFoundError,
    OutOfRangeError,
)
from ..core.grading import DEFAULT_SCALE, Grade, GradeScale, MAX_MARKS, MIN_MARKS, marks_in_range
from ..core.interfaces import EnrollmentPolicy
from .course_catalog import CourseCatalog
from .student_registry import StudentRegistry

logger = logging.getLogger("ccrm.enrollments")


class CreditLimitPolicy(EnrollmentPolicy):
    """Policy that caps the credits a student may take in one semester."""

    def __init__(self, max_credits: int, catalog: CourseCatalog):
        self._max_credits = max_credits
        self._catalog = catalog

    @property
    def max_credits(self) -> int:
        return self._max_credits

    def check(self, student: Student, course: Course,
              current_enrollments: Sequence[Enrollment]) -> None:
        taken = 0
        for enrollment in current_enrollments:
            other = self._catalog.find_by_code(enrollment.course_code)
            if other.semester is course.semester:
                taken += other.credits
        if taken + course.credits > self._max_credits:
            raise CreditLimitExceededError(
                f"Enrolling {student.id} in {course.code} would exceed "
                f"{self._max_credits} credits for {course.semester.value}",
                details={
                    "student_id": student.id,
                    "course_code": course.code,
                    "semester": course.semester.value,
                    "current_credits": taken,
                    "max_credits": self._max_credits,
                },
            )

    def get_policy_name(self) -> str:
        return "CreditLimitPolicy"


class EnrollmentLedger:
    """Ledger of enrollments keyed by (student id, course code).

    Students and courses are referenced by identifier only and resolved
    through the registries when an enrollment is created.
    """

    def __init__(self, students: StudentRegistry, courses: CourseCatalog,
                 scale: Optional[GradeScale] = None):
        self._students = students
        self._courses = courses
        self._scale = scale or DEFAULT_SCALE
        self._enrollments: Dict[Tuple[str, str], Enrollment] = {}
        self._policies: List[EnrollmentPolicy] = []

    def __len__(self) -> int:
        return len(self._enrollments)

    @property
    def scale(self) -> GradeScale:
        return self._scale

    def add_policy(self, policy: EnrollmentPolicy) -> None:
        """Add an enrollment policy."""
        self._policies.append(policy)

    def remove_policy(self, policy_name: str) -> None:
        """Remove an enrollment policy by name."""
        self._policies = [p for p in self._policies if p.get_policy_name() != policy_name]

    @property
    def policies(self) -> List[EnrollmentPolicy]:
        return list(self._policies)

    def enroll(self, student_id: str, course_code: str,
               enrollment_date: Optional[date] = None) -> Enrollment:
        """Enroll a student in a course.

        Raises StudentNotFoundError or CourseNotFoundError when either key
        does not resolve, DuplicateEnrollmentError when the pair already
        exists, and any EnrollmentError raised by an installed policy.
        """
        student = self._students.find_by_id(student_id)
        course = self._courses.find_by_code(course_code)
        key = (student.id, course.key)
        if key in self._enrollments:
            logger.warning("Rejected duplicate enrollment of %s in %s", student.id, course.code)
            raise DuplicateEnrollmentError(
                f"Student {student.id} is already enrolled in {course.code}",
                details={"student_id": student.id, "course_code": course.code},
            )

        current = self.enrollments_for(student.id)
        for policy in self._policies:
            try:
                policy.check(student, course, current)
            except EnrollmentError:
                logger.warning("Policy %s rejected %s in %s",
                               policy.get_policy_name(), student.id, course.code)
                raise

        enrollment = Enrollment(student.id, course.code, enrollment_date, self._scale)
        self._enrollments[key] = enrollment
        self._students.record_enrollment(student.id, course.code)
        logger.info("Enrolled %s in %s", student.id, course.code)
        return enrollment

    def find(self, student_id: str, course_code: str) -> Enrollment:
        enrollment = self._enrollments.get((student_id, canonical_code(course_code)))
        if enrollment is None:
            raise EnrollmentNotFoundError(
                f"No enrollment for {student_id} in {course_code}",
                details={"student_id": student_id, "course_code": course_code},
            )
        return enrollment

    def record_marks(self, student_id: str, course_code: str, marks: float) -> Enrollment:
        """Record marks and recompute the grade.

        Out-of-range marks leave the existing marks and grade untouched.
        """
        enrollment = self.find(student_id, course_code)
        if not marks_in_range(marks):
            logger.warning("Rejected marks %s for %s in %s", marks, student_id, course_code)
            raise OutOfRangeError(
                f"Marks must be between {MIN_MARKS:g} and {MAX_MARKS:g}, got {marks}",
                details={"marks": marks, "min": MIN_MARKS, "max": MAX_MARKS},
            )
        grade: Grade = enrollment.set_marks(marks)
        logger.info("Recorded %s marks for %s in %s: grade %s",
                    marks, student_id, enrollment.course_code, grade.letter)
        return enrollment

    def enrollments_for(self, student_id: str) -> List[Enrollment]:
        """Enrollments of one student in the order they were made."""
        return [e for e in self._enrollments.values() if e.student_id == student_id]
