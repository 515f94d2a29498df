"""
Reporting engine: read-only aggregation over the catalog and the ledger.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.entities import Enrollment, Student
from .course_catalog import CourseCatalog
from .enrollment_ledger import EnrollmentLedger
from .student_registry import StudentRegistry

logger = logging.getLogger("ccrm.reports")


@dataclass
class TranscriptRow:
    """One graded line of a transcript."""
    course_code: str
    marks: float
    grade: str
    points: float

    @classmethod
    def from_enrollment(cls, enrollment: Enrollment) -> "TranscriptRow":
        return cls(
            course_code=enrollment.course_code,
            marks=enrollment.marks,
            grade=enrollment.grade.letter,
            points=enrollment.points,
        )


@dataclass
class Transcript:
    """A student's profile, graded enrollments, and GPA."""
    student: Student
    rows: List[TranscriptRow] = field(default_factory=list)
    gpa: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'student': self.student.to_dict(),
            'rows': [vars(row).copy() for row in self.rows],
            'gpa': round(self.gpa, 2),
        }


@dataclass
class CourseStatistics:
    total_courses: int
    by_department: Dict[str, int]


def compute_gpa(points: List[float]) -> float:
    """Arithmetic mean of grade points; 0.0 when there are none."""
    if not points:
        return 0.0
    return sum(points) / len(points)


class ReportingEngine:
    """Derived views; never mutates the registries it reads."""

    def __init__(self, students: StudentRegistry, courses: CourseCatalog, ledger: EnrollmentLedger):
        self._students = students
        self._courses = courses
        self._ledger = ledger

    def course_counts_by_department(self) -> Dict[str, int]:
        """Number of active courses per department."""
        return dict(Counter(course.department for course in self._courses.list_active()))

    def course_statistics(self) -> CourseStatistics:
        return CourseStatistics(
            total_courses=len(self._courses),
            by_department=self.course_counts_by_department(),
        )

    def transcript_for(self, student_id: str) -> Transcript:
        """Build the transcript; raises StudentNotFoundError for unknown ids."""
        student = self._students.find_by_id(student_id)
        rows = [TranscriptRow.from_enrollment(e) for e in self._ledger.enrollments_for(student.id)]
        gpa = compute_gpa([row.points for row in rows])
        logger.debug("Transcript for %s: %d rows, GPA %.2f", student.id, len(rows), gpa)
        return Transcript(student=student, rows=rows, gpa=gpa)
