"""
Services module containing the registries, the ledger, and reporting.
"""

from .student_registry import StudentRegistry
from .course_catalog import CourseCatalog
from .enrollment_ledger import EnrollmentLedger, CreditLimitPolicy
from .reporting import ReportingEngine, Transcript, TranscriptRow, CourseStatistics

__all__ = [
    "StudentRegistry",
    "CourseCatalog",
    "EnrollmentLedger",
    "CreditLimitPolicy",
    "ReportingEngine",
    "Transcript",
    "TranscriptRow",
    "CourseStatistics",
]
