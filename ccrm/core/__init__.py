"""
Core module containing the record domain model.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .grading import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Person",
    "Student",
    "CourseSpec",
    "Course",
    "Enrollment",
    "canonical_code",

    # Grading
    "Grade",
    "GradeScale",
    "DEFAULT_SCALE",
    "grade_for",
    "marks_in_range",

    # Interfaces
    "EnrollmentPolicy",

    # Enums
    "EntityStatus",
    "Semester",

    # Exceptions
    "CCRMException",
    "ValidationError",
    "OutOfRangeError",
    "ConfigurationError",
    "DuplicateEntityError",
    "DuplicateIdError",
    "DuplicateCodeError",
    "DuplicateEnrollmentError",
    "ResourceNotFoundError",
    "StudentNotFoundError",
    "CourseNotFoundError",
    "EnrollmentNotFoundError",
    "EnrollmentError",
    "CreditLimitExceededError",
]
