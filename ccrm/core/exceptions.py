"""
Custom exceptions for the CCRM platform.
"""

from typing import Optional, Any, Dict


class CCRMException(Exception):
    """Base exception for all CCRM-related errors."""

    default_code = "CCRM_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}


class ValidationError(CCRMException):
    """Raised when data validation fails."""
    default_code = "VALIDATION_ERROR"


class OutOfRangeError(ValidationError):
    """Raised when marks fall outside the 0-100 range."""
    default_code = "MARKS_OUT_OF_RANGE"


class ConfigurationError(CCRMException):
    """Raised when configuration is invalid."""
    default_code = "CONFIGURATION_ERROR"


class DuplicateEntityError(CCRMException):
    """Raised when attempting to create a duplicate entity."""
    default_code = "DUPLICATE_ENTITY"


class DuplicateIdError(DuplicateEntityError):
    """Raised when a student id is already registered."""
    default_code = "DUPLICATE_ID"


class DuplicateCodeError(DuplicateEntityError):
    """Raised when a course code is already in the catalog."""
    default_code = "DUPLICATE_CODE"


class DuplicateEnrollmentError(DuplicateEntityError):
    """Raised when a student is already enrolled in a course."""
    default_code = "DUPLICATE_ENROLLMENT"


class ResourceNotFoundError(CCRMException):
    """Raised when a requested resource is not found."""
    default_code = "NOT_FOUND"


class StudentNotFoundError(ResourceNotFoundError):
    default_code = "STUDENT_NOT_FOUND"


class CourseNotFoundError(ResourceNotFoundError):
    default_code = "COURSE_NOT_FOUND"


class EnrollmentNotFoundError(ResourceNotFoundError):
    default_code = "ENROLLMENT_NOT_FOUND"


class EnrollmentError(CCRMException):
    """Raised when an enrollment policy rejects a request."""
    default_code = "ENROLLMENT_REJECTED"


class CreditLimitExceededError(EnrollmentError):
    """Raised when an enrollment would exceed the semester credit limit."""
    default_code = "CREDIT_LIMIT_EXCEEDED"
