"""
Core interfaces and abstract base classes for the CCRM platform.
"""

from abc import ABC, abstractmethod
from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import Course, Enrollment, Student


class EnrollmentPolicy(ABC):
    """Abstract base class for enrollment policies."""

    @abstractmethod
    def check(self, student: 'Student', course: 'Course',
              current_enrollments: Sequence['Enrollment']) -> None:
        """Raise an EnrollmentError subclass if the student may not enroll."""
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        """Get the name of this policy."""
        pass
