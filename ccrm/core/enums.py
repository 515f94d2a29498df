"""
Enumerations and constants for the CCRM platform.
"""

from enum import Enum
from typing import Optional


class EntityStatus(Enum):
    """Soft-delete status of a record."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Semester(Enum):
    """Academic terms a course can run in."""
    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"

    @classmethod
    def default(cls) -> "Semester":
        return cls.FALL

    @classmethod
    def parse(cls, value: Optional[object]) -> "Semester":
        """Parse semester text leniently.

        Unknown or missing input falls back to FALL instead of raising, so a
        mistyped term never aborts course creation.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.default()
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            return cls.default()
