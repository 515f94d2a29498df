"""
Student registry: owns Student records and enforces id uniqueness.
"""

import logging
from datetime import date
from typing import Dict, Iterator, Optional

from ..core.entities import Student
from ..core.exceptions import DuplicateIdError, StudentNotFoundError

logger = logging.getLogger("ccrm.students")


class StudentRegistry:
    """In-memory registry of students keyed by their id."""

    def __init__(self):
        self._students: Dict[str, Student] = {}

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._students

    def add_student(self, student_id: str, registration_number: str, full_name: str, email: str,
                    enrollment_date: Optional[date] = None) -> Student:
        """Admit a new, active student with no courses."""
        if student_id in self._students:
            logger.warning("Rejected duplicate student id %s", student_id)
            raise DuplicateIdError(
                f"Student ID already exists: {student_id}",
                details={"student_id": student_id},
            )
        student = Student(student_id, registration_number, full_name, email, enrollment_date)
        self._students[student_id] = student
        logger.info("Added student %s (%s)", student_id, registration_number)
        return student

    def find_by_id(self, student_id: str) -> Student:
        """Get a student by id, active or not."""
        student = self._students.get(student_id)
        if student is None:
            logger.debug("Student %s not found", student_id)
            raise StudentNotFoundError(
                f"Student not found: {student_id}",
                details={"student_id": student_id},
            )
        return student

    def list_active(self) -> Iterator[Student]:
        """Yield active students in insertion order."""
        return (s for s in list(self._students.values()) if s.is_active)

    def list_all(self) -> Iterator[Student]:
        return iter(list(self._students.values()))

    def update_profile(self, student_id: str, full_name: Optional[str] = None,
                       email: Optional[str] = None) -> Student:
        """Update name and/or email; blank values leave the field as is."""
        student = self.find_by_id(student_id)
        if student.update_profile(full_name, email):
            logger.info("Updated profile of student %s", student_id)
        return student

    def deactivate(self, student_id: str) -> Student:
        student = self.find_by_id(student_id)
        student.deactivate()
        logger.info("Deactivated student %s", student_id)
        return student

    def activate(self, student_id: str) -> Student:
        student = self.find_by_id(student_id)
        student.activate()
        logger.info("Activated student %s", student_id)
        return student

    def record_enrollment(self, student_id: str, course_code: str) -> bool:
        """Append a course code to the student's list.

        Called by the enrollment ledger. Returns False, without error, when
        the student already has the code.
        """
        student = self.find_by_id(student_id)
        added = student.add_course_code(course_code)
        if not added:
            logger.info("Student %s already enrolled in %s", student_id, course_code)
        return added
