"""
Course catalog: owns Course records keyed case-insensitively by code.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from ..core.entities import Course, CourseSpec, canonical_code
from ..core.exceptions import CourseNotFoundError, DuplicateCodeError

logger = logging.getLogger("ccrm.courses")


def _same_text(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


class CourseCatalog:
    """In-memory catalog of courses.

    Codes are stored under their upper-cased form while the Course keeps the
    casing it was registered with.
    """

    def __init__(self):
        self._courses: Dict[str, Course] = {}

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and canonical_code(code) in self._courses

    def add_course(self, code: str, title: str, credits: int, instructor: str,
                   semester: Any, department: str) -> Course:
        """Build and register a course from its six fields."""
        return self.add_from_spec(CourseSpec(
            code=code,
            title=title,
            credits=credits,
            instructor=instructor,
            semester=semester,
            department=department,
        ))

    def add_from_spec(self, spec: CourseSpec) -> Course:
        if spec.code is not None and spec.code in self:
            logger.warning("Rejected duplicate course code %s", spec.code)
            raise DuplicateCodeError(
                f"Course code already exists: {spec.code}",
                details={"code": spec.code},
            )
        course = spec.build()
        self._courses[course.key] = course
        logger.info("Added course %s (%s, %s)", course.code, course.department, course.semester.value)
        return course

    def find_by_code(self, code: str) -> Course:
        """Case-insensitive lookup, active or not."""
        course = self._courses.get(canonical_code(code))
        if course is None:
            logger.debug("Course %s not found", code)
            raise CourseNotFoundError(
                f"Course not found: {code}",
                details={"code": code},
            )
        return course

    def list_active(self) -> Iterator[Course]:
        """Yield active courses in insertion order."""
        return (c for c in list(self._courses.values()) if c.is_active)

    def list_all(self) -> Iterator[Course]:
        return iter(list(self._courses.values()))

    def search_by_instructor(self, name: str) -> List[Course]:
        return [c for c in self.list_active() if _same_text(c.instructor, name)]

    def search_by_department(self, department: str) -> List[Course]:
        return [c for c in self.list_active() if _same_text(c.department, department)]

    def update_course(self, code: str, title: Optional[str] = None, instructor: Optional[str] = None,
                      department: Optional[str] = None) -> Course:
        course = self.find_by_code(code)
        if course.update_details(title, instructor, department):
            logger.info("Updated course %s", course.code)
        return course

    def deactivate(self, code: str) -> Course:
        course = self.find_by_code(code)
        course.deactivate()
        logger.info("Deactivated course %s", course.code)
        return course

    def activate(self, code: str) -> Course:
        course = self.find_by_code(code)
        course.activate()
        logger.info("Activated course %s", course.code)
        return course
