"""
Core entities for the CCRM platform.
"""

from abc import ABC
from dataclasses import dataclass, fields
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from .enums import EntityStatus, Semester
from .exceptions import ValidationError
from .grading import DEFAULT_SCALE, Grade, GradeScale


def canonical_code(code: str) -> str:
    """Storage key for a course code; lookups ignore case."""
    return code.strip().upper()


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(
            f"{field_name} must not be empty",
            details={"field": field_name},
        )
    return str(value)


class AbstractEntity(ABC):
    """Base abstract entity with identity, lifecycle, and versioning."""

    def __init__(self, entity_id: str):
        self._id = entity_id
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1
        self._status = EntityStatus.ACTIVE

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def version(self) -> int:
        return self._version

    @property
    def status(self) -> EntityStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status is EntityStatus.ACTIVE

    def touch(self) -> None:
        """Record a modification."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def activate(self) -> None:
        """Activate the entity."""
        self._status = EntityStatus.ACTIVE
        self.touch()

    def deactivate(self) -> None:
        """Soft-delete the entity; it stays addressable by key."""
        self._status = EntityStatus.INACTIVE
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
            'status': self._status.value,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id}, status={self._status.value})"


class Person(AbstractEntity):
    """Abstract base class for all persons in the system."""

    def __init__(self, person_id: str, full_name: str, email: str):
        super().__init__(_require_text(person_id, "id"))
        self._full_name = full_name
        self._email = email

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email

    def update_profile(self, full_name: Optional[str] = None, email: Optional[str] = None) -> bool:
        """Apply a partial profile update.

        Blank or missing values leave the attribute untouched. Returns True
        when anything changed.
        """
        changed = False
        if full_name and full_name.strip():
            self._full_name = full_name
            changed = True
        if email and email.strip():
            self._email = email
            changed = True
        if changed:
            self.touch()
        return changed


class Student(Person):
    """Student entity with registration data and enrolled course codes."""

    def __init__(self, student_id: str, registration_number: str, full_name: str, email: str,
                 enrollment_date: Optional[date] = None):
        super().__init__(student_id, full_name, email)
        self._registration_number = registration_number
        self._enrollment_date = enrollment_date or date.today()
        self._enrolled_course_codes: List[str] = []

    @property
    def registration_number(self) -> str:
        return self._registration_number

    @property
    def enrollment_date(self) -> date:
        return self._enrollment_date

    @property
    def enrolled_course_codes(self) -> List[str]:
        return list(self._enrolled_course_codes)

    def is_enrolled_in(self, course_code: str) -> bool:
        key = canonical_code(course_code)
        return any(canonical_code(code) == key for code in self._enrolled_course_codes)

    def add_course_code(self, course_code: str) -> bool:
        """Append a course code unless already present. Returns True if appended."""
        if self.is_enrolled_in(course_code):
            return False
        self._enrolled_course_codes.append(course_code)
        self.touch()
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'registration_number': self._registration_number,
            'full_name': self._full_name,
            'email': self._email,
            'enrollment_date': self._enrollment_date.isoformat(),
            'enrolled_course_codes': list(self._enrolled_course_codes),
            'active': self.is_active,
        })
        return base_dict


@dataclass
class CourseSpec:
    """Fields assembled before a Course is built.

    `semester` may be given as a Semester or as raw text; text that does not
    name a term is normalized to FALL rather than rejected.
    """
    code: Optional[str] = None
    title: Optional[str] = None
    credits: Optional[int] = None
    instructor: Optional[str] = None
    semester: Any = None
    department: Optional[str] = None

    def missing_fields(self) -> List[str]:
        # semester never counts as missing; it falls back to FALL
        return [f.name for f in fields(self)
                if f.name != "semester" and getattr(self, f.name) is None]

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                f"Course is missing required fields: {', '.join(missing)}",
                details={"missing": missing},
            )
        for name in ("code", "title", "instructor", "department"):
            _require_text(getattr(self, name), name)
        if isinstance(self.credits, bool) or not isinstance(self.credits, int) or self.credits <= 0:
            raise ValidationError(
                "credits must be a positive integer",
                details={"field": "credits", "value": self.credits},
            )

    def build(self) -> "Course":
        """Validate every field and produce the Course."""
        self.validate()
        return Course(self)


class Course(AbstractEntity):
    """Course entity; construct through CourseSpec.build()."""

    def __init__(self, spec: CourseSpec):
        super().__init__(spec.code.strip())
        self._code = spec.code.strip()
        self._title = spec.title
        self._credits = spec.credits
        self._instructor = spec.instructor
        self._semester = Semester.parse(spec.semester)
        self._department = spec.department

    @property
    def code(self) -> str:
        return self._code

    @property
    def key(self) -> str:
        return canonical_code(self._code)

    @property
    def title(self) -> str:
        return self._title

    @property
    def credits(self) -> int:
        return self._credits

    @property
    def instructor(self) -> str:
        return self._instructor

    @property
    def semester(self) -> Semester:
        return self._semester

    @property
    def department(self) -> str:
        return self._department

    def update_details(self, title: Optional[str] = None, instructor: Optional[str] = None,
                       department: Optional[str] = None) -> bool:
        """Partial update of the mutable fields; blanks are ignored."""
        changed = False
        for attr, value in (("_title", title), ("_instructor", instructor), ("_department", department)):
            if value and value.strip():
                setattr(self, attr, value)
                changed = True
        if changed:
            self.touch()
        return changed

    def to_dict(self) -> Dict[str, Any]:
        """Convert course to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'code': self._code,
            'title': self._title,
            'credits': self._credits,
            'instructor': self._instructor,
            'semester': self._semester.value,
            'department': self._department,
            'active': self.is_active,
        })
        return base_dict

    def __str__(self) -> str:
        return f"{self._code} - {self._title} ({self._credits} credits)"


class Enrollment:
    """Link between a student id and a course code, with marks and grade.

    Enrollments have no soft-delete state; they are only created and graded.
    """

    def __init__(self, student_id: str, course_code: str, enrollment_date: Optional[date] = None,
                 scale: Optional[GradeScale] = None):
        self._updated_at = datetime.now(timezone.utc)
        self._student_id = student_id
        self._course_code = course_code
        self._enrollment_date = enrollment_date or date.today()
        self._scale = scale or DEFAULT_SCALE
        self._marks = 0.0
        self._marks_recorded = False
        self._grade = Grade.lowest()

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def course_code(self) -> str:
        return self._course_code

    @property
    def course_key(self) -> str:
        return canonical_code(self._course_code)

    @property
    def enrollment_date(self) -> date:
        return self._enrollment_date

    @property
    def marks(self) -> float:
        return self._marks

    @property
    def marks_recorded(self) -> bool:
        return self._marks_recorded

    @property
    def grade(self) -> Grade:
        return self._grade

    @property
    def points(self) -> float:
        return self._grade.points

    def set_marks(self, marks: float) -> Grade:
        """Store marks and recompute the grade. Range is checked by the ledger."""
        self._marks = float(marks)
        self._marks_recorded = True
        self._grade = self._scale.grade_for(self._marks)
        self._updated_at = datetime.now(timezone.utc)
        return self._grade

    def to_dict(self) -> Dict[str, Any]:
        """Convert enrollment to dictionary."""
        return {
            'student_id': self._student_id,
            'course_code': self._course_code,
            'enrollment_date': self._enrollment_date.isoformat(),
            'marks': self._marks,
            'marks_recorded': self._marks_recorded,
            'grade': self._grade.letter,
            'points': self._grade.points,
        }
