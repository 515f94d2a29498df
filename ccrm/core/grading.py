"""
Grade scale: maps numeric marks to letter grades and grade points.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple

MIN_MARKS = 0.0
MAX_MARKS = 100.0


class Grade(Enum):
    """Letter grades with their grade-point value."""
    A = 4.0
    B = 3.0
    C = 2.0
    D = 1.0
    F = 0.0

    @property
    def letter(self) -> str:
        return self.name

    @property
    def points(self) -> float:
        return self.value

    @classmethod
    def lowest(cls) -> "Grade":
        return cls.F


def marks_in_range(marks: float) -> bool:
    """Check that marks lie within the recordable range."""
    return MIN_MARKS <= marks <= MAX_MARKS


class GradeScale:
    """Ordered thresholds mapping marks to grades.

    Thresholds are (minimum marks, grade) pairs checked from the highest
    minimum down; anything below every threshold gets the fallback grade.
    """

    def __init__(self, thresholds: Iterable[Tuple[float, Grade]], fallback: Grade = Grade.F):
        self._thresholds: List[Tuple[float, Grade]] = sorted(
            thresholds, key=lambda pair: pair[0], reverse=True
        )
        self._fallback = fallback

    @property
    def thresholds(self) -> List[Tuple[float, Grade]]:
        return list(self._thresholds)

    def grade_for(self, marks: float) -> Grade:
        """Return the grade for marks already validated to be in [0, 100]."""
        for minimum, grade in self._thresholds:
            if marks >= minimum:
                return grade
        return self._fallback


DEFAULT_SCALE = GradeScale([
    (90.0, Grade.A),
    (80.0, Grade.B),
    (70.0, Grade.C),
    (60.0, Grade.D),
])


def grade_for(marks: float, scale: Optional[GradeScale] = None) -> Tuple[str, float]:
    """Return the (letter, points) pair for the given marks."""
    grade = (scale or DEFAULT_SCALE).grade_for(marks)
    return grade.letter, grade.points
