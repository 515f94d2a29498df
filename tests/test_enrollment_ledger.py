"""
Enrollment ledger: pair uniqueness, marks recording, policy enforcement.
"""
from datetime import date

import pytest

from ccrm.core.exceptions import (
    CourseNotFoundError, CreditLimitExceededError, DuplicateEnrollmentError,
    EnrollmentNotFoundError, OutOfRangeError, StudentNotFoundError,
)
from ccrm.core.grading import Grade
from ccrm.services import CreditLimitPolicy


def test_enroll_creates_default_record(ledger, sample_courses, alice):
    enrollment = ledger.enroll("S1", "CS101")
    assert enrollment.student_id == "S1"
    assert enrollment.course_code == "CS101"
    assert enrollment.grade is Grade.F
    assert enrollment.points == 0.0
    assert enrollment.marks == 0.0
    assert not enrollment.marks_recorded
    assert enrollment.enrollment_date == date.today()
    assert alice.enrolled_course_codes == ["CS101"]


def test_enroll_uses_registered_course_casing(ledger, sample_courses, alice):
    enrollment = ledger.enroll("S1", "math201")
    assert enrollment.course_code == "MATH201"
    assert alice.enrolled_course_codes == ["MATH201"]


def test_enroll_unknown_student(ledger, sample_courses):
    with pytest.raises(StudentNotFoundError):
        ledger.enroll("S404", "CS101")
    assert len(ledger) == 0


def test_enroll_unknown_course(ledger, sample_courses, alice):
    with pytest.raises(CourseNotFoundError):
        ledger.enroll("S1", "BIO999")
    assert len(ledger) == 0
    assert alice.enrolled_course_codes == []


def test_duplicate_enrollment_rejected(ledger, sample_courses, alice):
    ledger.enroll("S1", "CS101")
    with pytest.raises(DuplicateEnrollmentError):
        ledger.enroll("S1", "CS101")
    with pytest.raises(DuplicateEnrollmentError):
        ledger.enroll("S1", "cs101")

    records = [e for e in ledger.enrollments_for("S1") if e.course_code == "CS101"]
    assert len(records) == 1
    assert alice.enrolled_course_codes == ["CS101"]


def test_enrollments_for_in_insertion_order(ledger, sample_courses, students, alice):
    students.add_student("S2", "REG-002", "Bob Smith", "bob@university.edu")
    ledger.enroll("S1", "PHY101")
    ledger.enroll("S2", "CS101")
    ledger.enroll("S1", "CS101")

    assert [e.course_code for e in ledger.enrollments_for("S1")] == ["PHY101", "CS101"]
    assert [e.course_code for e in ledger.enrollments_for("S2")] == ["CS101"]
    assert ledger.enrollments_for("S3") == []


def test_student_course_list_matches_ledger(ledger, sample_courses, alice):
    for code in ("CS101", "PHY101", "MATH201"):
        ledger.enroll("S1", code)
    assert alice.enrolled_course_codes == [e.course_code for e in ledger.enrollments_for("S1")]


@pytest.mark.parametrize(
    "marks, grade",
    [(95, Grade.A), (85, Grade.B), (75, Grade.C), (65, Grade.D), (50, Grade.F)],
)
def test_record_marks_assigns_grade(ledger, sample_courses, alice, marks, grade):
    ledger.enroll("S1", "CS101")
    enrollment = ledger.record_marks("S1", "CS101", marks)
    assert enrollment.marks == marks
    assert enrollment.grade is grade
    assert enrollment.marks_recorded


@pytest.mark.parametrize("marks", [-1, 101, 100.5, float("nan")])
def test_out_of_range_marks_leave_grade_unchanged(ledger, sample_courses, alice, marks):
    ledger.enroll("S1", "CS101")
    ledger.record_marks("S1", "CS101", 85)
    with pytest.raises(OutOfRangeError) as exc_info:
        ledger.record_marks("S1", "CS101", marks)
    assert exc_info.value.error_code == "MARKS_OUT_OF_RANGE"
    enrollment = ledger.find("S1", "CS101")
    assert enrollment.marks == 85
    assert enrollment.grade is Grade.B


def test_record_marks_requires_enrollment(ledger, sample_courses, alice):
    with pytest.raises(EnrollmentNotFoundError):
        ledger.record_marks("S1", "CS101", 90)


def test_missing_enrollment_checked_before_range(ledger, sample_courses, alice):
    with pytest.raises(EnrollmentNotFoundError):
        ledger.record_marks("S1", "CS101", 150)


def test_find_is_case_insensitive_on_code(ledger, sample_courses, alice):
    enrollment = ledger.enroll("S1", "PHY101")
    assert ledger.find("S1", "phy101") is enrollment
    with pytest.raises(EnrollmentNotFoundError):
        ledger.find("S1", "CS101")


def test_inactive_records_can_still_be_enrolled(ledger, sample_courses, students, alice):
    students.deactivate("S1")
    sample_courses.deactivate("CS101")
    assert ledger.enroll("S1", "CS101").course_code == "CS101"


def test_credit_limit_policy_per_semester(ledger, sample_courses, alice):
    ledger.add_policy(CreditLimitPolicy(6, sample_courses))
    ledger.enroll("S1", "CS101")        # 3 credits, FALL
    ledger.enroll("S1", "PHY101")       # 3 credits, SPRING

    with pytest.raises(CreditLimitExceededError) as exc_info:
        ledger.enroll("S1", "MATH201")  # 4 more FALL credits
    assert exc_info.value.details["current_credits"] == 3
    assert [e.course_code for e in ledger.enrollments_for("S1")] == ["CS101", "PHY101"]
    assert alice.enrolled_course_codes == ["CS101", "PHY101"]


def test_remove_policy(ledger, sample_courses, alice):
    ledger.add_policy(CreditLimitPolicy(1, sample_courses))
    assert [p.get_policy_name() for p in ledger.policies] == ["CreditLimitPolicy"]
    ledger.remove_policy("CreditLimitPolicy")
    assert ledger.policies == []
    ledger.enroll("S1", "CS101")


def test_enrollment_to_dict(ledger, sample_courses, alice):
    ledger.enroll("S1", "CS101")
    data = ledger.record_marks("S1", "CS101", 81).to_dict()
    assert data["course_code"] == "CS101"
    assert data["grade"] == "B"
    assert data["points"] == 3.0
    assert data["marks_recorded"] is True


def test_padded_course_code_recorded_stripped(ledger, courses, alice):
    courses.add_course(" CS101 ", "Intro", 3, "Dr. Smith", "FALL", "Computer Science")
    enrollment = ledger.enroll("S1", "cs101")
    assert enrollment.course_code == "CS101"
    assert alice.enrolled_course_codes == ["CS101"]


def test_enrollment_has_no_soft_delete_state(ledger, sample_courses, alice):
    enrollment = ledger.enroll("S1", "CS101")
    before = enrollment.updated_at
    for attr in ("activate", "deactivate", "status", "is_active"):
        assert not hasattr(enrollment, attr)
    ledger.record_marks("S1", "CS101", 95)
    assert enrollment.updated_at >= before
