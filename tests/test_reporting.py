"""
Reporting engine: department counts, statistics, transcripts and GPA.
"""
import pytest

from ccrm.core.exceptions import StudentNotFoundError
from ccrm.services.reporting import TranscriptRow, compute_gpa


def test_course_counts_by_department(reports, sample_courses):
    assert reports.course_counts_by_department() == {
        "Computer Science": 1,
        "Mathematics": 1,
        "Physics": 1,
    }


def test_course_counts_group_and_skip_inactive(reports, sample_courses):
    sample_courses.add_course("CS201", "Data Structures", 3, "Dr. Lee", "SPRING", "Computer Science")
    sample_courses.deactivate("PHY101")
    assert reports.course_counts_by_department() == {"Computer Science": 2, "Mathematics": 1}


def test_course_statistics_total_includes_inactive(reports, sample_courses):
    sample_courses.deactivate("PHY101")
    stats = reports.course_statistics()
    assert stats.total_courses == 3
    assert stats.by_department == {"Computer Science": 1, "Mathematics": 1}


def test_empty_catalog_counts(reports):
    assert reports.course_counts_by_department() == {}


def test_transcript_gpa_is_mean_of_points(reports, ledger, sample_courses, alice):
    ledger.enroll("S1", "CS101")
    ledger.enroll("S1", "MATH201")
    ledger.record_marks("S1", "CS101", 90)
    ledger.record_marks("S1", "MATH201", 70)

    transcript = reports.transcript_for("S1")
    assert transcript.student is alice
    assert [(r.course_code, r.grade, r.points) for r in transcript.rows] == [
        ("CS101", "A", 4.0),
        ("MATH201", "C", 2.0),
    ]
    assert transcript.gpa == pytest.approx(3.0)


def test_transcript_without_enrollments(reports, alice):
    transcript = reports.transcript_for("S1")
    assert transcript.rows == []
    assert transcript.gpa == 0.0


def test_ungraded_enrollment_counts_as_f(reports, ledger, sample_courses, alice):
    ledger.enroll("S1", "CS101")
    ledger.enroll("S1", "PHY101")
    ledger.record_marks("S1", "CS101", 100)
    assert reports.transcript_for("S1").gpa == pytest.approx(2.0)


def test_transcript_unknown_student(reports):
    with pytest.raises(StudentNotFoundError):
        reports.transcript_for("S404")


def test_end_to_end_scenario(students, courses, ledger, reports):
    students.add_student("S1", "REG-001", "Alice Johnson", "alice@university.edu")
    courses.add_course("CS101", "Introduction to Programming", 3, "Dr. Smith", "FALL", "Computer Science")
    ledger.enroll("S1", "CS101")
    enrollment = ledger.record_marks("S1", "CS101", 92)
    assert enrollment.grade.letter == "A"

    transcript = reports.transcript_for("S1")
    assert transcript.rows == [TranscriptRow(course_code="CS101", marks=92.0, grade="A", points=4.0)]
    assert f"{transcript.gpa:.2f}" == "4.00"
    assert transcript.to_dict()["gpa"] == 4.0


def test_compute_gpa_guards_empty():
    assert compute_gpa([]) == 0.0
    assert compute_gpa([4.0, 3.0, 2.0]) == pytest.approx(3.0)
