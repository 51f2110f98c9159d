"""Unit tests for student roster derivations"""

from datetime import date

from campus_dashboard.domain.models import GraduationResult, StudentStatus
from campus_dashboard.domain.students import (
    certificate_filename,
    class_breakdown,
    filter_students,
    graduated_roster,
    payments_by_student,
    render_certificate,
    summarize_students,
    total_books_borrowed,
    tuition_deadlines,
)
from campus_dashboard.infrastructure import seed


def test_summarize_students(students):
    summary = summarize_students(students)

    assert summary.total == 6
    assert summary.active == 3
    assert summary.graduated == 2
    # Positive tuition balance counts as overdue regardless of status
    assert summary.overdue == 3


def test_summarize_students_empty():
    summary = summarize_students([])
    assert (summary.total, summary.active, summary.graduated, summary.overdue) == (0, 0, 0, 0)


def test_filter_students_by_status(students):
    graduated = filter_students(students, status="graduated")
    assert [s.id for s in graduated] == ["stu-003", "stu-006"]


def test_filter_students_search_location(students):
    assert [s.id for s in filter_students(students, search="SPRINGFIELD")] == ["stu-001", "stu-004"]


def test_filter_students_registration_window(students):
    rows = filter_students(
        students,
        registered_from=date(2024, 1, 1),
        registered_to=date(2024, 12, 31),
    )
    assert [s.id for s in rows] == ["stu-001", "stu-004", "stu-005"]


def test_filter_students_hides_archived(students):
    rows = filter_students(students, archived_ids=["stu-002", "stu-005"])
    assert "stu-002" not in [s.id for s in rows]
    assert len(rows) == 4


def test_total_books_borrowed(students):
    assert total_books_borrowed(students) == 10
    assert total_books_borrowed([]) == 0


def test_payments_by_student_newest_first():
    grouped = payments_by_student(seed.load_student_payments())
    assert [p.id for p in grouped["stu-001"]] == ["spay-002", "spay-001"]
    assert "stu-003" not in grouped


def test_graduated_roster_resolves_outcomes(students):
    outcomes = seed.load_graduation_outcomes()
    rows = graduated_roster(students, outcomes)

    assert [r.id for r in rows] == ["stu-003", "stu-006"]
    assert rows[0].result == GraduationResult.PASS
    assert rows[0].gpa == 3.92
    # Graduated without a recorded outcome defaults to pass with no GPA
    assert rows[1].result == GraduationResult.PASS
    assert rows[1].gpa is None


def test_graduated_roster_filters(students):
    outcomes = seed.load_graduation_outcomes()

    assert graduated_roster(students, outcomes, result="fail") == []
    assert [r.id for r in graduated_roster(students, outcomes, search="3.92")] == ["stu-003"]
    assert [r.id for r in graduated_roster(students, outcomes, search="@sofia")] == ["stu-003"]


def test_tuition_deadlines_are_staggered(students):
    reference = date(2025, 1, 1)
    deadlines = tuition_deadlines(students, reference)

    assert [d.id for d in deadlines] == ["stu-001", "stu-004", "stu-006"]
    assert [d.due_date for d in deadlines] == [date(2025, 1, 4), date(2025, 1, 5), date(2025, 1, 6)]
    assert [d.days_left for d in deadlines] == [3, 4, 5]
    assert deadlines[1].amount == 1200


def test_class_breakdown(students):
    breakdown = {c.class_level: c for c in class_breakdown(students)}

    assert list(breakdown) == ["Grade 10", "Grade 11", "Grade 12", "Grade 9"]
    assert breakdown["Grade 10"].headcount == 2
    assert breakdown["Grade 10"].active == 2
    assert breakdown["Grade 10"].outstanding_balance == 450
    assert breakdown["Grade 12"].active == 0
    assert breakdown["Grade 12"].outstanding_balance == 300


def test_render_certificate(students):
    sofia = next(s for s in students if s.id == "stu-003")
    text = render_certificate(sofia, seed.load_graduation_outcomes(), date(2025, 6, 1))

    assert text.startswith("Certificate of Graduation")
    assert "Sofia Martinez (ID: stu-003)" in text
    assert "Overall Result: Pass" in text
    assert "GPA: 3.92" in text
    assert text.endswith("Issued on: 2025-06-01.")


def test_render_certificate_without_outcome(students):
    liam = next(s for s in students if s.id == "stu-004")
    text = render_certificate(liam, {}, date(2025, 6, 1))

    assert liam.status == StudentStatus.INACTIVE
    assert "Overall Result: Fail" in text
    assert "GPA" not in text


def test_certificate_filename(students):
    assert certificate_filename(students[2]) == "Sofia_Martinez_certificate.txt"
