"""Student derivations - roster filtering, summaries, deadlines and certificates"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Sequence

from campus_dashboard.domain.derivation import (
    ALL,
    FilterPolicy,
    QueryCriteria,
    apply_filters,
    count_where,
    group_by,
)
from campus_dashboard.domain.models import (
    GraduationOutcome,
    GraduationResult,
    Student,
    StudentPayment,
    StudentStatus,
    StudentSummary,
)

ROSTER_POLICY = FilterPolicy(
    search_fields=("full_name", "email", "phone", "sex", "session", "location", "id", "class_level"),
    categorical_fields=("status",),
    date_field="registered_at",
)

GRADUATED_POLICY = FilterPolicy(
    search_fields=("id", "full_name", "email", "phone", "social_handle", "class_level", "status", "result", "gpa"),
    categorical_fields=("result",),
    date_field="registered_at",
)

# First deadline falls this many days after the reference date
DEADLINE_OFFSET_DAYS = 3


@dataclass(frozen=True)
class GraduateRow:
    id: str
    full_name: str
    email: str
    phone: str
    social_handle: Optional[str]
    class_level: str
    status: StudentStatus
    registered_at: date
    result: GraduationResult
    gpa: Optional[float]


@dataclass(frozen=True)
class TuitionDeadline:
    id: str
    full_name: str
    email: str
    amount: float
    due_date: date
    days_left: int


@dataclass(frozen=True)
class ClassBreakdown:
    class_level: str
    headcount: int
    active: int
    outstanding_balance: float


def summarize_students(students: Sequence[Student]) -> StudentSummary:
    """Single pass over the roster; overdue means a positive tuition balance"""
    summary = StudentSummary(total=0, active=0, graduated=0, overdue=0)
    for student in students:
        summary.total += 1
        if student.status == StudentStatus.ACTIVE:
            summary.active += 1
        elif student.status == StudentStatus.GRADUATED:
            summary.graduated += 1
        if student.tuition_balance > 0:
            summary.overdue += 1
    return summary


def filter_students(
    students: Sequence[Student],
    search: str = "",
    status: str = ALL,
    registered_from: Optional[date] = None,
    registered_to: Optional[date] = None,
    archived_ids: Sequence[str] = (),
) -> List[Student]:
    criteria = QueryCriteria(
        search=search,
        categories={"status": status},
        date_from=registered_from,
        date_to=registered_to,
    )
    archived = set(archived_ids)
    return [s for s in apply_filters(students, ROSTER_POLICY, criteria) if s.id not in archived]


def total_books_borrowed(students: Sequence[Student]) -> int:
    return sum(s.books_borrowed for s in students)


def payments_by_student(payments: Sequence[StudentPayment]) -> Dict[str, List[StudentPayment]]:
    """Payments grouped per student, newest first within each group"""
    grouped = group_by(payments, lambda p: p.student_id)
    return {
        student_id: sorted(items, key=lambda p: p.recorded_at, reverse=True)
        for student_id, items in grouped.items()
    }


def resolve_result(student: Student, outcomes: Mapping[str, GraduationOutcome]) -> GraduationResult:
    outcome = outcomes.get(student.id)
    if outcome is not None:
        return outcome.result
    return GraduationResult.PASS if student.status == StudentStatus.GRADUATED else GraduationResult.FAIL


def graduated_roster(
    students: Sequence[Student],
    outcomes: Mapping[str, GraduationOutcome],
    search: str = "",
    result: str = ALL,
    registered_from: Optional[date] = None,
    registered_to: Optional[date] = None,
) -> List[GraduateRow]:
    rows = [
        GraduateRow(
            id=s.id,
            full_name=s.full_name,
            email=s.email,
            phone=s.phone,
            social_handle=s.social_handle,
            class_level=s.class_level,
            status=s.status,
            registered_at=s.registered_at,
            result=resolve_result(s, outcomes),
            gpa=outcomes[s.id].gpa if s.id in outcomes else None,
        )
        for s in students
        if s.status == StudentStatus.GRADUATED
    ]
    criteria = QueryCriteria(
        search=search,
        categories={"result": result},
        date_from=registered_from,
        date_to=registered_to,
    )
    return apply_filters(rows, GRADUATED_POLICY, criteria)


def tuition_deadlines(students: Sequence[Student], reference_date: date) -> List[TuitionDeadline]:
    """Upcoming tuition deadlines, staggered one day apart per student with a balance"""
    owing = [s for s in students if s.tuition_balance > 0]
    deadlines = []
    for position, student in enumerate(owing):
        due_date = reference_date + timedelta(days=position + DEADLINE_OFFSET_DAYS)
        deadlines.append(
            TuitionDeadline(
                id=student.id,
                full_name=student.full_name,
                email=student.email,
                amount=student.tuition_balance,
                due_date=due_date,
                days_left=max(0, (due_date - reference_date).days),
            )
        )
    return deadlines


def class_breakdown(students: Sequence[Student]) -> List[ClassBreakdown]:
    return [
        ClassBreakdown(
            class_level=level,
            headcount=len(members),
            active=count_where(members, lambda s: s.status == StudentStatus.ACTIVE),
            outstanding_balance=sum(s.tuition_balance for s in members),
        )
        for level, members in group_by(students, lambda s: s.class_level).items()
    ]


def render_certificate(
    student: Student,
    outcomes: Mapping[str, GraduationOutcome],
    issued_on: date,
) -> str:
    """Plain-text graduation certificate"""
    outcome = outcomes.get(student.id)
    result = resolve_result(student, outcomes)
    lines = [
        "Certificate of Graduation",
        "",
        f"This certifies that {student.full_name} (ID: {student.id}) has successfully "
        f"completed the {student.class_level} program.",
        "",
        f"Overall Result: {'Fail' if result == GraduationResult.FAIL else 'Pass'}",
    ]
    if outcome is not None:
        lines.append(f"GPA: {outcome.gpa:.2f}")
    lines.append(f"Issued on: {issued_on.isoformat()}.")
    return "\n".join(lines)


def certificate_filename(student: Student) -> str:
    return "_".join(student.full_name.split()) + "_certificate.txt"
