"""Employee derivations - directory, departments, attendance and schedules"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from campus_dashboard.domain.derivation import (
    ALL,
    FilterPolicy,
    QueryCriteria,
    RecordIndex,
    apply_filters,
    average,
    count_where,
    group_by,
    matches_category,
    percentage,
)
from campus_dashboard.domain.models import (
    AttendanceRecord,
    AttendanceStatus,
    AttendanceSummary,
    Employee,
    EmployeeSchedule,
    EmployeeStatus,
)

UNKNOWN_EMPLOYEE = "Unknown employee"

DIRECTORY_POLICY = FilterPolicy(
    search_fields=("id", "full_name", "role", "department"),
    categorical_fields=("department", "status"),
)


@dataclass(frozen=True)
class DepartmentBreakdown:
    department: str
    headcount: int
    active: int
    payroll: float
    average_salary: float


@dataclass(frozen=True)
class AttendanceRow:
    id: str
    employee_id: str
    employee_name: str
    department: Optional[str]
    date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class ScheduleRow:
    id: str
    employee_id: str
    employee_name: str
    day: str
    shift: str


@dataclass(frozen=True)
class PayrollSummary:
    headcount: int
    active_payroll: float
    on_leave: int
    average_salary: float


def filter_employees(
    employees: Sequence[Employee],
    search: str = "",
    department: str = ALL,
    status: str = ALL,
) -> List[Employee]:
    criteria = QueryCriteria(search=search, categories={"department": department, "status": status})
    return apply_filters(employees, DIRECTORY_POLICY, criteria)


def department_breakdown(employees: Sequence[Employee]) -> List[DepartmentBreakdown]:
    return [
        DepartmentBreakdown(
            department=department,
            headcount=len(members),
            active=count_where(members, lambda e: e.status == EmployeeStatus.ACTIVE),
            payroll=sum(e.salary for e in members),
            average_salary=round(average(e.salary for e in members), 2),
        )
        for department, members in group_by(employees, lambda e: e.department).items()
    ]


def payroll_summary(employees: Sequence[Employee]) -> PayrollSummary:
    return PayrollSummary(
        headcount=len(employees),
        active_payroll=sum(e.salary for e in employees if e.status == EmployeeStatus.ACTIVE),
        on_leave=count_where(employees, lambda e: e.status == EmployeeStatus.ON_LEAVE),
        average_salary=round(average(e.salary for e in employees), 2),
    )


def attendance_rows(
    records: Sequence[AttendanceRecord],
    employees: Sequence[Employee],
    status: str = ALL,
    on_date: Optional[date] = None,
) -> List[AttendanceRow]:
    index = RecordIndex(employees)
    return [
        AttendanceRow(
            id=r.id,
            employee_id=r.employee_id,
            employee_name=index.resolve(r.employee_id, "full_name", UNKNOWN_EMPLOYEE),
            department=index.resolve(r.employee_id, "department"),
            date=r.date,
            status=r.status,
        )
        for r in records
        if matches_category(r.status, status) and (on_date is None or r.date == on_date)
    ]


def attendance_summary(records: Sequence[AttendanceRecord]) -> AttendanceSummary:
    """Count each record into exactly one status bucket"""
    counts = {status: 0 for status in AttendanceStatus}
    for record in records:
        counts[record.status] += 1
    total = len(records)
    return AttendanceSummary(
        total=total,
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        remote=counts[AttendanceStatus.REMOTE],
        present_pct=percentage(counts[AttendanceStatus.PRESENT], total),
        absent_pct=percentage(counts[AttendanceStatus.ABSENT], total),
        late_pct=percentage(counts[AttendanceStatus.LATE], total),
        remote_pct=percentage(counts[AttendanceStatus.REMOTE], total),
    )


def schedule_rows(
    schedules: Sequence[EmployeeSchedule],
    employees: Sequence[Employee],
    day: str = ALL,
) -> List[ScheduleRow]:
    index = RecordIndex(employees)
    return [
        ScheduleRow(
            id=s.id,
            employee_id=s.employee_id,
            employee_name=index.resolve(s.employee_id, "full_name", UNKNOWN_EMPLOYEE),
            day=s.day,
            shift=s.shift,
        )
        for s in schedules
        if matches_category(s.day, day)
    ]
