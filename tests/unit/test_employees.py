"""Unit tests for employee directory and attendance derivations"""

from datetime import date

from campus_dashboard.domain.employees import (
    attendance_rows,
    attendance_summary,
    department_breakdown,
    filter_employees,
    payroll_summary,
    schedule_rows,
)
from campus_dashboard.domain.models import AttendanceRecord, AttendanceStatus
from campus_dashboard.infrastructure import seed


def test_filter_employees_by_department(employees):
    assert [e.id for e in filter_employees(employees, department="Academics")] == ["emp-002", "emp-003"]


def test_filter_employees_by_status_and_search(employees):
    assert [e.id for e in filter_employees(employees, status="on_leave")] == ["emp-003"]
    assert [e.id for e in filter_employees(employees, search="teacher")] == ["emp-002", "emp-003"]
    assert filter_employees(employees, search="teacher", status="on_leave")[0].full_name == "Jasmine Lee"


def test_payroll_summary(employees):
    payroll = payroll_summary(employees)

    assert payroll.headcount == 5
    # On-leave salaries are excluded from the active payroll
    assert payroll.active_payroll == 20700
    assert payroll.on_leave == 1
    assert payroll.average_salary == 5020.0


def test_payroll_summary_empty():
    payroll = payroll_summary([])
    assert payroll.headcount == 0
    assert payroll.active_payroll == 0
    assert payroll.average_salary == 0.0


def test_department_breakdown(employees):
    breakdown = {d.department: d for d in department_breakdown(employees)}

    assert list(breakdown) == ["Administration", "Academics", "Operations", "Finance"]
    assert breakdown["Academics"].headcount == 2
    assert breakdown["Academics"].active == 1
    assert breakdown["Academics"].payroll == 8600
    assert breakdown["Academics"].average_salary == 4300.0


def test_attendance_rows_join_employee_names(employees):
    rows = attendance_rows(seed.load_attendance(), employees)

    assert [r.employee_name for r in rows] == ["Carlos Mendes", "Jasmine Lee", "Ethan Walker", "Priya Singh"]
    assert rows[2].department == "Operations"


def test_attendance_rows_filters(employees):
    records = seed.load_attendance()

    assert [r.id for r in attendance_rows(records, employees, status="present")] == ["att-001", "att-004"]
    assert attendance_rows(records, employees, on_date=date(2025, 9, 21)) == []


def test_attendance_rows_unknown_employee(employees):
    record = AttendanceRecord("att-x", "emp-999", date(2025, 9, 20), AttendanceStatus.LATE)
    rows = attendance_rows([record], employees)

    assert rows[0].employee_name == "Unknown employee"
    assert rows[0].department is None


def test_attendance_summary_buckets_sum_to_total():
    summary = attendance_summary(seed.load_attendance())

    assert summary.total == 4
    assert (summary.present, summary.absent, summary.late, summary.remote) == (2, 1, 0, 1)
    assert summary.present + summary.absent + summary.late + summary.remote == summary.total
    assert summary.present_pct == 50.0
    assert summary.remote_pct == 25.0
    assert summary.late_pct == 0.0


def test_attendance_summary_empty():
    summary = attendance_summary([])
    assert summary.total == 0
    assert summary.present_pct == 0.0


def test_schedule_rows_by_day(employees):
    rows = schedule_rows(seed.load_schedules(), employees, day="Monday")

    assert [r.id for r in rows] == ["sch-001", "sch-005"]
    assert [r.employee_name for r in rows] == ["Carlos Mendes", "Priya Singh"]
