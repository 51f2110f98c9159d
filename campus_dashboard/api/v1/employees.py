"""Employee management endpoints - directory, attendance, salary and schedules"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from campus_dashboard.api.dependencies import fetch_snapshot, get_request_id, get_settings
from campus_dashboard.api.v1.schemas import (
    AcknowledgementResponse,
    AttendanceResponse,
    AttendanceRowSchema,
    AttendanceSummarySchema,
    DepartmentBreakdownSchema,
    EmployeeListResponse,
    EmployeeSchema,
    PayrollSummarySchema,
    SalaryAdjustmentRequest,
    ScheduleRowSchema,
)
from campus_dashboard.config import Settings
from campus_dashboard.domain import employees as derive
from campus_dashboard.domain.csv_export import EMPLOYEE_COLUMNS, export_csv
from campus_dashboard.domain.derivation import ALL, RecordIndex
from campus_dashboard.domain.exceptions import ConfirmationRequiredError
from campus_dashboard.domain.modals import SalaryAdjustment, run_confirmation
from campus_dashboard.infrastructure.observability.logging import log_action
from campus_dashboard.infrastructure.observability.metrics import csv_export_counter, record_action
from campus_dashboard.infrastructure.stores import EMPLOYEES

router = APIRouter()


@router.get("/employees", response_model=EmployeeListResponse)
async def list_employees(
    request: Request,
    search: str = Query(""),
    department: str = Query(ALL),
    status: str = Query(ALL, description="active | on_leave | terminated | all"),
):
    snapshot = await fetch_snapshot(request, EMPLOYEES)
    filtered = derive.filter_employees(snapshot["employees"], search, department, status)
    return EmployeeListResponse(
        employees=[EmployeeSchema.model_validate(e) for e in filtered],
        payroll=PayrollSummarySchema.model_validate(derive.payroll_summary(filtered)),
    )


@router.get("/employees/export")
async def export_employees(
    request: Request,
    search: str = Query(""),
    department: str = Query(ALL),
    status: str = Query(ALL),
    settings: Settings = Depends(get_settings),
):
    snapshot = await fetch_snapshot(request, EMPLOYEES)
    filtered = derive.filter_employees(snapshot["employees"], search, department, status)
    csv_export_counter.labels(dataset="employees").inc()
    return Response(
        content=export_csv(filtered, EMPLOYEE_COLUMNS, settings.csv_line_terminator),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="employees.csv"'},
    )


@router.get("/employees/departments", response_model=List[DepartmentBreakdownSchema])
async def list_departments(request: Request):
    snapshot = await fetch_snapshot(request, EMPLOYEES)
    return [DepartmentBreakdownSchema.model_validate(d) for d in derive.department_breakdown(snapshot["employees"])]


@router.get("/employees/attendance", response_model=AttendanceResponse)
async def list_attendance(
    request: Request,
    status: str = Query(ALL, description="present | absent | late | remote | all"),
    on_date: Optional[date] = Query(None, alias="date"),
):
    """Attendance rows and status breakdown; the summary follows the same filters"""
    snapshot = await fetch_snapshot(request, EMPLOYEES)
    rows = derive.attendance_rows(snapshot["attendance"], snapshot["employees"], status, on_date)
    return AttendanceResponse(
        records=[AttendanceRowSchema.model_validate(r) for r in rows],
        summary=AttendanceSummarySchema.model_validate(derive.attendance_summary(rows)),
    )


@router.get("/employees/schedules", response_model=List[ScheduleRowSchema])
async def list_schedules(request: Request, day: str = Query(ALL)):
    snapshot = await fetch_snapshot(request, EMPLOYEES)
    rows = derive.schedule_rows(snapshot["schedules"], snapshot["employees"], day)
    return [ScheduleRowSchema.model_validate(r) for r in rows]


@router.post(
    "/employees/{employee_id}/salary-adjustments",
    response_model=AcknowledgementResponse,
    status_code=202,
)
async def adjust_salary(
    employee_id: str,
    body: SalaryAdjustmentRequest,
    request: Request,
    request_id: str = Depends(get_request_id),
):
    snapshot = await fetch_snapshot(request, EMPLOYEES)
    employee = RecordIndex(snapshot["employees"]).get(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="Employee not found")

    adjustment = SalaryAdjustment(employee=employee, new_salary=body.new_salary, reason=body.reason)
    try:
        run_confirmation(adjustment, body.confirm)
    except ConfirmationRequiredError as e:
        record_action("salary_adjustment", acknowledged=False)
        logging.warning(f"Salary adjustment not confirmed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    record_action("salary_adjustment", acknowledged=True)
    log_action(
        request_id,
        "salary_adjustment",
        employee.id,
        {"previous_salary": employee.salary, "new_salary": body.new_salary, "reason": body.reason},
    )
    return AcknowledgementResponse(
        action="salary_adjustment",
        subject_id=employee.id,
        message=f"Salary change for {employee.full_name} submitted",
    )
