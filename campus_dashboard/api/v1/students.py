"""Student management endpoints - roster, graduates, deadlines, classes and registration"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, Response

from campus_dashboard.api.dependencies import fetch_snapshot, get_app_state, get_request_id, get_settings
from campus_dashboard.api.v1.schemas import (
    AcknowledgementResponse,
    ClassBreakdownSchema,
    ConfirmRequest,
    GraduateListResponse,
    GraduateSchema,
    StudentListResponse,
    StudentPaymentSchema,
    StudentRegistrationRequest,
    StudentSchema,
    StudentSummarySchema,
    TimelinePointSchema,
    TuitionDeadlineSchema,
)
from campus_dashboard.config import Settings
from campus_dashboard.domain import students as derive
from campus_dashboard.domain.csv_export import STUDENT_COLUMNS, export_csv
from campus_dashboard.domain.derivation import ALL, RecordIndex
from campus_dashboard.domain.exceptions import ConfirmationRequiredError
from campus_dashboard.domain.modals import StudentArchive, run_confirmation
from campus_dashboard.domain.models import StudentStatus
from campus_dashboard.infrastructure.observability.logging import log_action
from campus_dashboard.infrastructure.observability.metrics import csv_export_counter, record_action
from campus_dashboard.infrastructure.stores import STUDENTS, AppState

router = APIRouter()


@router.get("/students", response_model=StudentListResponse)
async def list_students(
    request: Request,
    search: str = Query("", description="Free-text search"),
    status: str = Query(ALL, description="active | inactive | graduated | all"),
    registered_from: Optional[date] = Query(None),
    registered_to: Optional[date] = Query(None),
    state: AppState = Depends(get_app_state),
):
    """
    Student overview: filtered roster plus summary cards.

    Archived students are left out of the list. The summary covers the whole
    roster; books borrowed covers the filtered rows.
    """
    snapshot = await fetch_snapshot(request, STUDENTS)
    students = snapshot["students"]
    filtered = derive.filter_students(
        students, search, status, registered_from, registered_to, archived_ids=state.archived_students
    )
    grouped = derive.payments_by_student(snapshot["payments"])

    return StudentListResponse(
        students=[StudentSchema.model_validate(s) for s in filtered],
        summary=StudentSummarySchema.model_validate(derive.summarize_students(students)),
        total_books_borrowed=derive.total_books_borrowed(filtered),
        payments_by_student={
            student_id: [StudentPaymentSchema.model_validate(p) for p in payments]
            for student_id, payments in grouped.items()
        },
    )


@router.get("/students/export")
async def export_students(
    request: Request,
    search: str = Query(""),
    status: str = Query(ALL),
    registered_from: Optional[date] = Query(None),
    registered_to: Optional[date] = Query(None),
    settings: Settings = Depends(get_settings),
    state: AppState = Depends(get_app_state),
):
    """CSV of the currently filtered roster"""
    snapshot = await fetch_snapshot(request, STUDENTS)
    filtered = derive.filter_students(
        snapshot["students"],
        search,
        status,
        registered_from,
        registered_to,
        archived_ids=state.archived_students,
    )
    csv_export_counter.labels(dataset="students").inc()
    return Response(
        content=export_csv(filtered, STUDENT_COLUMNS, settings.csv_line_terminator),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="students.csv"'},
    )


@router.get("/students/timeline", response_model=List[TimelinePointSchema])
async def student_timeline(request: Request):
    snapshot = await fetch_snapshot(request, STUDENTS)
    return [TimelinePointSchema.model_validate(p) for p in snapshot["timeline"]]


@router.get("/students/graduated", response_model=GraduateListResponse)
async def list_graduates(
    request: Request,
    search: str = Query(""),
    result: str = Query(ALL, description="pass | fail | all"),
    registered_from: Optional[date] = Query(None),
    registered_to: Optional[date] = Query(None),
    state: AppState = Depends(get_app_state),
):
    snapshot = await fetch_snapshot(request, STUDENTS)
    rows = derive.graduated_roster(
        snapshot["students"],
        state.graduation_outcomes,
        search,
        result,
        registered_from,
        registered_to,
    )
    return GraduateListResponse(graduates=[GraduateSchema.model_validate(r) for r in rows], total=len(rows))


@router.get("/students/{student_id}/certificate", response_class=PlainTextResponse)
async def graduation_certificate(
    student_id: str,
    request: Request,
    state: AppState = Depends(get_app_state),
):
    """Plain-text graduation certificate download; only graduated students have one"""
    snapshot = await fetch_snapshot(request, STUDENTS)
    student = RecordIndex(snapshot["students"]).get(student_id)
    if student is None or student.status != StudentStatus.GRADUATED:
        raise HTTPException(status_code=404, detail="No graduation certificate for this student")

    return PlainTextResponse(
        content=derive.render_certificate(student, state.graduation_outcomes, date.today()),
        headers={"Content-Disposition": f'attachment; filename="{derive.certificate_filename(student)}"'},
    )


@router.get("/students/deadlines", response_model=List[TuitionDeadlineSchema])
async def list_deadlines(request: Request):
    snapshot = await fetch_snapshot(request, STUDENTS)
    deadlines = derive.tuition_deadlines(snapshot["students"], date.today())
    return [TuitionDeadlineSchema.model_validate(d) for d in deadlines]


@router.get("/students/classes", response_model=List[ClassBreakdownSchema])
async def list_classes(request: Request):
    snapshot = await fetch_snapshot(request, STUDENTS)
    return [ClassBreakdownSchema.model_validate(c) for c in derive.class_breakdown(snapshot["students"])]


@router.post("/students/registrations", response_model=AcknowledgementResponse, status_code=202)
async def register_student(
    body: StudentRegistrationRequest,
    request_id: str = Depends(get_request_id),
):
    """Validate a registration form; the submission itself is not persisted"""
    record_action("student_registration", acknowledged=True)
    log_action(request_id, "student_registration", body.email, {"class_level": body.class_level})
    return AcknowledgementResponse(
        action="student_registration",
        subject_id=body.email,
        message=f"Registration for {body.full_name} received",
    )


@router.post("/students/{student_id}/archive", response_model=AcknowledgementResponse, status_code=202)
async def archive_student(
    student_id: str,
    body: ConfirmRequest,
    request: Request,
    state: AppState = Depends(get_app_state),
    request_id: str = Depends(get_request_id),
):
    snapshot = await fetch_snapshot(request, STUDENTS)
    student = RecordIndex(snapshot["students"]).get(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")

    try:
        run_confirmation(StudentArchive(student=student), body.confirm)
    except ConfirmationRequiredError as e:
        record_action("student_archive", acknowledged=False)
        logging.warning(f"Archive not confirmed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    state.archived_students.add(student.id)
    record_action("student_archive", acknowledged=True)
    log_action(request_id, "student_archive", student.id)
    return AcknowledgementResponse(
        action="student_archive",
        subject_id=student.id,
        message=f"{student.full_name} archived",
    )
