"""Investment fund endpoints - members, payments and performance"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from campus_dashboard.api.dependencies import fetch_snapshot, get_settings
from campus_dashboard.api.v1.schemas import (
    InvestmentMemberSchema,
    InvestmentPerformanceResponse,
    InvestmentSummarySchema,
    MemberListResponse,
    MemberStatsSchema,
    PaymentListResponse,
    PaymentRowSchema,
    TimelinePointSchema,
)
from campus_dashboard.config import Settings
from campus_dashboard.domain import investment as derive
from campus_dashboard.domain.csv_export import INVESTMENT_PAYMENT_COLUMNS, export_csv
from campus_dashboard.domain.derivation import ALL
from campus_dashboard.infrastructure.observability.metrics import csv_export_counter
from campus_dashboard.infrastructure.stores import INVESTMENT

router = APIRouter()


@router.get("/investment/members", response_model=MemberListResponse)
async def list_members(
    request: Request,
    search: str = Query(""),
    active: Optional[bool] = Query(None),
):
    snapshot = await fetch_snapshot(request, INVESTMENT)
    members = derive.member_rows(snapshot["members"], search, active)
    return MemberListResponse(
        members=[InvestmentMemberSchema.model_validate(m) for m in members],
        stats=MemberStatsSchema.model_validate(derive.member_stats(members)),
    )


@router.get("/investment/payments", response_model=PaymentListResponse)
async def list_payments(
    request: Request,
    search: str = Query(""),
    payment_type: str = Query(ALL, alias="type", description="income | outcome | all"),
    recorded_from: Optional[date] = Query(None),
    recorded_to: Optional[date] = Query(None),
):
    """Payments joined with member names; the summary follows the same filters"""
    snapshot = await fetch_snapshot(request, INVESTMENT)
    rows = derive.payment_rows(
        snapshot["payments"], snapshot["members"], search, payment_type, recorded_from, recorded_to
    )
    return PaymentListResponse(
        payments=[PaymentRowSchema.model_validate(r) for r in rows],
        summary=InvestmentSummarySchema.model_validate(derive.summarize_payments(rows)),
    )


@router.get("/investment/payments/export")
async def export_payments(
    request: Request,
    search: str = Query(""),
    payment_type: str = Query(ALL, alias="type"),
    recorded_from: Optional[date] = Query(None),
    recorded_to: Optional[date] = Query(None),
    settings: Settings = Depends(get_settings),
):
    """CSV of the currently filtered payments"""
    snapshot = await fetch_snapshot(request, INVESTMENT)
    rows = derive.payment_rows(
        snapshot["payments"], snapshot["members"], search, payment_type, recorded_from, recorded_to
    )
    csv_export_counter.labels(dataset="investment_payments").inc()
    return Response(
        content=export_csv(rows, INVESTMENT_PAYMENT_COLUMNS, settings.csv_line_terminator),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="investment-payments.csv"'},
    )


@router.get("/investment/performance", response_model=InvestmentPerformanceResponse)
async def performance(request: Request):
    snapshot = await fetch_snapshot(request, INVESTMENT)
    timeline = snapshot["timeline"]
    return InvestmentPerformanceResponse(
        summary=InvestmentSummarySchema.model_validate(derive.summarize_payments(snapshot["payments"])),
        timeline=[TimelinePointSchema.model_validate(p) for p in timeline],
        timeline_totals=InvestmentSummarySchema.model_validate(derive.timeline_totals(timeline)),
    )
