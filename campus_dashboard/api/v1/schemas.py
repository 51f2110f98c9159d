"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from campus_dashboard.domain.models import (
    ActivitySource,
    AttendanceStatus,
    EmployeeStatus,
    GraduationResult,
    PaymentType,
    StudentPaymentStatus,
    StudentSession,
    StudentStatus,
)


class RecordSchema(BaseModel):
    """Base for responses built from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class TimelinePointSchema(RecordSchema):
    month: str
    values: Dict[str, float]


class AcknowledgementResponse(BaseModel):
    """Stub action accepted; nothing is persisted"""

    action: str
    subject_id: str
    acknowledged: bool = True
    message: str


# Students


class StudentSchema(RecordSchema):
    id: str
    full_name: str
    email: str
    phone: str
    sex: str
    session: StudentSession
    location: str
    class_level: str
    status: StudentStatus
    tuition_balance: float
    books_borrowed: int
    registered_at: date
    social_handle: Optional[str] = None


class StudentSummarySchema(RecordSchema):
    total: int
    active: int
    graduated: int
    overdue: int


class StudentPaymentSchema(RecordSchema):
    id: str
    student_id: str
    amount: float
    status: StudentPaymentStatus
    recorded_at: date


class StudentListResponse(BaseModel):
    """Response for GET /v1/students"""

    students: List[StudentSchema]
    summary: StudentSummarySchema
    total_books_borrowed: int
    payments_by_student: Dict[str, List[StudentPaymentSchema]]


class GraduateSchema(RecordSchema):
    id: str
    full_name: str
    email: str
    phone: str
    social_handle: Optional[str] = None
    class_level: str
    status: StudentStatus
    registered_at: date
    result: GraduationResult
    gpa: Optional[float] = None


class GraduateListResponse(BaseModel):
    graduates: List[GraduateSchema]
    total: int


class TuitionDeadlineSchema(RecordSchema):
    id: str
    full_name: str
    email: str
    amount: float
    due_date: date
    days_left: int


class ClassBreakdownSchema(RecordSchema):
    class_level: str
    headcount: int
    active: int
    outstanding_balance: float


class StudentRegistrationRequest(BaseModel):
    """Request body for POST /v1/students/registrations"""

    full_name: str = Field(..., min_length=3, description="Name must be at least 3 characters")
    email: EmailStr
    class_level: str = Field(..., min_length=2, description="Class/grade")
    guardian_name: str = Field(..., min_length=3)
    guardian_contact: str = Field(..., min_length=8)
    start_date: date
    notes: Optional[str] = Field(None, max_length=500)


class ConfirmRequest(BaseModel):
    """Body for destructive actions that need an explicit confirmation"""

    confirm: bool = False


# Stock


class ProductRowSchema(RecordSchema):
    id: str
    name: str
    category_id: str
    category_name: str
    quantity: int
    reorder_point: int
    unit_price: float
    low_stock: bool


class ProductListResponse(BaseModel):
    """Response for GET /v1/stock/products"""

    products: List[ProductRowSchema]
    total: int
    low_stock_count: int


class CategoryRowSchema(RecordSchema):
    id: str
    name: str
    description: Optional[str] = None
    product_count: int
    total_quantity: int


class StockCategoryRequest(BaseModel):
    name: str = Field(..., min_length=2)
    description: Optional[str] = Field(None, max_length=250)


class StockSnapshotSchema(RecordSchema):
    total_books: int
    low_stock: int
    categories: int


class ValuedProductSchema(RecordSchema):
    id: str
    name: str
    category_name: str
    quantity: int
    valuation: float


class StockReportResponse(BaseModel):
    snapshot: StockSnapshotSchema
    top_valued: List[ValuedProductSchema]
    timeline: List[TimelinePointSchema]


class OrderLineRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class OrderQuoteRequest(BaseModel):
    """Request body for POST /v1/stock/pos/quote"""

    lines: List[OrderLineRequest] = Field(..., min_length=1)
    discount_percent: float = 0.0
    payment_method: Literal["cash", "card", "online"] = "cash"
    card_reference: Optional[str] = None

    @model_validator(mode="after")
    def card_needs_reference(self):
        if self.payment_method == "card" and not (self.card_reference or "").strip():
            raise ValueError("Card payments require a card reference")
        return self


class OrderLineSchema(RecordSchema):
    product_id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float
    clamped: bool


class OrderQuoteResponse(RecordSchema):
    lines: List[OrderLineSchema]
    total_items: int
    subtotal: float
    tax_amount: float
    discount_percent: float
    discount_amount: float
    grand_total: float
    payment_method: str = "cash"


# Employees


class EmployeeSchema(RecordSchema):
    id: str
    full_name: str
    role: str
    department: str
    salary: float
    status: EmployeeStatus
    hired_at: date


class PayrollSummarySchema(RecordSchema):
    headcount: int
    active_payroll: float
    on_leave: int
    average_salary: float


class EmployeeListResponse(BaseModel):
    employees: List[EmployeeSchema]
    payroll: PayrollSummarySchema


class DepartmentBreakdownSchema(RecordSchema):
    department: str
    headcount: int
    active: int
    payroll: float
    average_salary: float


class AttendanceRowSchema(RecordSchema):
    id: str
    employee_id: str
    employee_name: str
    department: Optional[str] = None
    date: date
    status: AttendanceStatus


class AttendanceSummarySchema(RecordSchema):
    total: int
    present: int
    absent: int
    late: int
    remote: int
    present_pct: float
    absent_pct: float
    late_pct: float
    remote_pct: float


class AttendanceResponse(BaseModel):
    records: List[AttendanceRowSchema]
    summary: AttendanceSummarySchema


class ScheduleRowSchema(RecordSchema):
    id: str
    employee_id: str
    employee_name: str
    day: str
    shift: str


class SalaryAdjustmentRequest(BaseModel):
    """Request body for POST /v1/employees/{employee_id}/salary-adjustments"""

    new_salary: float = Field(..., gt=0)
    reason: str = Field(..., min_length=3)
    confirm: bool = False


# Investment


class InvestmentSummarySchema(RecordSchema):
    income: float
    outcome: float
    profit: float


class PaymentRowSchema(RecordSchema):
    id: str
    member_id: str
    member_name: str
    amount: float
    type: PaymentType
    recorded_at: date


class PaymentListResponse(BaseModel):
    payments: List[PaymentRowSchema]
    summary: InvestmentSummarySchema


class InvestmentMemberSchema(RecordSchema):
    id: str
    full_name: str
    joined_at: date
    total_contribution: float
    active: bool


class MemberStatsSchema(RecordSchema):
    total: int
    active: int
    total_contribution: float
    average_contribution: float


class MemberListResponse(BaseModel):
    members: List[InvestmentMemberSchema]
    stats: MemberStatsSchema


class InvestmentPerformanceResponse(BaseModel):
    summary: InvestmentSummarySchema
    timeline: List[TimelinePointSchema]
    timeline_totals: InvestmentSummarySchema


# Dashboard


class MetricCardSchema(RecordSchema):
    id: str
    label: str
    value: float
    icon: str
    format: str
    delta: Optional[float] = None


class ActivityItemSchema(RecordSchema):
    id: str
    source: ActivitySource
    message: str
    timestamp: datetime


class QueryStateSchema(BaseModel):
    key: str
    is_loading: bool
    has_data: bool
    error: Optional[str] = None


class DashboardResponse(BaseModel):
    ready: bool
    metrics: List[MetricCardSchema]
    recent_activity: List[ActivityItemSchema]
    queries: List[QueryStateSchema]


# Auth & navigation


class LoginRequest(BaseModel):
    # Emptiness is checked by the authenticator so it can answer 401
    email: str
    password: str
    # Continuation carried by /login?next=...
    next: Optional[str] = None


class PasswordResetRequest(BaseModel):
    email: EmailStr


class AuthUserSchema(RecordSchema):
    id: str
    name: str
    email: str
    role: str


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[AuthUserSchema] = None
    redirect_to: Optional[str] = None


class NavItemSchema(RecordSchema):
    label: str
    to: str


class NavSectionSchema(RecordSchema):
    label: str
    icon: str
    to: Optional[str] = None
    items: List[NavItemSchema] = []


class RouteResolutionSchema(RecordSchema):
    path: str
    title: str
    found: bool
    redirect_to: Optional[str] = None
