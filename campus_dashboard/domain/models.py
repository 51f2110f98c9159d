"""Domain models - pure Python dataclasses representing dashboard records"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"


class StudentSession(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class StudentPaymentStatus(str, Enum):
    CLEARED = "cleared"
    PENDING = "pending"
    FAILED = "failed"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    REMOTE = "remote"


class PaymentType(str, Enum):
    INCOME = "income"
    OUTCOME = "outcome"


class ActivitySource(str, Enum):
    STUDENTS = "students"
    STOCK = "stock"
    EMPLOYEES = "employees"
    INVESTMENT = "investment"


class GraduationResult(str, Enum):
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class Student:
    """Enrolled, inactive or graduated student"""

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


@dataclass(frozen=True)
class StudentPayment:
    """Tuition payment recorded against a student"""

    id: str
    student_id: str
    amount: float
    status: StudentPaymentStatus
    recorded_at: date


@dataclass(frozen=True)
class GraduationOutcome:
    """Final result and GPA for a graduated student"""

    result: GraduationResult
    gpa: float


@dataclass(frozen=True)
class Employee:
    id: str
    full_name: str
    role: str
    department: str
    salary: float
    status: EmployeeStatus
    hired_at: date


@dataclass(frozen=True)
class AttendanceRecord:
    id: str
    employee_id: str
    date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class EmployeeSchedule:
    id: str
    employee_id: str
    day: str
    shift: str


@dataclass(frozen=True)
class StockCategory:
    id: str
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class StockProduct:
    """Inventory item; category_id is a foreign key by convention only"""

    id: str
    name: str
    category_id: str
    quantity: int
    reorder_point: int
    unit_price: float
    updated_at: date


@dataclass(frozen=True)
class InvestmentMember:
    id: str
    full_name: str
    joined_at: date
    total_contribution: float
    active: bool


@dataclass(frozen=True)
class InvestmentPayment:
    id: str
    member_id: str
    amount: float
    type: PaymentType
    recorded_at: date


@dataclass(frozen=True)
class ActivityItem:
    """Entry in the recent activity feed"""

    id: str
    source: ActivitySource
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class TimelinePoint:
    """Monthly chart point; values holds the series for the owning domain"""

    month: str
    values: dict


@dataclass
class StudentSummary:
    total: int
    active: int
    graduated: int
    overdue: int


@dataclass
class StockSnapshot:
    total_books: int
    low_stock: int
    categories: int


@dataclass
class InvestmentSummary:
    income: float
    outcome: float
    profit: float


@dataclass
class AttendanceSummary:
    """Mutually exclusive status buckets; counts sum to total"""

    total: int
    present: int
    absent: int
    late: int
    remote: int
    present_pct: float
    absent_pct: float
    late_pct: float
    remote_pct: float


@dataclass
class MetricCard:
    id: str
    label: str
    value: float
    icon: str
    format: str = "number"
    delta: Optional[float] = None
