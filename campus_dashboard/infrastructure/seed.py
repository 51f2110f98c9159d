"""Seed data and ingestion into validated domain records"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

from campus_dashboard.domain.exceptions import DataIngestionError
from campus_dashboard.domain.models import (
    ActivityItem,
    ActivitySource,
    AttendanceRecord,
    AttendanceStatus,
    Employee,
    EmployeeSchedule,
    EmployeeStatus,
    GraduationOutcome,
    GraduationResult,
    InvestmentMember,
    InvestmentPayment,
    PaymentType,
    StockCategory,
    StockProduct,
    Student,
    StudentPayment,
    StudentPaymentStatus,
    StudentSession,
    StudentStatus,
    TimelinePoint,
)

E = TypeVar("E", bound=Enum)
R = TypeVar("R")

STUDENTS = [
    {
        "id": "stu-001", "full_name": "Amelia Carter", "email": "amelia.carter@example.com",
        "phone": "+1 555 0101", "sex": "female", "session": "morning", "location": "Springfield",
        "class_level": "Grade 10", "status": "active", "tuition_balance": 450, "books_borrowed": 3,
        "registered_at": "2024-01-15", "social_handle": "@amelia.c",
    },
    {
        "id": "stu-002", "full_name": "Noah Bennett", "email": "noah.bennett@example.com",
        "phone": "+1 555 0102", "sex": "male", "session": "afternoon", "location": "Riverside",
        "class_level": "Grade 11", "status": "active", "tuition_balance": 0, "books_borrowed": 2,
        "registered_at": "2023-09-04",
    },
    {
        "id": "stu-003", "full_name": "Sofia Martinez", "email": "sofia.martinez@example.com",
        "phone": "+1 555 0103", "sex": "female", "session": "morning", "location": "Lakeside",
        "class_level": "Grade 12", "status": "graduated", "tuition_balance": 0, "books_borrowed": 0,
        "registered_at": "2021-09-01", "social_handle": "@sofia.codes",
    },
    {
        "id": "stu-004", "full_name": "Liam Okafor", "email": "liam.okafor@example.com",
        "phone": "+1 555 0104", "sex": "male", "session": "evening", "location": "Springfield",
        "class_level": "Grade 9", "status": "inactive", "tuition_balance": 1200, "books_borrowed": 1,
        "registered_at": "2024-02-20",
    },
    {
        "id": "stu-005", "full_name": "Hana Sato", "email": "hana.sato@example.com",
        "phone": "+1 555 0105", "sex": "female", "session": "afternoon", "location": "Hillcrest",
        "class_level": "Grade 10", "status": "active", "tuition_balance": 0, "books_borrowed": 4,
        "registered_at": "2024-03-11",
    },
    {
        "id": "stu-006", "full_name": "Omar Haddad", "email": "omar.haddad@example.com",
        "phone": "+1 555 0106", "sex": "male", "session": "morning", "location": "Riverside",
        "class_level": "Grade 12", "status": "graduated", "tuition_balance": 300, "books_borrowed": 0,
        "registered_at": "2020-09-07",
    },
]

STUDENT_PAYMENTS = [
    {"id": "spay-001", "student_id": "stu-001", "amount": 600, "status": "cleared", "recorded_at": "2025-08-02"},
    {"id": "spay-002", "student_id": "stu-001", "amount": 450, "status": "pending", "recorded_at": "2025-09-02"},
    {"id": "spay-003", "student_id": "stu-002", "amount": 1050, "status": "cleared", "recorded_at": "2025-09-01"},
    {"id": "spay-004", "student_id": "stu-004", "amount": 400, "status": "failed", "recorded_at": "2025-07-15"},
    {"id": "spay-005", "student_id": "stu-005", "amount": 1050, "status": "cleared", "recorded_at": "2025-09-04"},
]

GRADUATION_OUTCOMES = {
    "stu-003": {"result": "pass", "gpa": 3.92},
}

STUDENT_TIMELINE = [
    ("Jan", 410), ("Feb", 418), ("Mar", 425), ("Apr", 431), ("May", 436), ("Jun", 440),
    ("Jul", 438), ("Aug", 452), ("Sep", 468), ("Oct", 472), ("Nov", 475), ("Dec", 479),
]

STOCK_CATEGORIES = [
    {"id": "cat-001", "name": "Mathematics", "description": "Mathematics curriculum books"},
    {"id": "cat-002", "name": "Science", "description": "Laboratory resources and textbooks"},
    {"id": "cat-003", "name": "Literature", "description": "Novels and reading materials"},
    {"id": "cat-004", "name": "Stationery", "description": "Pens, pencils, and writing materials"},
]

STOCK_PRODUCTS = [
    {"id": "prod-001", "name": "Algebra Essentials", "category_id": "cat-001", "quantity": 220,
     "reorder_point": 80, "unit_price": 22, "updated_at": "2024-09-01"},
    {"id": "prod-002", "name": "Chemistry Lab Kit", "category_id": "cat-002", "quantity": 54,
     "reorder_point": 30, "unit_price": 120, "updated_at": "2024-09-03"},
    {"id": "prod-003", "name": "World Literature Anthology", "category_id": "cat-003", "quantity": 140,
     "reorder_point": 60, "unit_price": 35, "updated_at": "2024-08-28"},
    {"id": "prod-004", "name": "Graphing Notebook", "category_id": "cat-004", "quantity": 480,
     "reorder_point": 200, "unit_price": 4, "updated_at": "2024-09-10"},
    {"id": "prod-005", "name": "Safety Goggles", "category_id": "cat-002", "quantity": 35,
     "reorder_point": 50, "unit_price": 18, "updated_at": "2024-08-14"},
]

STOCK_TIMELINE = [
    ("Jan", 1080), ("Feb", 1125), ("Mar", 1170), ("Apr", 1195), ("May", 1210), ("Jun", 1255),
    ("Jul", 1280), ("Aug", 1325), ("Sep", 1350), ("Oct", 1390), ("Nov", 1425), ("Dec", 1455),
]

EMPLOYEES = [
    {"id": "emp-001", "full_name": "Maya Thompson", "role": "Principal", "department": "Administration",
     "salary": 7800, "status": "active", "hired_at": "2016-08-01"},
    {"id": "emp-002", "full_name": "Carlos Mendes", "role": "Mathematics Teacher", "department": "Academics",
     "salary": 4200, "status": "active", "hired_at": "2019-01-12"},
    {"id": "emp-003", "full_name": "Jasmine Lee", "role": "Science Teacher", "department": "Academics",
     "salary": 4400, "status": "on_leave", "hired_at": "2018-05-19"},
    {"id": "emp-004", "full_name": "Ethan Walker", "role": "IT Support", "department": "Operations",
     "salary": 3600, "status": "active", "hired_at": "2021-03-05"},
    {"id": "emp-005", "full_name": "Priya Singh", "role": "Finance Manager", "department": "Finance",
     "salary": 5100, "status": "active", "hired_at": "2017-10-11"},
]

ATTENDANCE = [
    {"id": "att-001", "employee_id": "emp-002", "date": "2025-09-20", "status": "present"},
    {"id": "att-002", "employee_id": "emp-003", "date": "2025-09-20", "status": "absent"},
    {"id": "att-003", "employee_id": "emp-004", "date": "2025-09-20", "status": "remote"},
    {"id": "att-004", "employee_id": "emp-005", "date": "2025-09-20", "status": "present"},
]

SCHEDULES = [
    {"id": "sch-001", "employee_id": "emp-002", "day": "Monday", "shift": "08:00 - 15:00"},
    {"id": "sch-002", "employee_id": "emp-002", "day": "Wednesday", "shift": "08:00 - 15:00"},
    {"id": "sch-003", "employee_id": "emp-003", "day": "Tuesday", "shift": "09:00 - 16:00"},
    {"id": "sch-004", "employee_id": "emp-004", "day": "Thursday", "shift": "10:00 - 17:00"},
    {"id": "sch-005", "employee_id": "emp-005", "day": "Monday", "shift": "09:00 - 17:00"},
]

INVESTMENT_MEMBERS = [
    {"id": "mem-001", "full_name": "Lisa Ray", "joined_at": "2022-03-01", "total_contribution": 12500, "active": True},
    {"id": "mem-002", "full_name": "Daniel Green", "joined_at": "2021-07-15", "total_contribution": 9800, "active": True},
    {"id": "mem-003", "full_name": "Fatima Noor", "joined_at": "2023-05-10", "total_contribution": 6800, "active": True},
    {"id": "mem-004", "full_name": "Robert Miles", "joined_at": "2020-11-22", "total_contribution": 15400, "active": False},
]

INVESTMENT_PAYMENTS = [
    {"id": "pay-001", "member_id": "mem-001", "amount": 3200, "type": "income", "recorded_at": "2025-09-01"},
    {"id": "pay-002", "member_id": "mem-002", "amount": 1800, "type": "income", "recorded_at": "2025-09-03"},
    {"id": "pay-003", "member_id": "mem-003", "amount": 950, "type": "income", "recorded_at": "2025-09-05"},
    {"id": "pay-004", "member_id": "mem-004", "amount": 2100, "type": "outcome", "recorded_at": "2025-09-08"},
]

INVESTMENT_TIMELINE = [
    ("Jan", 5200, 2100), ("Feb", 4600, 1800), ("Mar", 5800, 2200), ("Apr", 6100, 1900),
    ("May", 6400, 2400), ("Jun", 5900, 2100), ("Jul", 6300, 2500), ("Aug", 6700, 2700),
    ("Sep", 7100, 2600), ("Oct", 6800, 2400), ("Nov", 6500, 2300), ("Dec", 7200, 2800),
]

# (id, source, message, minutes before load time)
ACTIVITIES = [
    ("activity-001", "students", "New student 'Hana Sato' registered for Grade 10", 45),
    ("activity-002", "students", "Tuition payment received from 'Noah Bennett'", 60 * 5),
    ("activity-101", "stock", "Product 'Safety Goggles' low in stock", 30),
    ("activity-102", "stock", "Inventory audit completed for 'Science' category", 60 * 12),
    ("activity-201", "employees", "'Jasmine Lee' requested leave approval", 60 * 7),
    ("activity-202", "employees", "Payroll processed for Finance department", 60 * 20),
    ("activity-301", "investment", "Investment return of $2,500 recorded for September", 60 * 2),
    ("activity-302", "investment", "New investment member 'Fatima Noor' added", 60 * 24),
]


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    """Map a raw seed value onto a closed enumeration"""
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise DataIngestionError(f"Invalid {field_name} '{value}' (expected one of: {allowed})") from e


def parse_date(value: Any, field_name: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise DataIngestionError(f"Invalid {field_name} '{value}'") from e


def _ingest(rows: Sequence[Mapping[str, Any]], build: Callable[[Mapping[str, Any]], R], kind: str) -> List[R]:
    records = []
    for row in rows:
        try:
            records.append(build(row))
        except KeyError as e:
            raise DataIngestionError(f"{kind} {row.get('id', '?')} is missing field {e}") from e
    return records


def load_students(rows: Sequence[Mapping[str, Any]] = STUDENTS) -> List[Student]:
    def build(row):
        balance = row["tuition_balance"]
        if balance < 0:
            raise DataIngestionError(f"Student {row['id']} has negative tuition balance")
        return Student(
            id=row["id"],
            full_name=row["full_name"],
            email=row["email"],
            phone=row["phone"],
            sex=row["sex"],
            session=parse_enum(StudentSession, row["session"], "session"),
            location=row["location"],
            class_level=row["class_level"],
            status=parse_enum(StudentStatus, row["status"], "student status"),
            tuition_balance=balance,
            books_borrowed=row["books_borrowed"],
            registered_at=parse_date(row["registered_at"], "registered_at"),
            social_handle=row.get("social_handle"),
        )

    return _ingest(rows, build, "Student")


def load_student_payments(rows: Sequence[Mapping[str, Any]] = STUDENT_PAYMENTS) -> List[StudentPayment]:
    return _ingest(
        rows,
        lambda row: StudentPayment(
            id=row["id"],
            student_id=row["student_id"],
            amount=row["amount"],
            status=parse_enum(StudentPaymentStatus, row["status"], "payment status"),
            recorded_at=parse_date(row["recorded_at"], "recorded_at"),
        ),
        "Student payment",
    )


def load_graduation_outcomes(
    raw: Mapping[str, Mapping[str, Any]] = GRADUATION_OUTCOMES,
) -> Dict[str, GraduationOutcome]:
    """Outcomes keyed by student id"""
    rows = [{"id": student_id, **outcome} for student_id, outcome in raw.items()]
    pairs = _ingest(
        rows,
        lambda row: (
            row["id"],
            GraduationOutcome(
                result=parse_enum(GraduationResult, row["result"], "graduation result"),
                gpa=row["gpa"],
            ),
        ),
        "Graduation outcome",
    )
    return dict(pairs)


def load_stock_categories(rows: Sequence[Mapping[str, Any]] = STOCK_CATEGORIES) -> List[StockCategory]:
    return _ingest(
        rows,
        lambda row: StockCategory(id=row["id"], name=row["name"], description=row.get("description")),
        "Stock category",
    )


def load_stock_products(rows: Sequence[Mapping[str, Any]] = STOCK_PRODUCTS) -> List[StockProduct]:
    return _ingest(
        rows,
        lambda row: StockProduct(
            id=row["id"],
            name=row["name"],
            category_id=row["category_id"],
            quantity=row["quantity"],
            reorder_point=row["reorder_point"],
            unit_price=row["unit_price"],
            updated_at=parse_date(row["updated_at"], "updated_at"),
        ),
        "Stock product",
    )


def load_employees(rows: Sequence[Mapping[str, Any]] = EMPLOYEES) -> List[Employee]:
    return _ingest(
        rows,
        lambda row: Employee(
            id=row["id"],
            full_name=row["full_name"],
            role=row["role"],
            department=row["department"],
            salary=row["salary"],
            status=parse_enum(EmployeeStatus, row["status"], "employee status"),
            hired_at=parse_date(row["hired_at"], "hired_at"),
        ),
        "Employee",
    )


def load_attendance(rows: Sequence[Mapping[str, Any]] = ATTENDANCE) -> List[AttendanceRecord]:
    return _ingest(
        rows,
        lambda row: AttendanceRecord(
            id=row["id"],
            employee_id=row["employee_id"],
            date=parse_date(row["date"], "date"),
            status=parse_enum(AttendanceStatus, row["status"], "attendance status"),
        ),
        "Attendance record",
    )


def load_schedules(rows: Sequence[Mapping[str, Any]] = SCHEDULES) -> List[EmployeeSchedule]:
    return _ingest(
        rows,
        lambda row: EmployeeSchedule(id=row["id"], employee_id=row["employee_id"], day=row["day"], shift=row["shift"]),
        "Schedule",
    )


def load_investment_members(rows: Sequence[Mapping[str, Any]] = INVESTMENT_MEMBERS) -> List[InvestmentMember]:
    return _ingest(
        rows,
        lambda row: InvestmentMember(
            id=row["id"],
            full_name=row["full_name"],
            joined_at=parse_date(row["joined_at"], "joined_at"),
            total_contribution=row["total_contribution"],
            active=bool(row["active"]),
        ),
        "Investment member",
    )


def load_investment_payments(rows: Sequence[Mapping[str, Any]] = INVESTMENT_PAYMENTS) -> List[InvestmentPayment]:
    return _ingest(
        rows,
        lambda row: InvestmentPayment(
            id=row["id"],
            member_id=row["member_id"],
            amount=row["amount"],
            type=parse_enum(PaymentType, row["type"], "payment type"),
            recorded_at=parse_date(row["recorded_at"], "recorded_at"),
        ),
        "Investment payment",
    )


def load_activities(now: Optional[datetime] = None) -> Dict[ActivitySource, List[ActivityItem]]:
    """Activity feed per source, timestamps relative to load time"""
    now = now or datetime.now(timezone.utc)
    feeds: Dict[ActivitySource, List[ActivityItem]] = {source: [] for source in ActivitySource}
    for activity_id, source, message, minutes_ago in ACTIVITIES:
        parsed_source = parse_enum(ActivitySource, source, "activity source")
        feeds[parsed_source].append(
            ActivityItem(
                id=activity_id,
                source=parsed_source,
                message=message,
                timestamp=now - timedelta(minutes=minutes_ago),
            )
        )
    return feeds


def student_timeline() -> List[TimelinePoint]:
    return [TimelinePoint(month=month, values={"total": total}) for month, total in STUDENT_TIMELINE]


def stock_timeline() -> List[TimelinePoint]:
    return [TimelinePoint(month=month, values={"total_books": total}) for month, total in STOCK_TIMELINE]


def investment_timeline() -> List[TimelinePoint]:
    return [
        TimelinePoint(month=month, values={"income": income, "outcome": outcome, "profit": income - outcome})
        for month, income, outcome in INVESTMENT_TIMELINE
    ]
