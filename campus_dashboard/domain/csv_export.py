"""CSV export of filtered table views"""

import csv
import io
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from campus_dashboard.domain.derivation import field_text


@dataclass(frozen=True)
class Column:
    """Export column: header label plus a getter over the row"""

    header: str
    value: Callable[[Any], Any]


def export_csv(rows: Iterable[Any], columns: Sequence[Column], line_terminator: str = "\n") -> str:
    """
    Render rows as CSV text.

    Every value is double-quoted; embedded quotes are doubled so names like
    'The "Best" Kit' survive a round trip through spreadsheet tools.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator=line_terminator)
    writer.writerow([column.header for column in columns])
    for row in rows:
        writer.writerow([field_text(column.value(row)) for column in columns])
    return buffer.getvalue()


STOCK_PRODUCT_COLUMNS = (
    Column("Product", lambda r: r.name),
    Column("Category", lambda r: r.category_name),
    Column("Quantity", lambda r: r.quantity),
)

STUDENT_COLUMNS = (
    Column("ID", lambda s: s.id),
    Column("Name", lambda s: s.full_name),
    Column("Email", lambda s: s.email),
    Column("Class", lambda s: s.class_level),
    Column("Status", lambda s: s.status),
    Column("Balance", lambda s: s.tuition_balance),
)

EMPLOYEE_COLUMNS = (
    Column("ID", lambda e: e.id),
    Column("Name", lambda e: e.full_name),
    Column("Department", lambda e: e.department),
    Column("Status", lambda e: e.status),
    Column("Salary", lambda e: e.salary),
)

INVESTMENT_PAYMENT_COLUMNS = (
    Column("ID", lambda p: p.id),
    Column("Member", lambda p: p.member_name),
    Column("Type", lambda p: p.type),
    Column("Amount", lambda p: p.amount),
    Column("Recorded", lambda p: p.recorded_at),
)
