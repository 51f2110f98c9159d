"""Investment fund derivations - income/outcome totals, payment and member tables"""

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
)
from campus_dashboard.domain.models import (
    InvestmentMember,
    InvestmentPayment,
    InvestmentSummary,
    PaymentType,
    TimelinePoint,
)

UNKNOWN_MEMBER = "Unknown member"

PAYMENT_POLICY = FilterPolicy(
    search_fields=("id", "member_name", "type"),
    categorical_fields=("type",),
    date_field="recorded_at",
)
MEMBER_POLICY = FilterPolicy(search_fields=("id", "full_name"))


@dataclass(frozen=True)
class PaymentRow:
    id: str
    member_id: str
    member_name: str
    amount: float
    type: PaymentType
    recorded_at: date


@dataclass(frozen=True)
class MemberStats:
    total: int
    active: int
    total_contribution: float
    average_contribution: float


def summarize_payments(payments: Sequence[InvestmentPayment]) -> InvestmentSummary:
    """Income and outcome totals from one pass; profit = income - outcome"""
    income = 0
    outcome = 0
    for payment in payments:
        if payment.type == PaymentType.INCOME:
            income += payment.amount
        else:
            outcome += payment.amount
    return InvestmentSummary(income=income, outcome=outcome, profit=income - outcome)


def payment_rows(
    payments: Sequence[InvestmentPayment],
    members: Sequence[InvestmentMember],
    search: str = "",
    payment_type: str = ALL,
    recorded_from: Optional[date] = None,
    recorded_to: Optional[date] = None,
) -> List[PaymentRow]:
    index = RecordIndex(members)
    rows = [
        PaymentRow(
            id=p.id,
            member_id=p.member_id,
            member_name=index.resolve(p.member_id, "full_name", UNKNOWN_MEMBER),
            amount=p.amount,
            type=p.type,
            recorded_at=p.recorded_at,
        )
        for p in payments
    ]
    criteria = QueryCriteria(
        search=search,
        categories={"type": payment_type},
        date_from=recorded_from,
        date_to=recorded_to,
    )
    return apply_filters(rows, PAYMENT_POLICY, criteria)


def member_rows(
    members: Sequence[InvestmentMember],
    search: str = "",
    active: Optional[bool] = None,
) -> List[InvestmentMember]:
    filtered = apply_filters(members, MEMBER_POLICY, QueryCriteria(search=search))
    if active is None:
        return filtered
    return [m for m in filtered if m.active is active]


def member_stats(members: Sequence[InvestmentMember]) -> MemberStats:
    return MemberStats(
        total=len(members),
        active=sum(1 for m in members if m.active),
        total_contribution=sum(m.total_contribution for m in members),
        average_contribution=round(average(m.total_contribution for m in members), 2),
    )


def timeline_totals(timeline: Sequence[TimelinePoint]) -> InvestmentSummary:
    income = sum(point.values.get("income", 0) for point in timeline)
    outcome = sum(point.values.get("outcome", 0) for point in timeline)
    return InvestmentSummary(income=income, outcome=outcome, profit=income - outcome)
