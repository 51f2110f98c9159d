"""Unit tests for investment fund derivations"""

from datetime import date

from campus_dashboard.domain.investment import (
    member_rows,
    member_stats,
    payment_rows,
    summarize_payments,
    timeline_totals,
)
from campus_dashboard.domain.models import InvestmentPayment, PaymentType
from campus_dashboard.infrastructure import seed


def test_summarize_payments(payments):
    """Income 3200 + 1800 + 950, outcome 2100"""
    summary = summarize_payments(payments)

    assert summary.income == 5950
    assert summary.outcome == 2100
    assert summary.profit == 3850


def test_summarize_payments_empty():
    summary = summarize_payments([])
    assert (summary.income, summary.outcome, summary.profit) == (0, 0, 0)


def test_summarize_payments_is_idempotent(payments):
    assert summarize_payments(payments) == summarize_payments(payments)


def test_payment_rows_filter_by_type(payments, members):
    rows = payment_rows(payments, members, payment_type="income")

    assert [r.id for r in rows] == ["pay-001", "pay-002", "pay-003"]
    assert summarize_payments(rows).outcome == 0


def test_payment_rows_search_member_name_and_type(payments, members):
    assert [r.id for r in payment_rows(payments, members, search="lisa")] == ["pay-001"]
    assert [r.id for r in payment_rows(payments, members, search="outcome")] == ["pay-004"]


def test_payment_rows_date_window(payments, members):
    rows = payment_rows(
        payments,
        members,
        recorded_from=date(2025, 9, 3),
        recorded_to=date(2025, 9, 5),
    )
    assert [r.id for r in rows] == ["pay-002", "pay-003"]


def test_payment_rows_unknown_member(members):
    orphan = InvestmentPayment("pay-x", "mem-999", 10, PaymentType.INCOME, date(2025, 9, 1))
    assert payment_rows([orphan], members)[0].member_name == "Unknown member"


def test_member_rows_and_stats(members):
    assert [m.id for m in member_rows(members, active=False)] == ["mem-004"]
    assert [m.id for m in member_rows(members, search="noor")] == ["mem-003"]

    stats = member_stats(members)
    assert stats.total == 4
    assert stats.active == 3
    assert stats.total_contribution == 44500
    assert stats.average_contribution == 11125.0


def test_timeline_totals():
    totals = timeline_totals(seed.investment_timeline())

    assert totals.income == 74600
    assert totals.outcome == 27800
    assert totals.profit == 46800
