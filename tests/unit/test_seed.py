"""Unit tests for seed ingestion and the application state"""

from datetime import datetime, timezone

import pytest

from campus_dashboard.domain.exceptions import DataIngestionError
from campus_dashboard.domain.models import ActivitySource, EmployeeStatus, PaymentType
from campus_dashboard.infrastructure import seed
from campus_dashboard.infrastructure.stores import STOCK, STUDENTS, build_app_state


def test_parse_enum_rejects_unknown_value():
    with pytest.raises(DataIngestionError, match="payment type 'refund'"):
        seed.parse_enum(PaymentType, "refund", "payment type")


def test_parse_enum_accepts_known_value():
    assert seed.parse_enum(EmployeeStatus, "on_leave", "status") == EmployeeStatus.ON_LEAVE


def test_load_students_rejects_negative_balance():
    row = dict(seed.STUDENTS[0], tuition_balance=-5)
    with pytest.raises(DataIngestionError, match="negative tuition balance"):
        seed.load_students([row])


def test_missing_field_is_reported():
    row = {key: value for key, value in seed.STOCK_PRODUCTS[0].items() if key != "quantity"}
    with pytest.raises(DataIngestionError, match="prod-001 is missing field"):
        seed.load_stock_products([row])


def test_invalid_date_is_reported():
    row = dict(seed.INVESTMENT_PAYMENTS[0], recorded_at="yesterday")
    with pytest.raises(DataIngestionError, match="recorded_at"):
        seed.load_investment_payments([row])


def test_load_activities_groups_by_source():
    now = datetime(2025, 9, 20, 12, 0, tzinfo=timezone.utc)
    feeds = seed.load_activities(now)

    assert set(feeds) == set(ActivitySource)
    assert [item.id for item in feeds[ActivitySource.STOCK]] == ["activity-101", "activity-102"]
    assert feeds[ActivitySource.STOCK][0].timestamp == datetime(2025, 9, 20, 11, 30, tzinfo=timezone.utc)


def test_investment_timeline_profit():
    january = seed.investment_timeline()[0]
    assert january.values == {"income": 5200, "outcome": 2100, "profit": 3100}


def test_build_app_state():
    state = build_app_state()

    assert len(state.store(STOCK).collection("products")) == 5
    assert len(state.store(STUDENTS).snapshot()["students"]) == 6
    assert state.auth.is_authenticated is False
    assert len(state.activity_feeds()) == len(ActivitySource)


def test_store_snapshot_is_read_only():
    snapshot = build_app_state().store(STOCK).snapshot()

    with pytest.raises(TypeError):
        snapshot["products"] = ()


def test_graduation_outcomes_missing_field():
    with pytest.raises(DataIngestionError, match="Graduation outcome stu-003 is missing field"):
        seed.load_graduation_outcomes({"stu-003": {"result": "pass"}})


def test_graduation_outcomes_invalid_result():
    with pytest.raises(DataIngestionError, match="graduation result 'honours'"):
        seed.load_graduation_outcomes({"stu-003": {"result": "honours", "gpa": 3.9}})
