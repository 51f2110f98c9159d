"""Unit tests for the generic filtering and aggregation primitives"""

from dataclasses import dataclass
from datetime import date

from campus_dashboard.domain.derivation import (
    ALL,
    FilterPolicy,
    QueryCriteria,
    RecordIndex,
    aggregate_by,
    apply_filters,
    average,
    group_by,
    in_date_range,
    matches_category,
    matches_search,
    percentage,
)
from campus_dashboard.domain.models import StudentStatus


@dataclass(frozen=True)
class Row:
    id: str
    name: str
    group: str
    status: StudentStatus
    day: date
    amount: int


ROWS = [
    Row("r-1", "Alpha Kit", "red", StudentStatus.ACTIVE, date(2025, 1, 10), 10),
    Row("r-2", "beta set", "blue", StudentStatus.INACTIVE, date(2025, 2, 10), 20),
    Row("r-3", "Gamma Kit", "red", StudentStatus.GRADUATED, date(2025, 3, 10), 30),
    Row("r-4", "Delta", "green", StudentStatus.ACTIVE, date(2025, 4, 10), 40),
]

POLICY = FilterPolicy(search_fields=("id", "name"), categorical_fields=("group", "status"), date_field="day")


def test_empty_search_returns_collection_unchanged():
    """Blank query keeps every record in original order"""
    for term in ("", "   ", None):
        assert apply_filters(ROWS, POLICY, QueryCriteria(search=term)) == ROWS


def test_search_is_case_insensitive_substring_across_fields():
    assert [r.id for r in apply_filters(ROWS, POLICY, QueryCriteria(search="KIT"))] == ["r-1", "r-3"]
    assert [r.id for r in apply_filters(ROWS, POLICY, QueryCriteria(search="r-2"))] == ["r-2"]


def test_search_ignores_fields_outside_policy():
    # "red" only appears in the group field, which is not searchable
    assert apply_filters(ROWS, POLICY, QueryCriteria(search="red")) == []


def test_categorical_filter_exact_match_and_all_sentinel():
    criteria = QueryCriteria(categories={"group": "red", "status": ALL})
    assert [r.id for r in apply_filters(ROWS, POLICY, criteria)] == ["r-1", "r-3"]

    criteria = QueryCriteria(categories={"status": "active"})
    assert [r.id for r in apply_filters(ROWS, POLICY, criteria)] == ["r-1", "r-4"]

    # Exact equality: a prefix is not a match
    assert apply_filters(ROWS, POLICY, QueryCriteria(categories={"group": "re"})) == []


def test_date_range_is_inclusive():
    criteria = QueryCriteria(date_from=date(2025, 2, 10), date_to=date(2025, 3, 10))
    assert [r.id for r in apply_filters(ROWS, POLICY, criteria)] == ["r-2", "r-3"]


def test_matches_helpers_edge_cases():
    assert matches_search({"name": None}, "x", ("name",)) is False
    assert matches_category("anything", None) is True
    assert in_date_range(None) is True
    assert in_date_range(None, start=date(2025, 1, 1)) is False


def test_filters_are_idempotent():
    criteria = QueryCriteria(search="a", categories={"status": "active"})
    assert apply_filters(ROWS, POLICY, criteria) == apply_filters(ROWS, POLICY, criteria)


def test_percentage_and_average_guard_empty_input():
    assert percentage(3, 0) == 0.0
    assert percentage(1, 3) == 33.3
    assert average([]) == 0.0
    assert average([2, 4]) == 3.0


def test_group_by_preserves_first_seen_key_order():
    groups = group_by(ROWS, lambda r: r.group)
    assert list(groups) == ["red", "blue", "green"]
    assert [r.id for r in groups["red"]] == ["r-1", "r-3"]


def test_aggregate_by_sums_per_key():
    totals = aggregate_by(ROWS, lambda r: r.group, lambda r: r.amount)
    assert totals == {"red": 40, "blue": 20, "green": 40}
    assert list(totals) == ["red", "blue", "green"]


def test_record_index_lookup_and_default():
    index = RecordIndex(ROWS)
    assert len(index) == 4
    assert index.get("r-3").name == "Gamma Kit"
    assert index.get("missing") is None
    assert index.resolve("r-2", "name") == "beta set"
    assert index.resolve("missing", "name", "Unknown") == "Unknown"


def test_record_index_first_record_wins_on_duplicate_keys():
    index = RecordIndex([Row("x", "first", "a", StudentStatus.ACTIVE, date(2025, 1, 1), 1),
                         Row("x", "second", "a", StudentStatus.ACTIVE, date(2025, 1, 1), 1)])
    assert index.resolve("x", "name") == "first"
