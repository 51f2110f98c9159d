"""Derivation layer - filtering, grouping and aggregation over in-memory collections"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")

# Sentinel filter value meaning "apply no constraint for this field"
ALL = "all"


def field_text(value: Any) -> str:
    """Render a field value the way search and export see it"""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _read(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def matches_search(record: Any, term: Optional[str], fields: Sequence[str]) -> bool:
    """
    Case-insensitive substring match ORed across the given fields.

    A blank or missing term matches every record.
    """
    normalized = (term or "").strip().lower()
    if not normalized:
        return True
    return any(normalized in field_text(_read(record, name)).lower() for name in fields)


def matches_category(value: Any, selected: Optional[str]) -> bool:
    """Exact equality; the ALL sentinel (or no selection) is a no-op"""
    if selected is None or selected == ALL:
        return True
    return field_text(value) == selected


def in_date_range(value: Optional[date], start: Optional[date] = None, end: Optional[date] = None) -> bool:
    """Inclusive range check; either bound may be omitted"""
    if start is None and end is None:
        return True
    if value is None:
        return False
    if isinstance(value, datetime):
        value = value.date()
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


@dataclass(frozen=True)
class FilterPolicy:
    """Which fields a page searches, filters by category and bounds by date"""

    search_fields: tuple = ()
    categorical_fields: tuple = ()
    date_field: Optional[str] = None


@dataclass
class QueryCriteria:
    """User-supplied filter inputs"""

    search: str = ""
    categories: Dict[str, str] = field(default_factory=dict)
    date_from: Optional[date] = None
    date_to: Optional[date] = None


def apply_filters(records: Iterable[T], policy: FilterPolicy, criteria: QueryCriteria) -> List[T]:
    """Filter records by search, categories and date range, preserving relative order"""
    result = []
    for record in records:
        if not matches_search(record, criteria.search, policy.search_fields):
            continue
        if not all(
            matches_category(_read(record, name), criteria.categories.get(name))
            for name in policy.categorical_fields
        ):
            continue
        if policy.date_field and not in_date_range(
            _read(record, policy.date_field), criteria.date_from, criteria.date_to
        ):
            continue
        result.append(record)
    return result


def count_where(records: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for record in records if predicate(record))


def sum_of(records: Iterable[T], value: Callable[[T], float]):
    return sum(value(record) for record in records)


def percentage(part: float, whole: float) -> float:
    """Share of whole as a percentage rounded to one decimal, 0.0 when whole is 0"""
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


def average(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def group_by(records: Iterable[T], key: Callable[[T], Any]) -> Dict[Any, List[T]]:
    """Group records by key; keys keep first-seen order, groups keep record order"""
    groups: Dict[Any, List[T]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return groups


def aggregate_by(records: Iterable[T], key: Callable[[T], Any], value: Callable[[T], float]) -> Dict[Any, float]:
    """Sum value per key, first-seen key order"""
    totals: Dict[Any, float] = {}
    for record in records:
        group = key(record)
        totals[group] = totals.get(group, 0) + value(record)
    return totals


class RecordIndex(Generic[T]):
    """Key -> record lookup built once per collection load"""

    def __init__(self, records: Iterable[T], key: str = "id"):
        self._by_key: Dict[Any, T] = {}
        for record in records:
            # First record wins on duplicate keys, matching a linear find()
            self._by_key.setdefault(_read(record, key), record)

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: Any) -> bool:
        return key in self._by_key

    def get(self, key: Any, default: Optional[T] = None) -> Optional[T]:
        return self._by_key.get(key, default)

    def resolve(self, key: Any, attr: str, default: Any = None) -> Any:
        """Read one attribute of the record at key, or default when absent"""
        record = self._by_key.get(key)
        if record is None:
            return default
        return _read(record, attr)
