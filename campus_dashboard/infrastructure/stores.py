"""In-memory data stores and the application state that owns them"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from campus_dashboard.domain.models import ActivityItem, ActivitySource, GraduationOutcome
from campus_dashboard.infrastructure import seed
from campus_dashboard.infrastructure.auth import AuthSession

logger = logging.getLogger(__name__)

STUDENTS = "students"
STOCK = "stock"
EMPLOYEES = "employees"
INVESTMENT = "investment"
ACTIVITY = "activity"


class DataStore:
    """One domain's seed collections, read-only after construction"""

    def __init__(self, name: str, collections: Mapping[str, Iterable[Any]]):
        self.name = name
        self._collections: Dict[str, Tuple[Any, ...]] = {
            key: tuple(records) for key, records in collections.items()
        }

    def snapshot(self) -> Mapping[str, Tuple[Any, ...]]:
        """Current state of every collection in the store"""
        return MappingProxyType(self._collections)

    def collection(self, key: str) -> Tuple[Any, ...]:
        return self._collections[key]

    def __repr__(self) -> str:
        sizes = ", ".join(f"{key}={len(records)}" for key, records in self._collections.items())
        return f"DataStore({self.name}: {sizes})"


@dataclass
class AppState:
    """Process-lifetime state constructed once at start-up"""

    stores: Dict[str, DataStore]
    activities: Dict[ActivitySource, List[ActivityItem]]
    graduation_outcomes: Mapping[str, GraduationOutcome]
    auth: AuthSession = field(default_factory=AuthSession)
    # Students archived this process; hidden from the overview list and its export
    archived_students: Set[str] = field(default_factory=set)

    def store(self, key: str) -> DataStore:
        return self.stores[key]

    def activity_feeds(self) -> Sequence[Sequence[ActivityItem]]:
        return [self.activities[source] for source in ActivitySource]


def build_app_state(auth: Optional[AuthSession] = None) -> AppState:
    """Ingest seed data into validated stores"""
    stores = {
        STUDENTS: DataStore(
            STUDENTS,
            {
                "students": seed.load_students(),
                "payments": seed.load_student_payments(),
                "timeline": seed.student_timeline(),
            },
        ),
        STOCK: DataStore(
            STOCK,
            {
                "categories": seed.load_stock_categories(),
                "products": seed.load_stock_products(),
                "timeline": seed.stock_timeline(),
            },
        ),
        EMPLOYEES: DataStore(
            EMPLOYEES,
            {
                "employees": seed.load_employees(),
                "attendance": seed.load_attendance(),
                "schedules": seed.load_schedules(),
            },
        ),
        INVESTMENT: DataStore(
            INVESTMENT,
            {
                "members": seed.load_investment_members(),
                "payments": seed.load_investment_payments(),
                "timeline": seed.investment_timeline(),
            },
        ),
    }
    logger.info("Seed data loaded", extra={"stores": [repr(s) for s in stores.values()]})

    return AppState(
        stores=stores,
        activities=seed.load_activities(),
        graduation_outcomes=MappingProxyType(seed.load_graduation_outcomes()),
        auth=auth or AuthSession(),
    )
