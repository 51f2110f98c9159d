"""Executive dashboard - metric cards and the merged recent activity feed"""

from typing import Iterable, List, Optional, Sequence

from campus_dashboard.domain.models import (
    ActivityItem,
    InvestmentSummary,
    MetricCard,
    StockSnapshot,
    StudentSummary,
)

INCOME_DELTA = 12.5
OUTCOME_DELTA = -4.2


def build_metric_cards(
    stock: Optional[StockSnapshot],
    students: Optional[StudentSummary],
    investment: Optional[InvestmentSummary],
) -> List[MetricCard]:
    """Headline cards; any domain that has not loaded yet reports 0"""
    return [
        MetricCard(
            id="books",
            label="Total Books",
            value=stock.total_books if stock else 0,
            icon="library",
            format="number",
        ),
        MetricCard(
            id="students",
            label="Total Students",
            value=students.total if students else 0,
            icon="users",
            format="number",
        ),
        MetricCard(
            id="income",
            label="Income",
            value=investment.income if investment else 0,
            icon="trending-up",
            format="currency",
            delta=INCOME_DELTA,
        ),
        MetricCard(
            id="outcome",
            label="Outcome",
            value=investment.outcome if investment else 0,
            icon="trending-down",
            format="currency",
            delta=OUTCOME_DELTA,
        ),
    ]


def recent_activity(feeds: Iterable[Sequence[ActivityItem]], limit: int = 12) -> List[ActivityItem]:
    """Merge per-domain feeds, newest first"""
    merged = [item for feed in feeds for item in feed]
    merged.sort(key=lambda item: item.timestamp, reverse=True)
    return merged[:limit]
