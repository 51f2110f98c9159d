"""Executive dashboard and query cache control"""

from typing import Callable, Dict

from fastapi import APIRouter, Depends, HTTPException

from campus_dashboard.api.dependencies import get_app_state, get_query_client, get_settings
from campus_dashboard.api.v1.schemas import (
    ActivityItemSchema,
    DashboardResponse,
    MetricCardSchema,
    QueryStateSchema,
)
from campus_dashboard.config import Settings
from campus_dashboard.domain.dashboard import build_metric_cards, recent_activity
from campus_dashboard.domain.investment import summarize_payments
from campus_dashboard.domain.stock import stock_snapshot
from campus_dashboard.domain.students import summarize_students
from campus_dashboard.infrastructure.query import QueryClient, QueryResult
from campus_dashboard.infrastructure.stores import ACTIVITY, EMPLOYEES, INVESTMENT, STOCK, STUDENTS, AppState

router = APIRouter()

# The dashboard is ready only once all of these have data
DASHBOARD_KEYS = (STUDENTS, STOCK, INVESTMENT, ACTIVITY)


def query_loaders(state: AppState, settings: Settings) -> Dict[str, Callable]:
    """Loader per cache key, reading from the injected application state"""
    return {
        STUDENTS: state.store(STUDENTS).snapshot,
        STOCK: state.store(STOCK).snapshot,
        EMPLOYEES: state.store(EMPLOYEES).snapshot,
        INVESTMENT: state.store(INVESTMENT).snapshot,
        ACTIVITY: lambda: recent_activity(state.activity_feeds(), settings.recent_activity_limit),
    }


def _query_state(key: str, result: QueryResult) -> QueryStateSchema:
    return QueryStateSchema(
        key=key,
        is_loading=result.is_loading,
        has_data=result.data is not None,
        error=str(result.error) if result.error else None,
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    state: AppState = Depends(get_app_state),
    client: QueryClient = Depends(get_query_client),
    settings: Settings = Depends(get_settings),
):
    """
    Headline metrics and recent activity.

    Waits on all dashboard queries concurrently; a domain whose load failed
    contributes 0 to its metric cards and leaves `ready` false.
    """
    loaders = query_loaders(state, settings)
    results = await client.fetch_all({key: loaders[key] for key in DASHBOARD_KEYS})

    def data(key: str):
        return results[key].data if results[key].is_ready else None

    students, stock, investment = data(STUDENTS), data(STOCK), data(INVESTMENT)
    metrics = build_metric_cards(
        stock=stock_snapshot(stock["products"], stock["categories"]) if stock else None,
        students=summarize_students(students["students"]) if students else None,
        investment=summarize_payments(investment["payments"]) if investment else None,
    )

    return DashboardResponse(
        ready=client.is_ready(DASHBOARD_KEYS),
        metrics=[MetricCardSchema.model_validate(m) for m in metrics],
        recent_activity=[ActivityItemSchema.model_validate(a) for a in data(ACTIVITY) or []],
        queries=[_query_state(key, results[key]) for key in DASHBOARD_KEYS],
    )


@router.get("/queries/{key}", response_model=QueryStateSchema)
def query_state(key: str, client: QueryClient = Depends(get_query_client)):
    """Cache state for one key, without loading it"""
    return _query_state(key, client.state(key))


@router.post("/queries/{key}/refetch", response_model=QueryStateSchema)
async def refetch(
    key: str,
    state: AppState = Depends(get_app_state),
    client: QueryClient = Depends(get_query_client),
    settings: Settings = Depends(get_settings),
):
    """Force a reload of one cache key"""
    loaders = query_loaders(state, settings)
    if key not in loaders:
        raise HTTPException(status_code=404, detail=f"Unknown query key '{key}'")
    result = await client.refetch(key, loaders[key])
    return _query_state(key, result)
