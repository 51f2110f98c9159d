"""FastAPI application factory"""

from typing import Optional

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from campus_dashboard.api.middleware import RequestIDMiddleware, MetricsMiddleware
from campus_dashboard.api.v1 import auth, dashboard, employees, investment, stock, students
from campus_dashboard.infrastructure.auth import MockAuthenticator
from campus_dashboard.infrastructure.observability.logging import setup_logging
from campus_dashboard.infrastructure.query import QueryClient
from campus_dashboard.infrastructure.stores import build_app_state
from campus_dashboard.config import Settings, settings as default_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application with its own state"""
    settings = settings or default_settings

    # Setup structured logging
    setup_logging(settings.log_level, settings.service_name)

    app = FastAPI(
        title="Campus Dashboard",
        description="Student, stock, employee and investment views for school administration",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Composition root: one state object per app, injected into routers via dependencies
    app.state.settings = settings
    app.state.app_state = build_app_state()
    app.state.query_client = QueryClient(latency=settings.latency_for)
    app.state.authenticator = MockAuthenticator(delay_seconds=settings.login_delay_ms / 1000)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(students.router, prefix="/v1", tags=["students"])
    app.include_router(stock.router, prefix="/v1", tags=["stock"])
    app.include_router(employees.router, prefix="/v1", tags=["employees"])
    app.include_router(investment.router, prefix="/v1", tags=["investment"])
    app.include_router(auth.router, prefix="/v1", tags=["auth"])

    return app


app = create_app()
