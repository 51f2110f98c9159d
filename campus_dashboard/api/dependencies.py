"""Dependency injection for FastAPI endpoints"""

import logging
from typing import Any, Mapping

from fastapi import HTTPException, Request

from campus_dashboard.config import Settings
from campus_dashboard.infrastructure.auth import MockAuthenticator
from campus_dashboard.infrastructure.query import QueryClient
from campus_dashboard.infrastructure.stores import AppState


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_app_state(request: Request) -> AppState:
    """Provide the application state built at start-up"""
    return request.app.state.app_state


def get_query_client(request: Request) -> QueryClient:
    return request.app.state.query_client


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_authenticator(request: Request) -> MockAuthenticator:
    return request.app.state.authenticator


async def fetch_snapshot(request: Request, key: str) -> Mapping[str, Any]:
    """
    Read one domain store through the query client.

    Raises:
        HTTPException: 503 when the load captured an error
    """
    state = get_app_state(request)
    result = await get_query_client(request).fetch(key, state.store(key).snapshot)
    if result.error is not None:
        logging.error(
            f"Store '{key}' unavailable: {result.error}",
            extra={"request_id": get_request_id(request)},
        )
        raise HTTPException(status_code=503, detail=f"{key} data unavailable")
    return result.data
