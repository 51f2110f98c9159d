"""Mock login/logout and the route surface guarded by it"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from campus_dashboard.api.dependencies import get_app_state, get_authenticator, get_request_id
from campus_dashboard.api.v1.schemas import (
    AcknowledgementResponse,
    AuthUserSchema,
    LoginRequest,
    NavSectionSchema,
    PasswordResetRequest,
    RouteResolutionSchema,
    SessionResponse,
)
from campus_dashboard.domain.exceptions import AuthenticationError
from campus_dashboard.domain.navigation import NAV_SECTIONS, post_login_redirect, resolve_route
from campus_dashboard.infrastructure.auth import MockAuthenticator
from campus_dashboard.infrastructure.observability.logging import log_action
from campus_dashboard.infrastructure.observability.metrics import login_counter, record_action
from campus_dashboard.infrastructure.stores import AppState

router = APIRouter()


def _session(state: AppState, redirect_to: Optional[str] = None) -> SessionResponse:
    user = state.auth.user
    return SessionResponse(
        authenticated=state.auth.is_authenticated,
        user=AuthUserSchema.model_validate(user) if user else None,
        redirect_to=redirect_to,
    )


@router.post("/auth/login", response_model=SessionResponse)
async def login(
    body: LoginRequest,
    state: AppState = Depends(get_app_state),
    authenticator: MockAuthenticator = Depends(get_authenticator),
    request_id: str = Depends(get_request_id),
):
    """
    Any non-empty email/password signs in as the demo administrator.

    `redirect_to` is the page named by `next` when it is a known page, else the dashboard.
    """
    try:
        user = await authenticator.login(body.email, body.password)
    except AuthenticationError as e:
        login_counter.labels(outcome="failure").inc()
        logging.warning(f"Login rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=401, detail=str(e))

    login_counter.labels(outcome="success").inc()
    state.auth.sign_in(user)
    return _session(state, redirect_to=post_login_redirect(body.next))


@router.post("/auth/password-reset", response_model=AcknowledgementResponse, status_code=202)
def request_password_reset(
    body: PasswordResetRequest,
    request_id: str = Depends(get_request_id),
):
    """Acknowledge a reset request; no email is sent"""
    record_action("password_reset", acknowledged=True)
    log_action(request_id, "password_reset", body.email)
    return AcknowledgementResponse(
        action="password_reset",
        subject_id=body.email,
        message=f"Password reset instructions requested for {body.email}",
    )


@router.post("/auth/logout", response_model=SessionResponse)
def logout(state: AppState = Depends(get_app_state)):
    state.auth.sign_out()
    return _session(state)


@router.get("/auth/session", response_model=SessionResponse)
def session(state: AppState = Depends(get_app_state)):
    return _session(state)


@router.get("/navigation", response_model=List[NavSectionSchema])
def navigation():
    """Sidebar sections"""
    return [NavSectionSchema.model_validate(section) for section in NAV_SECTIONS]


@router.get("/navigation/resolve", response_model=RouteResolutionSchema)
def resolve(
    path: str = Query(..., description="Page path, e.g. /stock/products"),
    state: AppState = Depends(get_app_state),
):
    """Page title, or the redirect the shell performs for this path"""
    return RouteResolutionSchema.model_validate(resolve_route(path, state.auth.is_authenticated))
