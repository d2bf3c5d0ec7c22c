"""
Authentication endpoints: signup, login, token refresh and current user.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from ridehub.api import json_body, respond
from ridehub.common.auth.dependencies import get_auth_context, get_store
from ridehub.common.auth.user import AuthContext
from ridehub.common.validation import validate_payload
from ridehub.domain.schemas import LoginRequest, RefreshTokenRequest, SignupRequest
from ridehub.services import accounts
from ridehub.store.base import UserStore

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(payload: Any = Depends(json_body), store: UserStore = Depends(get_store)):
    """Register a new rider or driver."""
    request = validate_payload(SignupRequest, payload)
    return respond(accounts.signup(store, request), status.HTTP_201_CREATED)


@router.post("/login")
def login(payload: Any = Depends(json_body), store: UserStore = Depends(get_store)):
    """Log in with email and password."""
    request = validate_payload(LoginRequest, payload)
    return respond(accounts.login(store, request))


@router.post("/refresh")
def refresh(payload: Any = Depends(json_body), store: UserStore = Depends(get_store)):
    """Exchange a refresh token for a new token pair."""
    request = validate_payload(RefreshTokenRequest, payload)
    return respond(accounts.refresh(store, request))


@router.get("/me")
def me(
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Get the current authenticated user."""
    return respond(accounts.current_user(store, context.id))
