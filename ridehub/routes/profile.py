"""
Profile endpoints for the authenticated user. Driver routes require the
driver role; every route requires an active account.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from ridehub.api import json_body, respond
from ridehub.common.auth.dependencies import (
    get_auth_context,
    get_store,
    require_active_account,
    require_role,
)
from ridehub.common.auth.user import AuthContext, UserRole
from ridehub.common.validation import validate_payload
from ridehub.domain.schemas import (
    AddDocumentRequest,
    AvailabilityRequest,
    UpdateDriverProfileRequest,
    UpdateProfileRequest,
)
from ridehub.services import profiles
from ridehub.store.base import UserStore

router = APIRouter()

ACTIVE = [Depends(require_active_account)]
ACTIVE_DRIVER = [Depends(require_role(UserRole.DRIVER)), Depends(require_active_account)]


@router.get("", dependencies=ACTIVE)
def get_profile(
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Get the current user's profile."""
    return respond(profiles.get_profile(store, context.id))


@router.patch("", dependencies=ACTIVE)
def update_profile(
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Update the current user's name and phone number."""
    request = validate_payload(UpdateProfileRequest, payload)
    return respond(profiles.update_profile(store, context.id, request))


@router.get("/driver", dependencies=ACTIVE_DRIVER)
def get_driver_profile(
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    return respond(profiles.get_driver_profile(store, context.id))


@router.patch("/driver", dependencies=ACTIVE_DRIVER)
def update_driver_profile(
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    request = validate_payload(UpdateDriverProfileRequest, payload)
    return respond(profiles.update_driver_profile(store, context.id, request))


@router.post("/driver/documents", dependencies=ACTIVE_DRIVER, status_code=status.HTTP_201_CREATED)
def add_document(
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Attach a document to the driver's profile."""
    request = validate_payload(AddDocumentRequest, payload)
    return respond(profiles.add_document(store, context.id, request), status.HTTP_201_CREATED)


@router.get("/driver/documents", dependencies=ACTIVE_DRIVER)
def list_documents(
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    return respond(profiles.list_documents(store, context.id))


@router.patch("/driver/availability", dependencies=ACTIVE_DRIVER)
def set_availability(
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Toggle whether the driver is available for rides."""
    request = validate_payload(AvailabilityRequest, payload)
    return respond(profiles.set_availability(store, context.id, request))
