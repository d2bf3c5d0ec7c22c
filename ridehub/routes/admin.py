"""
Admin endpoints: driver review and user management. Every route requires
an active admin account.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from ridehub.api import json_body, respond
from ridehub.common.auth.dependencies import (
    get_auth_context,
    get_store,
    require_active_account,
    require_role,
)
from ridehub.common.auth.user import AuthContext, UserRole
from ridehub.common.validation import validate_payload
from ridehub.domain.models import DriverStatus
from ridehub.domain.schemas import (
    ApproveDriverRequest,
    RejectDriverRequest,
    UpdateUserStatusRequest,
)
from ridehub.services import drivers
from ridehub.store.base import UserStore

router = APIRouter(
    dependencies=[Depends(require_role(UserRole.ADMIN)), Depends(require_active_account)],
)


@router.get("/drivers/pending")
def pending_drivers(store: UserStore = Depends(get_store)):
    """Drivers awaiting approval."""
    return respond(drivers.list_pending_drivers(store))


@router.get("/drivers")
def list_drivers(
    status: Optional[DriverStatus] = Query(None),
    store: UserStore = Depends(get_store),
):
    """All drivers, optionally filtered by approval status."""
    return respond(drivers.list_drivers(store, status))


@router.post("/drivers/{driver_id}/approve")
def approve_driver(
    driver_id: str,
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    request = validate_payload(ApproveDriverRequest, payload)
    return respond(drivers.approve_driver(store, driver_id, context.id, request))


@router.post("/drivers/{driver_id}/reject")
def reject_driver(
    driver_id: str,
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Reject a driver and lock the driver's account."""
    request = validate_payload(RejectDriverRequest, payload)
    return respond(drivers.reject_driver(store, driver_id, context.id, request))


@router.get("/users")
def list_users(
    role: Optional[UserRole] = Query(None),
    limit: int = Query(drivers.DEFAULT_PAGE_SIZE, ge=1, le=500),
    offset: int = Query(0, ge=0),
    store: UserStore = Depends(get_store),
):
    return respond(drivers.list_users(store, role=role, limit=limit, offset=offset))


@router.patch("/users/{user_id}/status")
def update_user_status(
    user_id: str,
    payload: Any = Depends(json_body),
    context: AuthContext = Depends(get_auth_context),
    store: UserStore = Depends(get_store),
):
    """Set a user's account status directly."""
    request = validate_payload(UpdateUserStatusRequest, payload)
    return respond(drivers.update_user_status(store, user_id, context.id, request))
