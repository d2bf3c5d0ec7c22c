"""
Admin operations: driver review and account management.
"""

from typing import Any, Dict, List, Optional

from ridehub.common.auth.user import UserRole, UserStatus
from ridehub.common.logger import get_logger
from ridehub.domain.models import DriverProfile, DriverStatus, utcnow
from ridehub.domain.schemas import (
    ApproveDriverRequest,
    RejectDriverRequest,
    UpdateUserStatusRequest,
)
from ridehub.services.results import Failure, Outcome
from ridehub.store.base import UserStore

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50


def _with_contact(store: UserStore, profile: DriverProfile) -> Dict[str, Any]:
    user = store.get_user(profile.user_id)
    return {**profile.to_dict(), "user": user.contact() if user else None}


def list_drivers(store: UserStore, status: Optional[DriverStatus] = None) -> List[Dict[str, Any]]:
    """Driver profiles with the owner's contact details, optionally filtered by status."""
    return [_with_contact(store, profile) for profile in store.list_driver_profiles(status)]


def list_pending_drivers(store: UserStore) -> List[Dict[str, Any]]:
    return list_drivers(store, DriverStatus.PENDING_APPROVAL)


def _review_target(store: UserStore, driver_id: str) -> Optional[Failure]:
    if store.get_driver_profile(driver_id) is None:
        return Failure.not_found("Driver profile not found")
    if store.get_user(driver_id) is None:
        return Failure.not_found("Driver user not found")
    return None


def _review_response(store: UserStore, profile: DriverProfile) -> Dict[str, Any]:
    user = store.get_user(profile.user_id)
    summary = user.summary() if user else None
    return {**profile.to_dict(), "user": summary}


def approve_driver(
    store: UserStore,
    driver_id: str,
    admin_id: str,
    request: ApproveDriverRequest,
) -> Outcome[Dict[str, Any]]:
    failure = _review_target(store, driver_id)
    if failure is not None:
        return failure

    profile = store.update_driver_profile(
        driver_id,
        status=DriverStatus.APPROVED,
        approval_notes=request.approval_notes,
        approved_at=utcnow(),
        approved_by=admin_id,
    )
    if profile is None:
        return Failure.not_found("Driver profile not found")

    logger.info(f"Admin {admin_id} approved driver {driver_id}")
    return _review_response(store, profile)


def reject_driver(
    store: UserStore,
    driver_id: str,
    admin_id: str,
    request: RejectDriverRequest,
) -> Outcome[Dict[str, Any]]:
    """Reject a driver profile; the owning account is locked as rejected too."""
    failure = _review_target(store, driver_id)
    if failure is not None:
        return failure

    profile = store.reject_driver(driver_id, request.rejection_reason, admin_id)
    if profile is None:
        return Failure.not_found("Driver profile not found")

    logger.info(f"Admin {admin_id} rejected driver {driver_id}")
    return _review_response(store, profile)


def list_users(
    store: UserStore,
    role: Optional[UserRole] = None,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    users = store.list_users(role=role, limit=limit, offset=offset)
    projections = []
    for user in users:
        projection = user.to_public_dict()
        for key in ("emailVerified", "emailVerifiedAt"):
            projection.pop(key)
        projections.append(projection)
    return projections


def update_user_status(
    store: UserStore,
    user_id: str,
    admin_id: str,
    request: UpdateUserStatusRequest,
) -> Outcome[Dict[str, Any]]:
    user = store.update_user(user_id, status=UserStatus(request.status))
    if user is None:
        return Failure.not_found("User not found")

    logger.info(f"Admin {admin_id} set user {user_id} status to {user.status.value}")
    return user.summary()
