"""
Self-service profile operations for the authenticated user.
"""

from typing import Any, Dict, List

from ridehub.common.auth.jwt import generate_id
from ridehub.common.auth.user import UserRole
from ridehub.common.logger import get_logger
from ridehub.domain.models import DriverDocument
from ridehub.domain.schemas import (
    AddDocumentRequest,
    AvailabilityRequest,
    UpdateDriverProfileRequest,
    UpdateProfileRequest,
)
from ridehub.services.results import Failure, Outcome
from ridehub.store.base import UserStore

logger = get_logger(__name__)

USER_NOT_FOUND = "User not found"
DRIVER_PROFILE_NOT_FOUND = "Driver profile not found"


def get_profile(store: UserStore, user_id: str) -> Outcome[Dict[str, Any]]:
    """The user's public projection with its role profile nested under a role key."""
    user = store.get_user(user_id)
    if user is None:
        return Failure.not_found(USER_NOT_FOUND)

    profile = user.to_public_dict()
    if user.role == UserRole.DRIVER:
        driver_profile = store.get_driver_profile(user.id)
        profile["driverProfile"] = driver_profile.to_dict() if driver_profile else None
    elif user.role == UserRole.RIDER:
        rider_profile = store.get_rider_profile(user.id)
        profile["riderProfile"] = rider_profile.to_dict() if rider_profile else None
    return profile


def update_profile(store: UserStore, user_id: str, request: UpdateProfileRequest) -> Outcome[Dict[str, Any]]:
    changes = request.model_dump(exclude_none=True)
    user = store.update_user(user_id, **changes)
    if user is None:
        return Failure.not_found(USER_NOT_FOUND)

    logger.info(f"User {user_id} updated {sorted(changes) or 'nothing'}")
    projection = user.summary()
    projection["phoneNumber"] = user.phone_number
    return projection


def get_driver_profile(store: UserStore, user_id: str) -> Outcome[Dict[str, Any]]:
    profile = store.get_driver_profile(user_id)
    if profile is None:
        return Failure.not_found(DRIVER_PROFILE_NOT_FOUND)
    return profile.to_dict()


def update_driver_profile(
    store: UserStore,
    user_id: str,
    request: UpdateDriverProfileRequest,
) -> Outcome[Dict[str, Any]]:
    """Update license, vehicle and availability fields; approval fields are admin-only."""
    changes = request.model_dump(exclude_none=True)
    profile = store.update_driver_profile(user_id, **changes)
    if profile is None:
        return Failure.not_found(DRIVER_PROFILE_NOT_FOUND)

    logger.info(f"Driver {user_id} updated {sorted(changes) or 'nothing'}")
    return profile.to_dict()


def add_document(store: UserStore, user_id: str, request: AddDocumentRequest) -> Outcome[Dict[str, Any]]:
    document = DriverDocument(id=generate_id(), type=request.type, url=request.url)
    added = store.add_driver_document(user_id, document)
    if added is None:
        return Failure.not_found(DRIVER_PROFILE_NOT_FOUND)

    logger.info(f"Driver {user_id} uploaded {added.type.value} document {added.id}")
    return added.to_dict()


def list_documents(store: UserStore, user_id: str) -> List[Dict[str, Any]]:
    return [document.to_dict() for document in store.get_driver_documents(user_id)]


def set_availability(store: UserStore, user_id: str, request: AvailabilityRequest) -> Outcome[Dict[str, Any]]:
    profile = store.update_driver_profile(user_id, is_available=request.is_available)
    if profile is None:
        return Failure.not_found(DRIVER_PROFILE_NOT_FOUND)
    return {"isAvailable": profile.is_available}
