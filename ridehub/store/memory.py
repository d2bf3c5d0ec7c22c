"""
In-Memory Store

Reference store backed by plain dictionaries. A single re-entrant lock
serializes every operation, so multi-record writes such as driver
rejection are applied as one critical section.
"""

import copy
import dataclasses
import threading
from typing import Dict, List, Optional

from ridehub.common.auth.user import UserRole, UserStatus
from ridehub.common.logger import get_logger
from ridehub.domain.models import (
    DriverDocument,
    DriverProfile,
    DriverStatus,
    RiderProfile,
    User,
    utcnow,
)
from ridehub.store.base import DuplicateEmailError, RoleProfile, UserStore

logger = get_logger(__name__)


def _apply(record, changes):
    """Return a copy of a record with changes applied and updated_at bumped."""
    changes = dict(changes)
    changes["updated_at"] = utcnow()
    # dataclasses.replace rejects unknown field names with TypeError
    return dataclasses.replace(record, **changes)


class InMemoryStore(UserStore):
    """Dictionary-backed store keyed by user id."""

    def __init__(self):
        self._lock = threading.RLock()
        self._users: Dict[str, User] = {}
        self._emails: Dict[str, str] = {}
        self._driver_profiles: Dict[str, DriverProfile] = {}
        self._rider_profiles: Dict[str, RiderProfile] = {}

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return copy.deepcopy(self._users.get(user_id))

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._emails.get(email.lower())
            return copy.deepcopy(self._users.get(user_id)) if user_id else None

    def list_users(
        self,
        role: Optional[UserRole] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[User]:
        with self._lock:
            users = [u for u in self._users.values() if role is None or u.role == role]
            users.sort(key=lambda u: u.created_at, reverse=True)
            end = None if limit is None else offset + limit
            return copy.deepcopy(users[offset:end])

    def create_user(self, user: User, profile: Optional[RoleProfile] = None) -> User:
        with self._lock:
            email = user.email.lower()
            if email in self._emails:
                raise DuplicateEmailError(email)

            stored = dataclasses.replace(user, email=email)
            self._users[stored.id] = stored
            self._emails[email] = stored.id

            if isinstance(profile, DriverProfile):
                self._driver_profiles[stored.id] = copy.deepcopy(profile)
            elif isinstance(profile, RiderProfile):
                self._rider_profiles[stored.id] = copy.deepcopy(profile)

            logger.debug(f"Created user {stored.id} ({stored.role.value})")
            return copy.deepcopy(stored)

    def update_user(self, user_id: str, **changes) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            if "email" in changes:
                changes["email"] = changes["email"].lower()
                owner = self._emails.get(changes["email"])
                if owner is not None and owner != user_id:
                    raise DuplicateEmailError(changes["email"])
            updated = _apply(user, changes)
            if updated.email != user.email:
                del self._emails[user.email]
                self._emails[updated.email] = user_id
            self._users[user_id] = updated
            return copy.deepcopy(updated)

    # Role profiles

    def get_driver_profile(self, user_id: str) -> Optional[DriverProfile]:
        with self._lock:
            return copy.deepcopy(self._driver_profiles.get(user_id))

    def list_driver_profiles(self, status: Optional[DriverStatus] = None) -> List[DriverProfile]:
        with self._lock:
            profiles = [
                p for p in self._driver_profiles.values()
                if status is None or p.status == status
            ]
            profiles.sort(key=lambda p: p.created_at, reverse=True)
            return copy.deepcopy(profiles)

    def update_driver_profile(self, user_id: str, **changes) -> Optional[DriverProfile]:
        with self._lock:
            profile = self._driver_profiles.get(user_id)
            if profile is None:
                return None
            updated = _apply(profile, changes)
            self._driver_profiles[user_id] = updated
            return copy.deepcopy(updated)

    def get_rider_profile(self, user_id: str) -> Optional[RiderProfile]:
        with self._lock:
            return copy.deepcopy(self._rider_profiles.get(user_id))

    # Documents

    def add_driver_document(self, user_id: str, document: DriverDocument) -> Optional[DriverDocument]:
        with self._lock:
            profile = self._driver_profiles.get(user_id)
            if profile is None:
                return None
            # The document list is owned by the profile; append in place.
            profile.documents.append(copy.deepcopy(document))
            profile.updated_at = utcnow()
            return copy.deepcopy(document)

    def get_driver_documents(self, user_id: str) -> List[DriverDocument]:
        with self._lock:
            profile = self._driver_profiles.get(user_id)
            return copy.deepcopy(profile.documents) if profile else []

    # Review

    def reject_driver(self, user_id: str, reason: str, rejected_by: str) -> Optional[DriverProfile]:
        with self._lock:
            profile = self._driver_profiles.get(user_id)
            user = self._users.get(user_id)
            if profile is None or user is None:
                return None

            now = utcnow()
            rejected_profile = _apply(profile, {
                "status": DriverStatus.REJECTED,
                "rejection_reason": reason,
                "rejected_at": now,
                "rejected_by": rejected_by,
            })
            locked_user = _apply(user, {"status": UserStatus.REJECTED})

            # Both replacements are built before either is stored.
            self._driver_profiles[user_id] = rejected_profile
            self._users[user_id] = locked_user
            return copy.deepcopy(rejected_profile)
