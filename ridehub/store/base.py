"""
User/Session Store Interface

Every backend owns Identity and Role Profile records exclusively. Reads
return detached copies; callers change records only through the update
operations below.
"""

import abc
from typing import List, Optional, Union

from ridehub.common.auth.user import UserRole
from ridehub.common.exceptions import StoreError
from ridehub.domain.models import (
    DriverDocument,
    DriverProfile,
    DriverStatus,
    RiderProfile,
    User,
)

RoleProfile = Union[DriverProfile, RiderProfile]


class DuplicateEmailError(StoreError):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str):
        super().__init__(f"email {email} already registered")
        self.email = email


class UserStore(abc.ABC):
    """Abstract store for identities and their role profiles."""

    # Users

    @abc.abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Get a user by id."""

    @abc.abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, compared case-insensitively."""

    @abc.abstractmethod
    def list_users(
        self,
        role: Optional[UserRole] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[User]:
        """List users, newest first, optionally filtered by role."""

    @abc.abstractmethod
    def create_user(self, user: User, profile: Optional[RoleProfile] = None) -> User:
        """
        Create a user together with its role profile.

        Both records are created or neither is.

        Raises:
            DuplicateEmailError: If the email is already registered
        """

    @abc.abstractmethod
    def update_user(self, user_id: str, **changes) -> Optional[User]:
        """Apply field changes to a user; returns None if it does not exist."""

    # Role profiles

    @abc.abstractmethod
    def get_driver_profile(self, user_id: str) -> Optional[DriverProfile]:
        """Get the driver profile owned by a user."""

    @abc.abstractmethod
    def list_driver_profiles(self, status: Optional[DriverStatus] = None) -> List[DriverProfile]:
        """List driver profiles, newest first, optionally filtered by status."""

    @abc.abstractmethod
    def update_driver_profile(self, user_id: str, **changes) -> Optional[DriverProfile]:
        """Apply field changes to a driver profile; returns None if it does not exist."""

    @abc.abstractmethod
    def get_rider_profile(self, user_id: str) -> Optional[RiderProfile]:
        """Get the rider profile owned by a user."""

    # Documents

    @abc.abstractmethod
    def add_driver_document(self, user_id: str, document: DriverDocument) -> Optional[DriverDocument]:
        """Append a document to a driver profile; returns None if there is no profile."""

    @abc.abstractmethod
    def get_driver_documents(self, user_id: str) -> List[DriverDocument]:
        """List a driver's documents in upload order."""

    # Review

    @abc.abstractmethod
    def reject_driver(self, user_id: str, reason: str, rejected_by: str) -> Optional[DriverProfile]:
        """
        Reject a driver profile and lock the owning account.

        Sets the profile status to rejected with reason, reviewer and
        timestamp, and sets the user's status to rejected. Both changes are
        applied together. Returns None if the profile or user does not exist.
        """

    def close(self) -> None:
        """Release backend resources."""
