"""
Authentication User Models

This module defines the role and status vocabularies shared by tokens and
stored identities, plus the claims carried inside signed tokens and the
per-request authentication context built from them.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict


class UserRole(str, enum.Enum):
    """User roles for authorization."""

    RIDER = "rider"
    DRIVER = "driver"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """User account statuses."""

    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"
    REJECTED = "rejected"


@dataclass(frozen=True)
class TokenClaims:
    """
    Identity attributes embedded in a signed token.

    Attributes:
        id: User identifier
        email: User's email address
        role: User's role at issue time
        status: User's account status at issue time
    """
    id: str
    email: str
    role: UserRole
    status: UserStatus

    def to_dict(self) -> Dict[str, Any]:
        """Convert the claims to the JWT payload representation."""
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenClaims":
        """
        Create claims from a decoded token payload.

        Raises:
            KeyError: If a required claim is missing
            ValueError: If role or status is outside its closed set
        """
        return cls(
            id=str(data["id"]),
            email=str(data["email"]),
            role=UserRole(data["role"]),
            status=UserStatus(data["status"]),
        )


@dataclass(frozen=True)
class AuthContext:
    """
    Authenticated identity for a single request.

    Built by the authentication dependency and passed explicitly to
    authorization guards and route handlers. The claims are trusted for
    this request only; status-sensitive checks re-read the store.
    """
    claims: TokenClaims
    access_token: str

    @property
    def id(self) -> str:
        return self.claims.id

    @property
    def email(self) -> str:
        return self.claims.email

    @property
    def role(self) -> UserRole:
        return self.claims.role

    @property
    def status(self) -> UserStatus:
        return self.claims.status
