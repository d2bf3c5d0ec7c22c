"""
Domain Models

Plain dataclasses for identities and their role-specific profiles. Store
backends hand out copies of these records; mutations go back through the
store's update operations.
"""

import datetime
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ridehub.common.auth.user import TokenClaims, UserRole, UserStatus


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class DriverStatus(str, enum.Enum):
    """Approval workflow states of a driver profile."""

    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    INACTIVE = "inactive"


class DocumentType(str, enum.Enum):
    """Kinds of evidence a driver can upload."""

    LICENSE = "license"
    INSURANCE = "insurance"
    REGISTRATION = "registration"
    INSPECTION = "inspection"


class DocumentStatus(str, enum.Enum):
    """Verification states of a driver document."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


def _iso(value: Optional[datetime.datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class User:
    """
    A user account.

    Attributes:
        id: Unique user identifier
        email: Lower-cased email address, unique across users
        password: Salted password hash, never the plaintext
        first_name: User's first name
        last_name: User's last name
        phone_number: User's phone number
        role: User's role
        status: User's account status
        email_verified: Whether the email address has been confirmed
        email_verified_at: When the email address was confirmed
        created_at: Timestamp when the user was created
        updated_at: Timestamp when the user was last updated
    """
    id: str
    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: str
    role: UserRole = UserRole.RIDER
    status: UserStatus = UserStatus.ACTIVE
    email_verified: bool = False
    email_verified_at: Optional[datetime.datetime] = None
    created_at: datetime.datetime = field(default_factory=utcnow)
    updated_at: datetime.datetime = field(default_factory=utcnow)

    def claims(self) -> TokenClaims:
        """Token claims derived from the current stored state."""
        return TokenClaims(id=self.id, email=self.email, role=self.role, status=self.status)

    def summary(self) -> Dict[str, Any]:
        """Public projection returned by signup and login."""
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.value,
            "status": self.status.value,
        }

    def contact(self) -> Dict[str, Any]:
        """Projection embedded in admin driver listings."""
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Full public projection; excludes the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "role": self.role.value,
            "status": self.status.value,
            "emailVerified": self.email_verified,
            "emailVerifiedAt": _iso(self.email_verified_at),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class DriverDocument:
    """An evidence artifact attached to a driver profile."""
    id: str
    type: DocumentType
    url: Optional[str] = None
    status: DocumentStatus = DocumentStatus.PENDING
    uploaded_at: datetime.datetime = field(default_factory=utcnow)
    verification_notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "url": self.url,
            "status": self.status.value,
            "uploadedAt": _iso(self.uploaded_at),
            "verificationNotes": self.verification_notes,
        }


@dataclass
class DriverProfile:
    """
    Driver-specific extension of a user account.

    New profiles start unapproved and unavailable; approval fields are
    written only by admins.
    """
    user_id: str
    license_number: str = ""
    license_expiry: Optional[datetime.datetime] = None
    vehicle_type: str = ""
    vehicle_number: str = ""
    status: DriverStatus = DriverStatus.PENDING_APPROVAL
    is_available: bool = False
    documents: List[DriverDocument] = field(default_factory=list)
    approval_notes: Optional[str] = None
    approved_at: Optional[datetime.datetime] = None
    approved_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    rejected_at: Optional[datetime.datetime] = None
    rejected_by: Optional[str] = None
    created_at: datetime.datetime = field(default_factory=utcnow)
    updated_at: datetime.datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "licenseNumber": self.license_number,
            "licenseExpiry": _iso(self.license_expiry),
            "vehicleType": self.vehicle_type,
            "vehicleNumber": self.vehicle_number,
            "status": self.status.value,
            "isAvailable": self.is_available,
            "documents": [document.to_dict() for document in self.documents],
            "approvalNotes": self.approval_notes,
            "approvedAt": _iso(self.approved_at),
            "approvedBy": self.approved_by,
            "rejectionReason": self.rejection_reason,
            "rejectedAt": _iso(self.rejected_at),
            "rejectedBy": self.rejected_by,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class RiderProfile:
    """Rider-specific extension of a user account."""
    user_id: str
    profile_picture: Optional[str] = None
    created_at: datetime.datetime = field(default_factory=utcnow)
    updated_at: datetime.datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "profilePicture": self.profile_picture,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
