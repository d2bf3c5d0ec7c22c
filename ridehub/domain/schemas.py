"""
Request Schemas

Declarative payload schemas for every endpoint that accepts a body. Each
constraint reports a field-scoped message through the API's validation
envelope.
"""

import datetime
from typing import Any, Literal, Optional

from pydantic import field_validator

from ridehub.common.validation import (
    RequestSchema,
    datetime_string,
    email_address,
    min_length,
    strict_bool,
)
from ridehub.domain.models import DocumentType

PASSWORD_MIN_LENGTH = 8
PHONE_MIN_LENGTH = 10

PASSWORD_TOO_SHORT = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
PHONE_TOO_SHORT = f"Phone number must be at least {PHONE_MIN_LENGTH} digits"


class SignupRequest(RequestSchema):
    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: str
    role: Literal["rider", "driver"]

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return email_address(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return min_length(value, PASSWORD_MIN_LENGTH, PASSWORD_TOO_SHORT)

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, value: str) -> str:
        return min_length(value, 1, "First name is required")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, value: str) -> str:
        return min_length(value, 1, "Last name is required")

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, value: str) -> str:
        return min_length(value, PHONE_MIN_LENGTH, PHONE_TOO_SHORT)


class LoginRequest(RequestSchema):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return email_address(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return min_length(value, 1, "Password is required")


class RefreshTokenRequest(RequestSchema):
    refresh_token: str

    @field_validator("refresh_token")
    @classmethod
    def check_refresh_token(cls, value: str) -> str:
        return min_length(value, 1, "Refresh token is required")


class UpdateProfileRequest(RequestSchema):
    """Self-service identity fields; omitted fields are left unchanged."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else min_length(value, 1, "First name is required")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else min_length(value, 1, "Last name is required")

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else min_length(value, PHONE_MIN_LENGTH, PHONE_TOO_SHORT)


class UpdateDriverProfileRequest(RequestSchema):
    license_number: Optional[str] = None
    license_expiry: Optional[datetime.datetime] = None
    vehicle_type: Optional[str] = None
    vehicle_number: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("license_expiry", mode="before")
    @classmethod
    def check_license_expiry(cls, value: Any) -> Any:
        return None if value is None else datetime_string(value, "licenseExpiry")

    @field_validator("is_available", mode="before")
    @classmethod
    def check_is_available(cls, value: Any) -> Any:
        return None if value is None else strict_bool(value, "isAvailable")


class AvailabilityRequest(RequestSchema):
    is_available: bool

    @field_validator("is_available", mode="before")
    @classmethod
    def check_is_available(cls, value: Any) -> bool:
        return strict_bool(value, "isAvailable")


class AddDocumentRequest(RequestSchema):
    type: DocumentType
    url: Optional[str] = None


class ApproveDriverRequest(RequestSchema):
    approval_notes: Optional[str] = None


class RejectDriverRequest(RequestSchema):
    rejection_reason: str

    @field_validator("rejection_reason")
    @classmethod
    def check_rejection_reason(cls, value: str) -> str:
        return min_length(value, 1, "Rejection reason is required")


class UpdateUserStatusRequest(RequestSchema):
    """Statuses an admin may assign directly; rejection goes through driver review."""

    status: Literal["pending", "active", "inactive"]
