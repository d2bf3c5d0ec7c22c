"""
ORM models for the relational store.

Enumerated fields are stored as their string values.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from ridehub.database.base import ModelBase


class UserRecord(ModelBase):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone_number = Column(String(32), nullable=False)
    role = Column(String(16), nullable=False, index=True)
    status = Column(String(16), nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    email_verified_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    driver_profile = relationship("DriverProfileRecord", uselist=False, back_populates="user")
    rider_profile = relationship("RiderProfileRecord", uselist=False, back_populates="user")


class DriverProfileRecord(ModelBase):
    __tablename__ = "driver_profiles"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    license_number = Column(String(64), nullable=False, default="")
    license_expiry = Column(DateTime(timezone=True), nullable=True)
    vehicle_type = Column(String(64), nullable=False, default="")
    vehicle_number = Column(String(64), nullable=False, default="")
    status = Column(String(32), nullable=False, index=True)
    is_available = Column(Boolean, nullable=False, default=False)
    approval_notes = Column(Text, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(String(36), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    rejected_at = Column(DateTime(timezone=True), nullable=True)
    rejected_by = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("UserRecord", back_populates="driver_profile")
    documents = relationship(
        "DriverDocumentRecord",
        order_by="DriverDocumentRecord.position",
        cascade="all, delete-orphan",
        back_populates="profile",
    )


class RiderProfileRecord(ModelBase):
    __tablename__ = "rider_profiles"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    profile_picture = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("UserRecord", back_populates="rider_profile")


class DriverDocumentRecord(ModelBase):
    __tablename__ = "driver_documents"
    __table_args__ = (UniqueConstraint("driver_id", "position"),)

    id = Column(String(36), primary_key=True)
    driver_id = Column(String(36), ForeignKey("driver_profiles.user_id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    type = Column(String(32), nullable=False)
    url = Column(String(512), nullable=True)
    status = Column(String(16), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)
    verification_notes = Column(Text, nullable=True)

    profile = relationship("DriverProfileRecord", back_populates="documents")
