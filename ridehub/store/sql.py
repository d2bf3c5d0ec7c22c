"""
Relational Store

SQLAlchemy-backed implementation of the user store. Every public
operation runs in its own session transaction: it commits as a whole or
rolls back as a whole, which makes driver rejection (profile update plus
account lock) atomic.
"""

import datetime
import enum
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker
from sqlalchemy.pool import StaticPool

from ridehub.common.auth.user import UserRole, UserStatus
from ridehub.common.exceptions import StoreError
from ridehub.common.logger import get_logger
from ridehub.database.base import Base
from ridehub.database.models import (
    DriverDocumentRecord,
    DriverProfileRecord,
    RiderProfileRecord,
    UserRecord,
)
from ridehub.domain.models import (
    DocumentStatus,
    DocumentType,
    DriverDocument,
    DriverProfile,
    DriverStatus,
    RiderProfile,
    User,
    utcnow,
)
from ridehub.store.base import DuplicateEmailError, RoleProfile, UserStore

logger = get_logger(__name__)


def get_engine_kwargs(database_url: str, echo: bool = False) -> Dict[str, Any]:
    """
    Get engine keyword arguments based on database type.
    Different databases support different connection options.
    """
    kwargs: Dict[str, Any] = {"echo": echo}

    if database_url.startswith("sqlite"):
        # Routes run in a threadpool; in-memory databases must share one connection
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    elif database_url.startswith("postgresql"):
        kwargs.update({
            "pool_pre_ping": True,
            "pool_recycle": 300,  # Recycle connections every 5 minutes
        })

    return kwargs


def _aware(value: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
    # SQLite drops tzinfo on the way back out
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def _column_values(changes: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value.value if isinstance(value, enum.Enum) else value
        for key, value in changes.items()
    }


def _to_user(record: UserRecord) -> User:
    return User(
        id=record.id,
        email=record.email,
        password=record.password,
        first_name=record.first_name,
        last_name=record.last_name,
        phone_number=record.phone_number,
        role=UserRole(record.role),
        status=UserStatus(record.status),
        email_verified=record.email_verified,
        email_verified_at=_aware(record.email_verified_at),
        created_at=_aware(record.created_at),
        updated_at=_aware(record.updated_at),
    )


def _to_document(record: DriverDocumentRecord) -> DriverDocument:
    return DriverDocument(
        id=record.id,
        type=DocumentType(record.type),
        url=record.url,
        status=DocumentStatus(record.status),
        uploaded_at=_aware(record.uploaded_at),
        verification_notes=record.verification_notes,
    )


def _to_driver_profile(record: DriverProfileRecord) -> DriverProfile:
    return DriverProfile(
        user_id=record.user_id,
        license_number=record.license_number,
        license_expiry=_aware(record.license_expiry),
        vehicle_type=record.vehicle_type,
        vehicle_number=record.vehicle_number,
        status=DriverStatus(record.status),
        is_available=record.is_available,
        documents=[_to_document(document) for document in record.documents],
        approval_notes=record.approval_notes,
        approved_at=_aware(record.approved_at),
        approved_by=record.approved_by,
        rejection_reason=record.rejection_reason,
        rejected_at=_aware(record.rejected_at),
        rejected_by=record.rejected_by,
        created_at=_aware(record.created_at),
        updated_at=_aware(record.updated_at),
    )


def _to_rider_profile(record: RiderProfileRecord) -> RiderProfile:
    return RiderProfile(
        user_id=record.user_id,
        profile_picture=record.profile_picture,
        created_at=_aware(record.created_at),
        updated_at=_aware(record.updated_at),
    )


def _driver_profile_record(profile: DriverProfile) -> DriverProfileRecord:
    record = DriverProfileRecord(
        user_id=profile.user_id,
        license_number=profile.license_number,
        license_expiry=profile.license_expiry,
        vehicle_type=profile.vehicle_type,
        vehicle_number=profile.vehicle_number,
        status=profile.status.value,
        is_available=profile.is_available,
        approval_notes=profile.approval_notes,
        approved_at=profile.approved_at,
        approved_by=profile.approved_by,
        rejection_reason=profile.rejection_reason,
        rejected_at=profile.rejected_at,
        rejected_by=profile.rejected_by,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
    record.documents = [
        _document_record(document, position)
        for position, document in enumerate(profile.documents)
    ]
    return record


def _document_record(document: DriverDocument, position: int) -> DriverDocumentRecord:
    return DriverDocumentRecord(
        id=document.id,
        position=position,
        type=document.type.value,
        url=document.url,
        status=document.status.value,
        uploaded_at=document.uploaded_at,
        verification_notes=document.verification_notes,
    )


class SQLStore(UserStore):
    """User store on a relational database via the SQLAlchemy ORM."""

    def __init__(self, database_url: str, echo: bool = False, engine: Optional[Engine] = None):
        self._engine = engine or create_engine(database_url, **get_engine_kwargs(database_url, echo))
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self._engine)
        logger.info("Store schema ready")

    def close(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """
        Open a session that commits on success and rolls back on any error.

        Raises:
            StoreError: If the database reports an error
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store transaction failed: {e}")
            raise StoreError(str(e), e)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _driver_query(self):
        return select(DriverProfileRecord).options(selectinload(DriverProfileRecord.documents))

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        with self._transaction() as session:
            record = session.get(UserRecord, user_id)
            return _to_user(record) if record else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._transaction() as session:
            record = session.scalars(
                select(UserRecord).where(UserRecord.email == email.lower())
            ).first()
            return _to_user(record) if record else None

    def list_users(
        self,
        role: Optional[UserRole] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[User]:
        query = select(UserRecord).order_by(UserRecord.created_at.desc())
        if role is not None:
            query = query.where(UserRecord.role == role.value)
        query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        with self._transaction() as session:
            return [_to_user(record) for record in session.scalars(query)]

    def create_user(self, user: User, profile: Optional[RoleProfile] = None) -> User:
        email = user.email.lower()
        record = UserRecord(
            id=user.id,
            email=email,
            password=user.password,
            first_name=user.first_name,
            last_name=user.last_name,
            phone_number=user.phone_number,
            role=user.role.value,
            status=user.status.value,
            email_verified=user.email_verified,
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        if isinstance(profile, DriverProfile):
            record.driver_profile = _driver_profile_record(profile)
        elif isinstance(profile, RiderProfile):
            record.rider_profile = RiderProfileRecord(
                user_id=profile.user_id,
                profile_picture=profile.profile_picture,
                created_at=profile.created_at,
                updated_at=profile.updated_at,
            )

        try:
            with self._transaction() as session:
                existing = session.scalar(select(UserRecord.id).where(UserRecord.email == email))
                if existing is not None:
                    raise DuplicateEmailError(email)
                session.add(record)
                session.flush()
                created = _to_user(record)
        except StoreError as e:
            # A concurrent signup can still win the unique index
            if isinstance(e.original_exception, IntegrityError):
                raise DuplicateEmailError(email)
            raise

        logger.debug(f"Created user {created.id} ({created.role.value})")
        return created

    def update_user(self, user_id: str, **changes) -> Optional[User]:
        if "email" in changes:
            changes["email"] = changes["email"].lower()

        with self._transaction() as session:
            record = session.get(UserRecord, user_id)
            if record is None:
                return None
            record.update(_column_values(changes))
            record.updated_at = utcnow()
            session.flush()
            return _to_user(record)

    # Role profiles

    def get_driver_profile(self, user_id: str) -> Optional[DriverProfile]:
        with self._transaction() as session:
            record = session.scalars(
                self._driver_query().where(DriverProfileRecord.user_id == user_id)
            ).first()
            return _to_driver_profile(record) if record else None

    def list_driver_profiles(self, status: Optional[DriverStatus] = None) -> List[DriverProfile]:
        query = self._driver_query().order_by(DriverProfileRecord.created_at.desc())
        if status is not None:
            query = query.where(DriverProfileRecord.status == status.value)

        with self._transaction() as session:
            return [_to_driver_profile(record) for record in session.scalars(query)]

    def update_driver_profile(self, user_id: str, **changes) -> Optional[DriverProfile]:
        with self._transaction() as session:
            record = session.get(DriverProfileRecord, user_id)
            if record is None:
                return None
            record.update(_column_values(changes))
            record.updated_at = utcnow()
            session.flush()
            return _to_driver_profile(record)

    def get_rider_profile(self, user_id: str) -> Optional[RiderProfile]:
        with self._transaction() as session:
            record = session.get(RiderProfileRecord, user_id)
            return _to_rider_profile(record) if record else None

    # Documents

    def add_driver_document(self, user_id: str, document: DriverDocument) -> Optional[DriverDocument]:
        with self._transaction() as session:
            # Row lock serializes appends per driver; the unique (driver_id, position)
            # constraint rejects a duplicate position where locks are unsupported
            profile = session.get(DriverProfileRecord, user_id, with_for_update=True)
            if profile is None:
                return None
            position = session.scalar(
                select(func.coalesce(func.max(DriverDocumentRecord.position), -1) + 1)
                .where(DriverDocumentRecord.driver_id == user_id)
            )
            record = _document_record(document, position)
            profile.documents.append(record)
            profile.updated_at = utcnow()
            session.flush()
            return _to_document(record)

    def get_driver_documents(self, user_id: str) -> List[DriverDocument]:
        query = (
            select(DriverDocumentRecord)
            .where(DriverDocumentRecord.driver_id == user_id)
            .order_by(DriverDocumentRecord.position)
        )
        with self._transaction() as session:
            return [_to_document(record) for record in session.scalars(query)]

    # Review

    def reject_driver(self, user_id: str, reason: str, rejected_by: str) -> Optional[DriverProfile]:
        with self._transaction() as session:
            profile = session.get(DriverProfileRecord, user_id)
            user = session.get(UserRecord, user_id)
            if profile is None or user is None:
                return None

            now = utcnow()
            profile.status = DriverStatus.REJECTED.value
            profile.rejection_reason = reason
            profile.rejected_at = now
            profile.rejected_by = rejected_by
            profile.updated_at = now
            user.status = UserStatus.REJECTED.value
            user.updated_at = now
            session.flush()
            return _to_driver_profile(profile)
