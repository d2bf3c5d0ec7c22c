"""
Admin bootstrap.

Admins cannot sign up through the API, so the first admin account is
created on startup from configuration.
"""

from typing import Optional

from ridehub.common.auth.jwt import generate_id
from ridehub.common.auth.password import hash_password
from ridehub.common.auth.user import UserRole, UserStatus
from ridehub.common.logger import get_logger
from ridehub.domain.models import User
from ridehub.store.base import DuplicateEmailError, UserStore

logger = get_logger(__name__)


def ensure_admin(store: UserStore, email: Optional[str], password: Optional[str]) -> Optional[User]:
    """
    Make sure an admin account exists for ``email``.

    An existing account with that email is left untouched, whatever its
    role. Nothing happens unless both email and password are configured.

    Returns:
        The admin created, or None if none was created
    """
    if not email or not password:
        return None

    existing = store.get_user_by_email(email)
    if existing is not None:
        if existing.role != UserRole.ADMIN:
            logger.warning(f"Bootstrap admin email belongs to a {existing.role.value} account; skipping")
        return None

    admin = User(
        id=generate_id(),
        email=email.lower(),
        password=hash_password(password),
        first_name="Admin",
        last_name="User",
        phone_number="",
        role=UserRole.ADMIN,
        status=UserStatus.ACTIVE,
        email_verified=True,
    )
    try:
        created = store.create_user(admin)
    except DuplicateEmailError:
        return None

    logger.info(f"Created bootstrap admin {created.id}")
    return created
