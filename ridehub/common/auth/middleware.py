"""
Authentication Middleware

This module provides the request-level authentication and authorization
checks, independent of the web framework:

- ``authenticate`` turns an Authorization header into an ``AuthContext``
  or rejects the request (401).
- ``authorize_role`` compares the context's role claim with the roles an
  endpoint allows (403 on mismatch).
- ``ensure_active_account`` re-reads the stored identity and refuses
  accounts that are no longer active, whatever their token says (403).
"""

from typing import Iterable, Optional

from ridehub.common.auth.exceptions import (
    AccountNotActiveError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from ridehub.common.auth.jwt import verify_access_token
from ridehub.common.auth.user import AuthContext, UserRole, UserStatus
from ridehub.common.logger import get_logger
from ridehub.domain.models import User
from ridehub.store.base import UserStore

logger = get_logger(__name__)


def extract_token_from_header(auth_header: Optional[str]) -> Optional[str]:
    """
    Extract a JWT token from an Authorization header.

    Args:
        auth_header: The Authorization header value

    Returns:
        The JWT token or None if not found
    """
    if not auth_header:
        return None

    parts = auth_header.split()

    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None

    return parts[1]


def authenticate(auth_header: Optional[str]) -> AuthContext:
    """
    Authenticate a request using the Authorization header.

    Args:
        auth_header: The Authorization header value

    Returns:
        The authenticated context for this request

    Raises:
        MissingTokenError: If no bearer token is provided
        InvalidTokenError: If the token is invalid or has expired
    """
    token = extract_token_from_header(auth_header)

    if not token:
        raise MissingTokenError()

    claims = verify_access_token(token)
    if claims is None:
        raise InvalidTokenError()

    return AuthContext(claims=claims, access_token=token)


def authorize_role(context: AuthContext, roles: Iterable[UserRole]) -> AuthContext:
    """
    Require the authenticated role to be one of ``roles``.

    Raises:
        InsufficientPermissionsError: If the role is not allowed
    """
    allowed = set(roles)
    if context.role not in allowed:
        logger.warning(
            f"User {context.id} with role {context.role.value} denied; "
            f"requires {sorted(role.value for role in allowed)}"
        )
        raise InsufficientPermissionsError()
    return context


def ensure_active_account(store: UserStore, context: AuthContext) -> User:
    """
    Require the stored account behind ``context`` to be active.

    The check uses the current stored status rather than the token claim,
    so a still-valid token for a deactivated or rejected account is refused.

    Raises:
        UserNotFoundError: If the account no longer exists
        AccountNotActiveError: If the account is not active
    """
    user = store.get_user(context.id)
    if user is None:
        raise UserNotFoundError()
    if user.status != UserStatus.ACTIVE:
        logger.warning(f"User {user.id} blocked: account is {user.status.value}")
        raise AccountNotActiveError()
    return user
