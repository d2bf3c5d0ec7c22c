"""
Account operations: signup, login, token refresh and the current-user view.
"""

import functools
from typing import Any, Dict

from ridehub.common.auth.jwt import (
    generate_access_token,
    generate_id,
    generate_refresh_token,
    verify_refresh_token,
)
from ridehub.common.auth.password import get_hash_iterations, hash_password, verify_password
from ridehub.common.auth.user import TokenClaims, UserRole, UserStatus
from ridehub.common.logger import get_logger
from ridehub.domain.models import DriverProfile, RiderProfile, User
from ridehub.domain.schemas import LoginRequest, RefreshTokenRequest, SignupRequest
from ridehub.services.results import Failure, Outcome
from ridehub.store.base import DuplicateEmailError, UserStore

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@functools.lru_cache(maxsize=None)
def _dummy_hash(iterations: int) -> str:
    return hash_password("ridehub-unknown-user")


def unknown_user_hash() -> str:
    """
    Hash compared against when the email is unknown.

    Built with the current iteration count so both login failures cost the same.
    """
    return _dummy_hash(get_hash_iterations())


def issue_tokens(claims: TokenClaims) -> Dict[str, str]:
    """Issue an access/refresh token pair for the given claims."""
    return {
        "accessToken": generate_access_token(claims),
        "refreshToken": generate_refresh_token(claims),
    }


def signup(store: UserStore, request: SignupRequest) -> Outcome[Dict[str, Any]]:
    """
    Register a rider or driver.

    Creates the identity with status active and an unverified email, plus
    the role profile: drivers start pending approval and unavailable.
    """
    if store.get_user_by_email(request.email) is not None:
        return Failure.conflict("Email already registered")

    user_id = generate_id()
    user = User(
        id=user_id,
        email=request.email,
        password=hash_password(request.password),
        first_name=request.first_name,
        last_name=request.last_name,
        phone_number=request.phone_number,
        role=UserRole(request.role),
        status=UserStatus.ACTIVE,
        email_verified=False,
    )
    if user.role == UserRole.DRIVER:
        profile = DriverProfile(user_id=user_id)
    else:
        profile = RiderProfile(user_id=user_id)

    try:
        created = store.create_user(user, profile)
    except DuplicateEmailError:
        return Failure.conflict("Email already registered")

    logger.info(f"Registered {created.role.value} {created.id}")
    return {**issue_tokens(created.claims()), "user": created.summary()}


def login(store: UserStore, request: LoginRequest) -> Outcome[Dict[str, Any]]:
    """
    Authenticate with email and password.

    Unknown emails and wrong passwords produce the same failure.
    """
    user = store.get_user_by_email(request.email)
    if user is None:
        verify_password(request.password, unknown_user_hash())
        logger.info("Login failed: invalid credentials")
        return Failure.unauthorized(INVALID_CREDENTIALS)

    if not verify_password(request.password, user.password):
        logger.info("Login failed: invalid credentials")
        return Failure.unauthorized(INVALID_CREDENTIALS)

    if user.status in (UserStatus.REJECTED, UserStatus.INACTIVE):
        logger.info(f"Login refused for {user.status.value} account {user.id}")
        return Failure.forbidden("Account is not active")

    logger.info(f"User {user.id} logged in ({user.role.value})")
    return {**issue_tokens(user.claims()), "user": user.summary()}


def refresh(store: UserStore, request: RefreshTokenRequest) -> Outcome[Dict[str, str]]:
    """
    Exchange a refresh token for a new token pair.

    The new tokens carry the identity's current stored role and status,
    not the claims of the presented token.
    """
    claims = verify_refresh_token(request.refresh_token)
    if claims is None:
        return Failure.unauthorized("Invalid or expired refresh token")

    user = store.get_user(claims.id)
    if user is None:
        return Failure.unauthorized("User not found")

    if user.status != claims.status or user.role != claims.role:
        logger.info(f"Refreshed tokens for {user.id} with updated claims")
    return issue_tokens(user.claims())


def current_user(store: UserStore, user_id: str) -> Outcome[Dict[str, Any]]:
    """Public projection of the authenticated user."""
    user = store.get_user(user_id)
    if user is None:
        return Failure.not_found("User not found")

    projection = user.to_public_dict()
    for key in ("emailVerifiedAt", "createdAt", "updatedAt"):
        projection.pop(key)
    return projection
