"""
JWT Authentication Module

This module provides utilities for JWT-based authentication: issuing
short-lived access tokens and longer-lived refresh tokens, and verifying
them. Verification never raises; any failure (expired, malformed, bad
signature, wrong token type, missing claims) yields ``None`` so callers can
treat it uniformly as "unauthenticated".
"""

import datetime
import enum
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Using PyJWT for JWT operations
import jwt

from ridehub.common.auth.user import TokenClaims
from ridehub.common.logger import get_logger

logger = get_logger(__name__)


class TokenType(enum.Enum):
    """Types of JWT tokens supported by the system."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass
class JWTConfig:
    """
    Configuration for JWT tokens.

    Attributes:
        secret_key: Secret key used for signing access tokens
        refresh_secret_key: Secret key used for signing refresh tokens
        algorithm: Algorithm used for signing tokens
        access_token_expires: Access token expiration time in minutes
        refresh_token_expires: Refresh token expiration time in days
        token_issuer: Issuer of the tokens
    """
    secret_key: str
    refresh_secret_key: str
    algorithm: str = "HS256"
    access_token_expires: int = 15  # minutes
    refresh_token_expires: int = 7  # days
    token_issuer: str = "ridehub-api"

    def signing_key(self, token_type: TokenType) -> str:
        if token_type == TokenType.REFRESH:
            return self.refresh_secret_key
        return self.secret_key

    def lifetime(self, token_type: TokenType) -> datetime.timedelta:
        if token_type == TokenType.REFRESH:
            return datetime.timedelta(days=self.refresh_token_expires)
        return datetime.timedelta(minutes=self.access_token_expires)


# Global JWT configuration, replaced by the application factory
_jwt_config = JWTConfig(
    secret_key="dev-access-secret",
    refresh_secret_key="dev-refresh-secret",
)


def set_jwt_config(config: JWTConfig) -> None:
    """
    Set the global JWT configuration.

    Args:
        config: The JWT configuration to use
    """
    global _jwt_config
    _jwt_config = config


def get_jwt_config() -> JWTConfig:
    """Get the current JWT configuration."""
    return _jwt_config


def generate_id() -> str:
    """Generate a new opaque identifier for users and documents."""
    return str(uuid.uuid4())


def _encode(claims: TokenClaims, token_type: TokenType) -> str:
    config = get_jwt_config()
    now = datetime.datetime.now(datetime.timezone.utc)

    payload: Dict[str, Any] = {
        "sub": claims.id,
        "iat": now,
        "exp": now + config.lifetime(token_type),
        "iss": config.token_issuer,
        "type": token_type.value,
        # jti keeps tokens issued within the same second distinct
        "jti": generate_id(),
    }
    payload.update(claims.to_dict())

    return jwt.encode(payload, config.signing_key(token_type), algorithm=config.algorithm)


def generate_access_token(claims: TokenClaims) -> str:
    """
    Create a new JWT access token.

    Args:
        claims: Identity claims (id, email, role, status)

    Returns:
        The signed access token
    """
    return _encode(claims, TokenType.ACCESS)


def generate_refresh_token(claims: TokenClaims) -> str:
    """
    Create a new JWT refresh token.

    Args:
        claims: Identity claims (id, email, role, status)

    Returns:
        The signed refresh token
    """
    return _encode(claims, TokenType.REFRESH)


def _verify(token: str, token_type: TokenType) -> Optional[TokenClaims]:
    config = get_jwt_config()

    try:
        payload = jwt.decode(
            token,
            config.signing_key(token_type),
            algorithms=[config.algorithm],
            issuer=config.token_issuer,
            options={"require": ["exp", "iat", "sub", "type"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info(f"Rejected expired {token_type.value} token")
        return None
    except jwt.PyJWTError as e:
        logger.info(f"Rejected invalid {token_type.value} token: {e}")
        return None

    if payload.get("type") != token_type.value:
        logger.info(f"Rejected token of type {payload.get('type')!r}, expected {token_type.value}")
        return None

    try:
        return TokenClaims.from_dict(payload)
    except (KeyError, ValueError) as e:
        logger.info(f"Rejected token with malformed claims: {e}")
        return None


def verify_access_token(token: str) -> Optional[TokenClaims]:
    """
    Verify an access token.

    Returns:
        The token claims, or None if the token cannot be trusted
    """
    return _verify(token, TokenType.ACCESS)


def verify_refresh_token(token: str) -> Optional[TokenClaims]:
    """
    Verify a refresh token.

    Returns:
        The token claims, or None if the token cannot be trusted
    """
    return _verify(token, TokenType.REFRESH)
