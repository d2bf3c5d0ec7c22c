"""
Authentication Framework

This package provides JWT-based authentication and role-based authorization
for the API. The request guards live in ``middleware`` and their FastAPI
wrappers in ``dependencies``; import those modules directly.
"""

from ridehub.common.auth.user import (
    UserRole,
    UserStatus,
    TokenClaims,
    AuthContext
)

from ridehub.common.auth.jwt import (
    generate_access_token,
    generate_refresh_token,
    verify_access_token,
    verify_refresh_token,
    TokenType,
    JWTConfig
)

from ridehub.common.auth.password import (
    hash_password,
    verify_password
)

from ridehub.common.auth.exceptions import (
    AuthError,
    MissingTokenError,
    InvalidTokenError,
    InsufficientPermissionsError,
    AccountNotActiveError,
    UserNotFoundError
)

# Public API
__all__ = [
    # User models
    'UserRole',
    'UserStatus',
    'TokenClaims',
    'AuthContext',

    # JWT tokens
    'generate_access_token',
    'generate_refresh_token',
    'verify_access_token',
    'verify_refresh_token',
    'TokenType',
    'JWTConfig',

    # Password utilities
    'hash_password',
    'verify_password',

    # Exceptions
    'AuthError',
    'MissingTokenError',
    'InvalidTokenError',
    'InsufficientPermissionsError',
    'AccountNotActiveError',
    'UserNotFoundError',
]
