"""
Authentication Exceptions

This module defines custom exception classes for authentication and authorization errors.
"""

from ridehub.common.exceptions import AppError


class AuthError(AppError):
    """Base exception for authentication and authorization errors."""

    def __init__(self, message: str = "Authentication error", status_code: int = 401):
        super().__init__(status_code, message)


class MissingTokenError(AuthError):
    """Exception raised when a required token is missing."""

    def __init__(self, message: str = "No authentication token provided"):
        super().__init__(message, status_code=401)


class InvalidTokenError(AuthError):
    """Exception raised when a token is invalid or has expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, status_code=401)


class InsufficientPermissionsError(AuthError):
    """Exception raised when a user does not have sufficient permissions."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, status_code=403)


class AccountNotActiveError(AuthError):
    """Exception raised when a user account is not active."""

    def __init__(self, message: str = "Account is not active"):
        super().__init__(message, status_code=403)


class UserNotFoundError(AuthError):
    """Exception raised when the authenticated user no longer exists."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, status_code=401)
