"""
Common Components for RideHub

This package contains infrastructure shared across the service:

1. Authentication - Tokens, password hashing and request guards
2. Logging - Centralized logging configuration
3. Error Handling - The error taxonomy translated by the HTTP layer
4. Validation - Request payload schemas and error formatting
"""

# Initialize logging
from ridehub.common.logger import app_logger

from ridehub.common.exceptions import AppError, RequestValidationFailed, StoreError

__all__ = [
    'app_logger',
    'AppError',
    'RequestValidationFailed',
    'StoreError',
]
