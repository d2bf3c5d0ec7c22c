"""
Common Exception Classes

This module defines the error taxonomy shared by the HTTP layer:

- ``AppError``: an anticipated business-rule failure with an explicit
  HTTP status code (401, 403, 404, 409, ...).
- ``RequestValidationFailed``: malformed or out-of-range input, always 400,
  carrying one ``{"field", "message"}`` entry per violated field.

Anything else that escapes a handler is treated as unexpected and is
translated to an opaque 500 response.
"""

from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for domain errors that map onto an HTTP status."""

    def __init__(self, status_code: int, message: str):
        """
        Initialize the exception.

        Args:
            status_code: HTTP status code to respond with
            message: Human-readable message, safe to show to clients
        """
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class RequestValidationFailed(Exception):
    """Exception raised when a request payload violates its schema."""

    message = "Validation error"
    status_code = 400

    def __init__(self, details: Optional[List[Dict[str, str]]] = None):
        """
        Initialize the validation error.

        Args:
            details: List of ``{"field": dotted-path, "message": text}`` entries
        """
        super().__init__(self.message)
        self.details = details or []


class StoreError(Exception):
    """Exception raised when a store backend fails unexpectedly."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(f"Store error: {message}")
        self.message = message
        self.original_exception = original_exception
