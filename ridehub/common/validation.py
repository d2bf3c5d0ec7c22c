"""
Data Validation Utilities for RideHub

This module provides:
1. Reusable field checks that raise field-scoped, human-readable errors
2. A base schema class with the API's camelCase, non-strict conventions
3. Conversion of pydantic errors into the API's ``details`` entries
4. ``validate_payload`` for running a schema before any store access
"""

import re
import logging
from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ridehub.common.exceptions import RequestValidationFailed

# Type variables
T = TypeVar('T', bound=BaseModel)

logger = logging.getLogger(__name__)

# Regex patterns for common validation
PATTERNS = {
    "email": r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$",
    "iso_date": r"^\d{4}-\d{2}-\d{2}",
}

_EMAIL_RE = re.compile(PATTERNS["email"])
_ISO_DATE_RE = re.compile(PATTERNS["iso_date"])


class RequestSchema(BaseModel):
    """
    Base class for request payload schemas.

    Fields are declared in snake_case and accepted in camelCase. Unknown
    fields are ignored rather than rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def email_address(value: str) -> str:
    """Check an email address and normalize it for case-insensitive comparison."""
    normalized = value.strip().lower()
    if not _EMAIL_RE.match(normalized):
        raise PydanticCustomError("invalid_email", "Invalid email address")
    return normalized


def min_length(value: str, length: int, message: str) -> str:
    """Check that a string has at least ``length`` characters."""
    if len(value) < length:
        raise PydanticCustomError("too_short", message)
    return value


def strict_bool(value: Any, field_name: str) -> bool:
    """Accept only real JSON booleans, never truthy strings or numbers."""
    if not isinstance(value, bool):
        raise PydanticCustomError("bool_type", f"{field_name} must be a boolean")
    return value


def datetime_string(value: Any, field_name: str) -> str:
    """Accept only ISO-8601 strings for datetimes, never numeric timestamps."""
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise PydanticCustomError("datetime_type", f"{field_name} must be an ISO-8601 datetime string")
    return value


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert pydantic error dictionaries into ``{"field", "message"}`` entries.

    The leading ``body`` location segment added by FastAPI is dropped so the
    field path matches the payload's own keys. An error on the payload as a
    whole is reported against ``body``.
    """
    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if error.get("type") == "json_invalid":
            # The location holds a character offset, not a field
            location = ["body"]
        elif location and location[0] in ("body", "query", "path"):
            location = location[1:] or location[:1]
        details.append({
            "field": ".".join(location) if location else "body",
            "message": error.get("msg", "Invalid value"),
        })
    return details


def validate_payload(schema: Type[T], payload: Any) -> T:
    """
    Validate a request payload against a schema.

    Args:
        schema: Schema class to validate against
        payload: Decoded JSON body (any JSON value, or None if absent)

    Returns:
        The validated schema instance

    Raises:
        RequestValidationFailed: With one entry per violated field
    """
    try:
        return schema.model_validate(payload if payload is not None else {})
    except ValidationError as e:
        details = format_validation_errors(e.errors())
        logger.debug(f"{schema.__name__} rejected: {details}")
        raise RequestValidationFailed(details)
