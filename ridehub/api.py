"""
Error translation and response helpers for the RideHub API.

This module provides:
- ``respond``, which renders a handler outcome, turning a ``Failure`` into
  the ``{"error": message}`` envelope
- Exception handlers that map every error class onto the same envelope:
  domain errors keep their status and message, validation errors become
  400 with field details, and anything unexpected becomes an opaque 500
"""

import json
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ridehub.common.exceptions import AppError, RequestValidationFailed
from ridehub.common.logger import get_logger
from ridehub.common.validation import format_validation_errors
from ridehub.services.results import Failure

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_JSON_MESSAGE = "Request body must be valid JSON"


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def respond(outcome: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Render a handler outcome as a JSON response.

    Args:
        outcome: A success value or a ``Failure``
        status_code: Status to use on success
    """
    if isinstance(outcome, Failure):
        return error_response(outcome.status_code, outcome.message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(outcome))


async def json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Declared as a route dependency so that it runs after the route's
    authentication and authorization dependencies.

    Returns:
        The decoded value, or None if the body is empty

    Raises:
        RequestValidationFailed: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise RequestValidationFailed([{"field": "body", "message": INVALID_JSON_MESSAGE}])


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def validation_failed_handler(request: Request, exc: RequestValidationFailed) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON bodies and bad query or path parameters."""
    details = format_validation_errors(exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, RequestValidationFailed.message, details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors such as unknown paths or methods."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error translation layer on an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
