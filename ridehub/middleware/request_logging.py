"""
Request Logging Middleware

Logs one line per API request with method, path, status and duration.
Authorization headers and bodies are never logged.
"""

import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from ridehub.common.logger import get_logger

# Setup module logger
logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log API requests."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Skip liveness probes
        if path == "/health":
            return await call_next(request)

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            duration = time.time() - start_time
            logger.error(f"{request.method} {path} failed after {duration:.3f}s, ip={client_ip}")
            raise

        duration = time.time() - start_time
        logger.info(
            f"{request.method} {path} -> {response.status_code} in {duration:.3f}s, ip={client_ip}",
            extra={"data": {
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration": round(duration, 3),
            }},
        )
        return response
