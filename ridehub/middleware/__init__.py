"""
Middleware Package

This package contains middleware components for the RideHub API.
"""

from ridehub.middleware.request_logging import RequestLoggingMiddleware

__all__ = ['RequestLoggingMiddleware']
