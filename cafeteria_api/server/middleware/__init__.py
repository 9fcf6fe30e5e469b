"""
Middleware modules for the Cafeteria API server.

This package contains custom middleware for request/response logging
and other cross-cutting concerns.
"""

from .request_tracing_middleware import RequestTracingMiddleware

__all__ = ["RequestTracingMiddleware"]
