"""Domain error types for the cafeteria API.

Purpose:
- Provide typed exceptions raised by services and request dependencies.
- Carry an HTTP status, a machine-readable ``code`` and optional ``details``
  so the server can render them without the service layer knowing about HTTP.

Usage:
- Raise ``NotFoundError`` when a referenced row does not exist.
- Raise ``BusinessRuleError`` when a request is well-formed but violates a
  domain rule (empty cart, insufficient stock, closed order).
- Raise ``ConflictError`` for uniqueness violations.
- Raise ``AuthenticationError``/``PermissionDeniedError`` from auth dependencies.
"""

from __future__ import annotations

from typing import Any, Optional


class CafeteriaError(Exception):
    """Base error for domain failures.

    Args:
        message: Human-readable error description.
        code: Optional machine-readable error code (e.g. ``TOKEN_EXPIRED``).
        details: Optional structured payload for the client.
    """

    status_code: int = 400

    def __init__(self, message: str, *, code: Optional[str] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class NotFoundError(CafeteriaError):
    """Raised when a referenced resource does not exist (HTTP 404)."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Any) -> None:
        super().__init__(f"{resource} {resource_id} not found", code="NOT_FOUND")
        self.resource = resource
        self.resource_id = resource_id


class BusinessRuleError(CafeteriaError):
    """Raised when a request violates a domain rule (HTTP 400)."""

    status_code = 400


class ConflictError(CafeteriaError):
    """Raised when a uniqueness constraint would be violated (HTTP 409)."""

    status_code = 409


class AuthenticationError(CafeteriaError):
    """Raised when the caller cannot be authenticated (HTTP 401)."""

    status_code = 401


class PermissionDeniedError(CafeteriaError):
    """Raised when the caller is authenticated but not allowed (HTTP 403)."""

    status_code = 403

    def __init__(
        self,
        message: str = "Insufficient permissions",
        *,
        code: str = "INSUFFICIENT_PERMISSIONS",
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
