"""Error types raised by the Cafeteria API client.

Purpose:
- Provide typed exceptions thrown by `CafeteriaApiClient`.
- Expose the server's error envelope (``detail``, ``code``, ``details``)
  together with the HTTP status code for diagnosis.

Usage:
- Catch `CafeteriaApiError` for general failures and inspect `status_code`,
  `code` or `details`.
- Catch `ResourceNotFoundError` when a lookup returns 404.
"""

from __future__ import annotations

from typing import Any, Optional


class CafeteriaApiError(Exception):
    """Base error for Cafeteria API failures.

    Args:
        message: Human-readable error description (the server's ``detail``).
        status_code: HTTP status code associated with the failure.
        code: Machine-readable error code from the server, if any.
        details: Optional structured payload from the server.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, code={self.code!r}, message={self.message!r})"


class ResourceNotFoundError(CafeteriaApiError):
    """Raised when the requested resource does not exist (HTTP 404)."""
