"""Cafeteria API client.

Exposes an async HTTP client with response caching and in-flight request
de-duplication, plus the typed errors it raises.
"""

from .api_client import CafeteriaApiClient
from .errors import CafeteriaApiError, ResourceNotFoundError

__all__ = [
    "CafeteriaApiClient",
    "CafeteriaApiError",
    "ResourceNotFoundError",
]
