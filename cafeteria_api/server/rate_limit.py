"""
Request rate limiting.

A single slowapi ``Limiter`` keyed on the client address. The default limit
applies to every route through ``SlowAPIMiddleware``; login and registration
endpoints carry stricter limits via ``limiter.limit``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from cafeteria_api.server.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit.default],
    enabled=settings.rate_limit.enabled,
)

AUTH_LIMIT = settings.rate_limit.auth
REGISTER_LIMIT = settings.rate_limit.register
