"""
Security utilities for authentication.

Provides password hashing and JWT access token generation and validation
for both customer accounts and seller (staff) accounts.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from cafeteria_api.server.core.config import settings

from .constants import PrincipalKind
from .errors import AuthenticationError
from .logging_config import get_logger

logger = get_logger(__name__)


# ==================== PASSWORD HASHING ====================


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt(rounds=settings.auth.password_hash_rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        password: Plain text password to verify
        hashed_password: Stored hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification failed: {e}")
        return False


# ==================== JWT TOKENS ====================


def create_access_token(
    subject_id: int,
    kind: PrincipalKind,
    role: str,
    expires_minutes: Optional[int] = None,
    additional_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        subject_id: Primary key of the user or seller
        kind: Whether the token belongs to a user or a seller
        role: Primary role name recorded in the token
        expires_minutes: Override the configured lifetime for this kind
        additional_claims: Optional additional claims to include

    Returns:
        Encoded JWT access token
    """
    auth = settings.auth
    if expires_minutes is None:
        expires_minutes = (
            auth.seller_token_expire_minutes if kind == PrincipalKind.SELLER else auth.user_token_expire_minutes
        )

    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=expires_minutes)

    payload: Dict[str, Any] = {
        "sub": str(subject_id),
        "kind": kind.value,
        "role": role,
        "iat": now,
        "exp": expire,
    }
    if additional_claims:
        payload.update(additional_claims)

    token = jwt.encode(payload, auth.secret_key, algorithm=auth.algorithm)

    logger.debug(f"Created {kind.value} access token for id {subject_id}, expires at {expire}")
    return token


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string

    Returns:
        Decoded payload

    Raises:
        AuthenticationError: ``TOKEN_EXPIRED`` or ``INVALID_TOKEN``
    """
    auth = settings.auth
    try:
        payload = jwt.decode(token, auth.secret_key, algorithms=[auth.algorithm])
    except ExpiredSignatureError as e:
        logger.debug("Access token expired")
        raise AuthenticationError("Token has expired", code="TOKEN_EXPIRED") from e
    except InvalidTokenError as e:
        logger.warning(f"Invalid access token: {e}")
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN") from e

    if payload.get("kind") not in {k.value for k in PrincipalKind} or not str(payload.get("sub", "")).isdigit():
        logger.warning("Access token carries an unknown kind or subject")
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN")

    return payload
