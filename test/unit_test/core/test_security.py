"""Unit tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from cafeteria_api.core.constants import PrincipalKind
from cafeteria_api.core.errors import AuthenticationError
from cafeteria_api.core.security import create_access_token, decode_access_token, hash_password, verify_password
from cafeteria_api.server.core.config import settings


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("cafe-secret-1")

        assert hashed != "cafe-secret-1"
        assert hashed.startswith("$2")
        assert verify_password("cafe-secret-1", hashed)
        assert not verify_password("wrong-password", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    def test_round_trip_claims(self):
        token = create_access_token(12, PrincipalKind.USER, "customer")

        payload = decode_access_token(token)

        assert payload["sub"] == "12"
        assert payload["kind"] == "user"
        assert payload["role"] == "customer"

    def test_lifetime_depends_on_kind(self):
        auth = settings.auth
        user = decode_access_token(create_access_token(1, PrincipalKind.USER, "customer"))
        seller = decode_access_token(create_access_token(1, PrincipalKind.SELLER, "seller"))

        assert user["exp"] - user["iat"] == auth.user_token_expire_minutes * 60
        assert seller["exp"] - seller["iat"] == auth.seller_token_expire_minutes * 60

    def test_additional_claims(self):
        token = create_access_token(3, PrincipalKind.SELLER, "seller", additional_claims={"store": "centro"})

        assert decode_access_token(token)["store"] == "centro"

    def test_expired_token(self):
        token = create_access_token(1, PrincipalKind.USER, "customer", expires_minutes=-1)

        with pytest.raises(AuthenticationError) as exc_info:
            decode_access_token(token)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert exc_info.value.status_code == 401

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "1", "kind": "user", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "another-secret-with-enough-length-for-hs256",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            decode_access_token(token)

        assert exc_info.value.code == "INVALID_TOKEN"

    @pytest.mark.parametrize(
        "claims",
        [{"sub": "1", "kind": "robot"}, {"sub": "abc", "kind": "user"}, {"kind": "user"}],
    )
    def test_unknown_kind_or_subject(self, claims):
        auth = settings.auth
        token = jwt.encode(
            {**claims, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}, auth.secret_key, algorithm=auth.algorithm
        )

        with pytest.raises(AuthenticationError) as exc_info:
            decode_access_token(token)

        assert exc_info.value.code == "INVALID_TOKEN"
