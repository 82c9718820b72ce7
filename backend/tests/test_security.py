"""Tests for access token verification."""
import uuid
from datetime import datetime, timedelta, timezone

import jwt

from roxinho_shop.core.security import (
    ALGORITHM,
    AUDIENCE,
    ISSUER,
    create_access_token,
    decode_token,
    verify_access_token,
)

TEST_JWT_SECRET = "test-secret-key-for-unit-tests-must-be-32-chars"
JWT_DECODE_OPTS = {
    "algorithms": [ALGORITHM],
    "issuer": "roxinho-shop",
    "audience": "roxinho-shop",
}


def _encode(**claims):
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(uuid.uuid4()),
        "exp": now + timedelta(minutes=5),
        "iat": now,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "type": "access",
    }
    payload.update(claims)
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm=ALGORITHM)


class TestCreateAccessToken:
    def test_creates_valid_jwt(self):
        user_id = str(uuid.uuid4())
        token = create_access_token(user_id, "admin@roxinho.com", is_admin=True)
        payload = jwt.decode(token, TEST_JWT_SECRET, **JWT_DECODE_OPTS)
        assert payload["sub"] == user_id
        assert payload["email"] == "admin@roxinho.com"
        assert payload["is_admin"] is True
        assert payload["type"] == "access"

    def test_unique_jti_per_call(self):
        uid = str(uuid.uuid4())
        t1 = create_access_token(uid, "u@x.com")
        t2 = create_access_token(uid, "u@x.com")
        assert decode_token(t1)["jti"] != decode_token(t2)["jti"]

    def test_defaults_to_non_admin(self):
        token = create_access_token(str(uuid.uuid4()), "u@x.com")
        assert decode_token(token)["is_admin"] is False

    def test_display_name_claim_is_optional(self):
        assert "name" not in decode_token(create_access_token("u1", "u@x.com"))
        assert decode_token(create_access_token("u1", "u@x.com", name="Ana"))["name"] == "Ana"


class TestVerifyAccessToken:
    def test_valid(self):
        token = create_access_token("42", "u@x.com")
        payload = verify_access_token(token)
        assert payload is not None
        assert payload["sub"] == "42"

    def test_expired(self):
        token = create_access_token("42", "u@x.com", expires_delta=timedelta(seconds=-1))
        assert verify_access_token(token) is None

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": "42", "type": "access", "iss": ISSUER, "aud": AUDIENCE},
            "another-secret-key-that-is-also-32-chars-long",
            algorithm=ALGORITHM,
        )
        assert verify_access_token(token) is None

    def test_wrong_audience(self):
        assert verify_access_token(_encode(aud="someone-else")) is None

    def test_wrong_type(self):
        assert verify_access_token(_encode(type="refresh")) is None

    def test_missing_subject(self):
        assert verify_access_token(_encode(sub="")) is None

    def test_garbage(self):
        assert verify_access_token("not-a-jwt") is None
