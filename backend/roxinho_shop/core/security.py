import uuid
from datetime import datetime, timedelta, timezone

import jwt

from roxinho_shop.core.config import settings


ALGORITHM = "HS256"
ISSUER = "roxinho-shop"
AUDIENCE = "roxinho-shop"


def create_access_token(
    user_id: str,
    email: str,
    is_admin: bool = False,
    expires_delta: timedelta | None = None,
    name: str | None = None,
) -> str:
    """Mint an access token in the format the identity service issues."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=7))
    payload = {
        "sub": user_id,
        "email": email,
        "is_admin": is_admin,
        "exp": expire,
        "iat": now,
        "nbf": now,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "jti": str(uuid.uuid4()),
        "type": "access",
    }
    if name:
        payload["name"] = name
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
    )


def verify_access_token(token: str) -> dict | None:
    """Verify an access token and return its payload, or None if invalid."""
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        return None
    if payload.get("type") != "access" or not payload.get("sub"):
        return None
    return payload
