"""
Password hashing and the signed token stored in the session cookie.

The cookie value is a JWT whose `sub` claim is the user's database id.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from defi_tracker.config import get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return the bcrypt hash stored on the users table."""
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign a session token for a user.

    Args:
        user_id: Database id of the user, stored as the `sub` claim
        expires_delta: Lifetime of the token (defaults to
            `jwt_access_token_expire_minutes`)

    Returns:
        Encoded JWT, used verbatim as the session cookie value
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)

    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        JWTError: If the token is malformed, tampered with or expired
    """
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def session_user_id(token: str) -> int:
    """
    Resolve a session cookie value to a user id.

    Raises:
        JWTError: If the token is invalid or its subject is not an integer id
    """
    subject = decode_token(token).get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise JWTError(f"Invalid token subject: {subject!r}")


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_token",
    "hash_password",
    "session_user_id",
    "verify_password",
]
