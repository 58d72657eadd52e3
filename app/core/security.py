"""Password hashing, session JWT creation/verification and the session cookie."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from starlette.responses import Response

from app.core.config import settings

logger = logging.getLogger(__name__)

# Length limits for input validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 32
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    sub: str | int,
    email: str,
    role: str,
    now: datetime | None = None,
) -> str:
    """Create a session JWT with sub (user id), email, role, iat and exp."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": expire,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, email, role, iat, exp).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "iat"]},
    )


def verify_session_token(token: str | None) -> dict[str, Any] | None:
    """Return the token payload, or None when the token is missing, forged or expired."""
    if not token:
        return None
    try:
        return decode_access_token(token)
    except jwt.PyJWTError as e:
        logger.debug("Session token rejected: %s", type(e).__name__)
        return None


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HttpOnly cookie scoped to the whole app."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
