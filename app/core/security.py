# File: app/core/security.py

"""
Security helpers for the blog API: password hashing, session tokens and the
session cookie.

Tokens are HS256 JWTs carrying the user id in `sub`. They live for a fixed
seven days and are never renewed; logging in again issues a fresh one.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import Settings, get_settings
from app.core.errors import AuthenticationFailed

SESSION_COOKIE_NAME = "token"


def _settings(settings: Optional[Settings]) -> Settings:
    return settings or get_settings()


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised or corrupt hash in storage
        return False


def session_max_age(settings: Optional[Settings] = None) -> timedelta:
    return timedelta(days=_settings(settings).session_expire_days)


def create_session_token(
    user_id: str,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> str:
    settings = _settings(settings)
    issued = now or datetime.now(timezone.utc)
    to_encode = {
        "sub": user_id,
        "iat": issued,
        "exp": issued + session_max_age(settings),
    }
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.algorithm)


def decode_session_token(token: str, settings: Optional[Settings] = None) -> str:
    """
    Verify signature and expiry and return the user id the token was issued to.
    """
    settings = _settings(settings)
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[settings.algorithm])
    except JWTError:
        raise AuthenticationFailed("Invalid or expired token")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationFailed("Invalid or expired token")
    return user_id


def set_session_cookie(response: Response, token: str, settings: Optional[Settings] = None) -> None:
    settings = _settings(settings)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=int(session_max_age(settings).total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def clear_session_cookie(response: Response, settings: Optional[Settings] = None) -> None:
    settings = _settings(settings)
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
