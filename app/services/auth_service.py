# File: app/services/auth_service.py

"""
Authentication service.

Contains:
  - Registration (uniqueness checks + password hashing)
  - Credential checks for login
"""

import logging

from app.core.errors import AuthenticationFailed, DuplicateResource
from app.core.security import hash_password, verify_password
from app.schemas.user import RegisterRequest, UserRecord
from app.services.storage import Storage

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register_user(storage: Storage, payload: RegisterRequest) -> UserRecord:
    """
    Create a user after checking email and username are free.

    Both lookups are exact, case-sensitive matches. The unique constraints in
    storage still catch a concurrent registration that slips between the
    check and the insert.
    """
    if storage.get_user_by_email(payload.email):
        raise DuplicateResource("Email already registered")
    if storage.get_user_by_username(payload.username):
        raise DuplicateResource("Username already taken")

    user = storage.create_user(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


def authenticate_user(storage: Storage, *, email: str, password: str) -> UserRecord:
    """
    Look up a user by email and verify the password hash.

    Unknown email and wrong password produce the same error so the response
    does not reveal which accounts exist.
    """
    user = storage.get_user_by_email(email)
    if user is None or not verify_password(password, user.password):
        logger.warning("Failed login attempt for %s", email)
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    return user
