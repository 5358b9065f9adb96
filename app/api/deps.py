# File: app/api/deps.py

import json
import logging
from typing import Optional, Type, TypeVar

from fastapi import Cookie, Depends, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.core.errors import AuthenticationFailed, ValidationFailed, first_validation_message
from app.core.security import SESSION_COOKIE_NAME, decode_session_token
from app.db.session import get_db
from app.schemas.user import UserRecord
from app.services.storage import SqlStorage, Storage

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def get_storage(db: Session = Depends(get_db)) -> Storage:
    """
    FastAPI dependency that provides the storage adapter for this request.

    Usage in route functions:
        storage: Storage = Depends(get_storage)
    """
    return SqlStorage(db)


def get_current_user(
    token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    storage: Storage = Depends(get_storage),
) -> UserRecord:
    """
    Resolve the session cookie to a user, fetched fresh from storage.

    A token for a user that no longer exists is rejected even if it has not
    expired yet.
    """
    if not token:
        raise AuthenticationFailed("Authentication required")

    try:
        user_id = decode_session_token(token)
    except AuthenticationFailed:
        logger.debug("Rejected session token")
        raise

    user = storage.get_user(user_id)
    if user is None:
        logger.debug("Session token for unknown user %s", user_id)
        raise AuthenticationFailed("User not found")
    return user


async def get_raw_body(request: Request) -> bytes:
    """
    Request body, unparsed.

    Mutating post routes declare this after `get_current_user` and parse it
    themselves, so authentication and ownership are settled before the body
    is looked at.
    """
    return await request.body()


def parse_payload(model: Type[PayloadT], raw: bytes) -> PayloadT:
    """Decode a JSON object body into `model`; an empty body counts as `{}`."""
    if raw.strip():
        try:
            data = json.loads(raw)
        except ValueError:
            raise ValidationFailed("Invalid request body")
    else:
        data = {}

    if not isinstance(data, dict):
        raise ValidationFailed("Invalid request body")

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailed(first_validation_message(exc.errors()))
