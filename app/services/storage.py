# File: app/services/storage.py

"""
Storage interface and its SQLAlchemy implementation.

Route handlers only ever talk to `Storage`, so the persistence engine can be
swapped without touching them. The adapter's job is deliberately small: turn
ORM rows into the pydantic records the API speaks (string ids, camelCase-ready
field names, UTC timestamps) and translate database failures into API errors.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateResource, StorageError
from app.models.post import Post as PostModel
from app.models.post import utcnow
from app.models.user import User as UserModel
from app.schemas.post import Post, PostCreate, PostUpdate
from app.schemas.user import UserRecord

logger = logging.getLogger(__name__)


class Storage(ABC):
    # -------------------------------
    # Users
    # -------------------------------

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord: ...

    # -------------------------------
    # Posts
    # -------------------------------

    @abstractmethod
    def get_all_posts(self) -> List[Post]: ...

    @abstractmethod
    def get_post(self, post_id: str) -> Optional[Post]: ...

    @abstractmethod
    def get_posts_by_author(self, author_id: str) -> List[Post]: ...

    @abstractmethod
    def create_post(self, data: PostCreate, author_id: str, author_username: str) -> Post: ...

    @abstractmethod
    def update_post(self, post_id: str, data: PostUpdate) -> Optional[Post]: ...

    @abstractmethod
    def delete_post(self, post_id: str) -> bool: ...


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_user(row: UserModel) -> UserRecord:
    return UserRecord(
        id=str(row.id),
        username=row.username,
        email=row.email,
        password=row.password,
    )


def map_post(row: PostModel) -> Post:
    return Post(
        id=str(row.id),
        title=row.title,
        content=row.content,
        image_url=row.image_url or None,
        author_id=row.author_id,
        author_username=row.author_username,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlStorage(Storage):
    """`Storage` backed by a SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, exc: Exception) -> StorageError:
        self.db.rollback()
        logger.error("Storage failure while trying to %s: %s", action, exc)
        return StorageError(f"Failed to {action}")

    # USER METHODS

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        try:
            row = self.db.get(UserModel, user_id)
        except SQLAlchemyError as e:
            raise self._fail("load user", e) from e
        return map_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._find_user(UserModel.username == username)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find_user(UserModel.email == email)

    def _find_user(self, clause) -> Optional[UserRecord]:
        try:
            row = self.db.scalars(select(UserModel).where(clause)).first()
        except SQLAlchemyError as e:
            raise self._fail("load user", e) from e
        return map_user(row) if row else None

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        row = UserModel(username=username, email=email, password=password_hash)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same name/email
            self.db.rollback()
            raise DuplicateResource("User with this email or username already exists") from e
        except SQLAlchemyError as e:
            raise self._fail("create user", e) from e
        self.db.refresh(row)
        return map_user(row)

    # POST METHODS

    def get_all_posts(self) -> List[Post]:
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        try:
            rows = self.db.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise self._fail("fetch posts", e) from e
        return [map_post(row) for row in rows]

    def get_post(self, post_id: str) -> Optional[Post]:
        try:
            row = self.db.get(PostModel, post_id)
        except SQLAlchemyError as e:
            raise self._fail("fetch post", e) from e
        return map_post(row) if row else None

    def get_posts_by_author(self, author_id: str) -> List[Post]:
        stmt = (
            select(PostModel)
            .where(PostModel.author_id == author_id)
            .order_by(PostModel.created_at.desc())
        )
        try:
            rows = self.db.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise self._fail("fetch posts", e) from e
        return [map_post(row) for row in rows]

    def create_post(self, data: PostCreate, author_id: str, author_username: str) -> Post:
        now = utcnow()
        row = PostModel(
            title=data.title,
            content=data.content,
            image_url=data.image_url,
            author_id=author_id,
            author_username=author_username,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("create post", e) from e
        self.db.refresh(row)
        return map_post(row)

    def update_post(self, post_id: str, data: PostUpdate) -> Optional[Post]:
        try:
            row = self.db.get(PostModel, post_id)
            if row is None:
                return None
            for field, value in data.changes().items():
                setattr(row, field, value)
            row.updated_at = utcnow()
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("update post", e) from e
        self.db.refresh(row)
        return map_post(row)

    def delete_post(self, post_id: str) -> bool:
        try:
            row = self.db.get(PostModel, post_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete post", e) from e
        return True
