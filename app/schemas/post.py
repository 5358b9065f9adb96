# File: app/schemas/post.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PostCreate(CamelModel):
    title: str
    content: str
    image_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v


class PostUpdate(CamelModel):
    """
    Partial update. Only fields present in the request body are applied;
    `imageUrl: null` clears the image, `title`/`content` cannot be nulled.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("content")
    @classmethod
    def check_content(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Content cannot be empty")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class Post(CamelModel):
    id: str
    title: str
    content: str
    image_url: Optional[str] = None
    author_id: str
    author_username: str
    created_at: datetime
    updated_at: datetime
