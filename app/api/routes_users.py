# File: app/api/routes_users.py

"""
Per-author post listing, used by the profile page.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_storage
from app.core.errors import ResourceNotFound
from app.schemas.post import Post
from app.services.storage import Storage

router = APIRouter()


@router.get("/{user_id}/posts", response_model=list[Post], summary="Posts written by one user")
def list_user_posts(user_id: str, storage: Storage = Depends(get_storage)):
    if storage.get_user(user_id) is None:
        raise ResourceNotFound("User not found")
    return storage.get_posts_by_author(user_id)
