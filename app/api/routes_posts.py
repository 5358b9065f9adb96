# File: app/api/routes_posts.py

import logging

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user, get_raw_body, get_storage, parse_payload
from app.core.errors import PermissionDenied, ResourceNotFound
from app.schemas.post import Post, PostCreate, PostUpdate
from app.schemas.user import MessageResponse, UserRecord
from app.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

POST_NOT_FOUND = "Post not found"


def json_body(model) -> dict:
    # Bodies are parsed inside the handlers; this keeps them in the OpenAPI docs
    return {"requestBody": {"content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}}}}


def get_owned_post(post_id: str, user: UserRecord, storage: Storage, action: str) -> Post:
    """
    Load a post the current user is allowed to mutate.

    Raises 404 when it does not exist and 403 when someone else wrote it.
    """
    post = storage.get_post(post_id)
    if post is None:
        raise ResourceNotFound(POST_NOT_FOUND)
    if post.author_id != user.id:
        logger.warning("User %s tried to %s post %s owned by %s", user.id, action, post_id, post.author_id)
        raise PermissionDenied(f"You can only {action} your own posts")
    return post


@router.get("", response_model=list[Post], summary="List all posts, newest first")
def list_posts(storage: Storage = Depends(get_storage)):
    return storage.get_all_posts()


@router.get("/{post_id}", response_model=Post, summary="Get a single post")
def read_post(post_id: str, storage: Storage = Depends(get_storage)):
    post = storage.get_post(post_id)
    if post is None:
        raise ResourceNotFound(POST_NOT_FOUND)
    return post


@router.post(
    "",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post as the current user",
    openapi_extra=json_body(PostCreate),
)
def create_post(
    current_user: UserRecord = Depends(get_current_user),
    raw_body: bytes = Depends(get_raw_body),
    storage: Storage = Depends(get_storage),
):
    payload = parse_payload(PostCreate, raw_body)
    post = storage.create_post(payload, current_user.id, current_user.username)
    logger.info("User %s created post %s", current_user.id, post.id)
    return post


@router.put(
    "/{post_id}",
    response_model=Post,
    summary="Edit one of your posts",
    openapi_extra=json_body(PostUpdate),
)
def update_post(
    post_id: str,
    current_user: UserRecord = Depends(get_current_user),
    raw_body: bytes = Depends(get_raw_body),
    storage: Storage = Depends(get_storage),
):
    get_owned_post(post_id, current_user, storage, "edit")
    payload = parse_payload(PostUpdate, raw_body)

    updated = storage.update_post(post_id, payload)
    if updated is None:
        # Deleted between the ownership check and the write
        raise ResourceNotFound(POST_NOT_FOUND)
    logger.info("User %s updated post %s", current_user.id, post_id)
    return updated


@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete one of your posts")
def delete_post(
    post_id: str,
    current_user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    get_owned_post(post_id, current_user, storage, "delete")

    if not storage.delete_post(post_id):
        raise ResourceNotFound(POST_NOT_FOUND)
    logger.info("User %s deleted post %s", current_user.id, post_id)
    return MessageResponse(message="Post deleted successfully")
