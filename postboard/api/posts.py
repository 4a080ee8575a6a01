"""Post endpoints: any authenticated user can read and create; only the owner can mutate."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, joinedload

from postboard.api.deps import get_identity, json_payload, require_ability
from postboard.core.abilities import Ability
from postboard.core.database import get_db
from postboard.core.errors import NotFound
from postboard.core.permissions import authorize_owner
from postboard.core.responses import success
from postboard.models import Post
from postboard.schemas.auth import Identity
from postboard.schemas.posts import PostCreateRequest, PostOut, PostUpdateRequest
from postboard.services.validation import validate_payload

logger = logging.getLogger(__name__)
router = APIRouter()

POST_NOT_FOUND = "Post not found"


def _get_post_or_404(db: Session, post_id: int, for_update: bool = False) -> Post:
    query = db.query(Post).filter(Post.id == post_id)
    if for_update:
        query = query.with_for_update()
    post = query.first()
    if post is None:
        raise NotFound(POST_NOT_FOUND)
    return post


@router.get("")
def list_posts(
    _identity: Annotated[Identity, Depends(require_ability(Ability.VIEW_POSTS))],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """List all posts with their owners, oldest first."""
    posts = db.query(Post).options(joinedload(Post.user)).order_by(Post.id).all()
    return success(
        {"posts": [PostOut.model_validate(p) for p in posts]},
        "Posts retrieved successfully",
    )


@router.post("")
def create_post(
    identity: Annotated[Identity, Depends(require_ability(Ability.CREATE_POSTS))],
    payload: Annotated[dict[str, Any], Depends(json_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Create a post owned by the caller."""
    data = validate_payload(payload, PostCreateRequest)

    post = Post(
        user_id=identity.user_id,
        title=data["title"],
        description=data["description"],
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post created", extra={"post_id": post.id, "user_id": identity.user_id})
    return success(
        {"post": PostOut.model_validate(post)},
        "Post created successfully",
        status.HTTP_201_CREATED,
    )


@router.get("/{post_id}")
def get_post(
    post_id: int,
    _identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    post = _get_post_or_404(db, post_id)
    return success({"post": PostOut.model_validate(post)}, "Post retrieved successfully")


@router.put("/{post_id}")
def update_post(
    post_id: int,
    identity: Annotated[Identity, Depends(get_identity)],
    payload: Annotated[dict[str, Any], Depends(json_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """
    Update title and/or description. Only the owner may update.

    The row is locked for the rest of the transaction so a concurrent delete
    either happens first (404 here) or waits for this update to commit.
    """
    data = validate_payload(payload, PostUpdateRequest)
    post = _get_post_or_404(db, post_id, for_update=True)
    authorize_owner(identity, post.user_id, "Unauthorized to update this post")

    for field, value in data.items():
        setattr(post, field, value)
    db.commit()
    db.refresh(post)
    logger.info(
        "Post updated",
        extra={"post_id": post.id, "user_id": identity.user_id, "fields": sorted(data)},
    )
    return success({"post": PostOut.model_validate(post)}, "Post updated successfully")


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Delete a post. Only the owner may delete."""
    post = _get_post_or_404(db, post_id, for_update=True)
    authorize_owner(identity, post.user_id, "Unauthorized to delete this post")

    db.delete(post)
    db.commit()
    logger.info("Post deleted", extra={"post_id": post_id, "user_id": identity.user_id})
    return success({}, "Post deleted successfully")
