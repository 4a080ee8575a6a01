"""User management endpoints. Every route requires a user ability, which only admin tokens carry."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from postboard.api.deps import json_payload, require_ability
from postboard.core.abilities import Ability, Role
from postboard.core.database import get_db
from postboard.core.errors import NotFound
from postboard.core.responses import success
from postboard.core.security import hash_password
from postboard.models import User
from postboard.schemas.auth import Identity
from postboard.schemas.users import UserCreateRequest, UserOut, UserUpdateRequest
from postboard.services.validation import Unique, commit_unique, validate_payload

logger = logging.getLogger(__name__)
router = APIRouter()

USER_NOT_FOUND = "User not found"


def _get_user_or_404(db: Session, user_id: int, for_update: bool = False) -> User:
    query = db.query(User).filter(User.id == user_id)
    if for_update:
        query = query.with_for_update()
    user = query.first()
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    return user


@router.get("")
def list_users(
    _identity: Annotated[Identity, Depends(require_ability(Ability.VIEW_USERS))],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    users = db.query(User).order_by(User.id).all()
    return success(
        {"users": [UserOut.model_validate(u) for u in users]},
        "Users retrieved successfully",
    )


@router.post("")
def create_user(
    identity: Annotated[Identity, Depends(require_ability(Ability.CREATE_USERS))],
    payload: Annotated[dict[str, Any], Depends(json_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Create a user with an explicit role (defaults to 'user'). No token is issued."""
    data = validate_payload(
        payload,
        UserCreateRequest,
        db=db,
        unique=[Unique("email", User.email)],
    )

    user = User(
        name=data["name"],
        email=data["email"],
        password_hash=hash_password(data["password"]),
        role=data.get("role", Role.USER.value),
    )
    db.add(user)
    commit_unique(db, "email")
    db.refresh(user)
    logger.info(
        "User created by admin",
        extra={"user_id": user.id, "role": user.role, "admin_id": identity.user_id},
    )
    return success(
        {"user": UserOut.model_validate(user)},
        "User created successfully",
        status.HTTP_201_CREATED,
    )


@router.get("/{user_id}")
def get_user(
    user_id: int,
    _identity: Annotated[Identity, Depends(require_ability(Ability.VIEW_USERS))],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    user = _get_user_or_404(db, user_id)
    return success({"user": UserOut.model_validate(user)}, "User retrieved successfully")


@router.put("/{user_id}")
def update_user(
    user_id: int,
    identity: Annotated[Identity, Depends(require_ability(Ability.UPDATE_USERS))],
    payload: Annotated[dict[str, Any], Depends(json_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """
    Update name, email and/or role. The password cannot be changed here.

    A role change affects the abilities of future logins only.
    """
    data = validate_payload(
        payload,
        UserUpdateRequest,
        db=db,
        unique=[Unique("email", User.email, ignore_id=user_id)],
    )
    user = _get_user_or_404(db, user_id, for_update=True)

    for field, value in data.items():
        setattr(user, field, value)
    commit_unique(db, "email")
    db.refresh(user)
    logger.info(
        "User updated by admin",
        extra={"user_id": user.id, "admin_id": identity.user_id, "fields": sorted(data)},
    )
    return success({"user": UserOut.model_validate(user)}, "User updated successfully")


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    identity: Annotated[Identity, Depends(require_ability(Ability.DELETE_USERS))],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Delete a user together with their posts and tokens."""
    user = _get_user_or_404(db, user_id, for_update=True)

    db.delete(user)
    db.commit()
    logger.info("User deleted by admin", extra={"user_id": user_id, "admin_id": identity.user_id})
    return success({}, "User deleted successfully")
