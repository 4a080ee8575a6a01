"""Registration, login and the authenticated profile endpoint."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from postboard.api.deps import get_identity, json_payload
from postboard.core.abilities import Role, abilities_for_role
from postboard.core.database import get_db
from postboard.core.errors import Unauthenticated
from postboard.core.responses import success
from postboard.core.security import hash_password, verify_password
from postboard.models import User
from postboard.schemas.auth import Identity, LoginRequest, RegisterRequest
from postboard.schemas.users import UserOut
from postboard.services.tokens import issue_token
from postboard.services.validation import Unique, commit_unique, validate_payload

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register")
def register(
    payload: Annotated[dict[str, Any], Depends(json_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """
    Create a 'user' account and return it with a fresh token.

    The token carries the post abilities only; admins are created through
    POST /users or the create_user script.
    """
    data = validate_payload(
        payload,
        RegisterRequest,
        db=db,
        unique=[Unique("email", User.email)],
    )

    user = User(
        name=data["name"],
        email=data["email"],
        password_hash=hash_password(data["password"]),
        role=Role.USER.value,
    )
    db.add(user)
    commit_unique(db, "email")
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})

    token = issue_token(db, user, abilities_for_role(Role.USER))
    return success(
        {"user": UserOut.model_validate(user), "token": token},
        "User registered successfully",
    )


@router.post("/login")
def login(
    payload: Annotated[dict[str, Any], Depends(json_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """
    Authenticate with email and password; returns the user and a bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    data = validate_payload(payload, LoginRequest)

    user = db.query(User).filter(User.email == data["email"]).first()
    if user is None or not verify_password(data["password"], user.password_hash):
        logger.warning("Rejected login attempt", extra={"user_found": user is not None})
        raise Unauthenticated("Invalid credentials")

    token = issue_token(db, user, abilities_for_role(user.role))
    logger.info("User logged in", extra={"user_id": user.id, "role": user.role})
    return success(
        {"user": UserOut.model_validate(user), "token": token},
        "User login successfully",
    )


@router.get("/me")
def me(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Return the profile of the user the bearer token was issued to."""
    user = db.get(User, identity.user_id)
    if user is None:
        raise Unauthenticated()
    return success({"user": UserOut.model_validate(user)}, "User profile retrieved successfully")
