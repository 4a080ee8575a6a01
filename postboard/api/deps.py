"""Request dependencies: bearer token resolution, ability gating, JSON body."""

import json
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from postboard.core.abilities import Ability
from postboard.core.database import get_db
from postboard.core.errors import ValidationFailed
from postboard.core.messages import BODY_FIELD
from postboard.core.permissions import authorize_ability
from postboard.schemas.auth import Identity
from postboard.services.tokens import resolve_token

security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    """Dependency: require a valid bearer token and return who presented it. 401 otherwise."""
    token = credentials.credentials if credentials is not None else None
    return resolve_token(db, token)


def require_ability(ability: Ability) -> Callable[..., Identity]:
    """
    Dependency factory: resolve the identity, then require ability on its token.

    Usage: identity: Annotated[Identity, Depends(require_ability(Ability.VIEW_USERS))]
    """

    def dependency(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        authorize_ability(identity, ability)
        return identity

    dependency.__name__ = f"require_{ability.name.lower()}"
    return dependency


async def json_payload(request: Request) -> dict[str, Any]:
    """Dependency: the request body as a JSON object; empty body is {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationFailed({BODY_FIELD: ["The request body must be valid JSON."]})
    if not isinstance(body, dict):
        raise ValidationFailed({BODY_FIELD: ["The request body must be a JSON object."]})
    return body
