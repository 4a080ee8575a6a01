"""
Personal access tokens: issue opaque bearer tokens and resolve them back to an Identity.

A token is presented as "<id>|<secret>". Only the SHA-256 digest of the secret
is stored, so the plaintext is available exactly once, at issuance. Tokens do
not expire and are not revoked by any endpoint; they disappear only when their
user is deleted.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from postboard.core.abilities import Ability, parse_abilities
from postboard.core.config import get_settings
from postboard.core.errors import Unauthenticated
from postboard.core.security import (
    digest_token_secret,
    generate_token_secret,
    token_secret_matches,
)
from postboard.models import PersonalAccessToken, User
from postboard.schemas.auth import Identity

logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = "|"


def issue_token(
    db: Session,
    user: User,
    abilities: Iterable[Ability],
    name: str | None = None,
) -> str:
    """
    Create one token row bound to user and abilities; return its plaintext.

    Commits the session. Existing tokens of the user are left untouched.
    """
    secret = generate_token_secret()
    record = PersonalAccessToken(
        user_id=user.id,
        name=name or get_settings().TOKEN_NAME,
        token=digest_token_secret(secret),
        abilities=sorted(a.value for a in abilities),
    )
    db.add(record)
    db.commit()
    logger.info(
        "Issued access token",
        extra={"user_id": user.id, "token_id": record.id, "abilities": record.abilities},
    )
    return f"{record.id}{TOKEN_SEPARATOR}{secret}"


def _find_token(db: Session, presented: str) -> PersonalAccessToken | None:
    if TOKEN_SEPARATOR not in presented:
        return (
            db.query(PersonalAccessToken)
            .filter(PersonalAccessToken.token == digest_token_secret(presented))
            .first()
        )

    token_id, secret = presented.split(TOKEN_SEPARATOR, 1)
    if not (token_id.isascii() and token_id.isdigit()) or not secret:
        return None
    record = db.get(PersonalAccessToken, int(token_id))
    if record is None or not token_secret_matches(secret, record.token):
        return None
    return record


def resolve_token(db: Session, presented: str | None) -> Identity:
    """
    Resolve a presented bearer token to the Identity it was issued for.

    Raises Unauthenticated when the token is missing, malformed, unknown, or
    belongs to a user that no longer exists. Records last_used_at on success.
    """
    if not presented or not presented.strip():
        raise Unauthenticated()

    record = _find_token(db, presented.strip())
    if record is None:
        raise Unauthenticated()
    if db.get(User, record.user_id) is None:
        raise Unauthenticated()

    try:
        abilities = parse_abilities(record.abilities or [])
    except ValueError:
        logger.warning("Token has unknown abilities; rejecting", extra={"token_id": record.id})
        raise Unauthenticated()

    record.last_used_at = datetime.now(UTC)
    db.commit()
    return Identity(user_id=record.user_id, token_id=record.id, abilities=abilities)
