"""Password hashing and personal access token secrets."""

import hashlib
import hmac
import secrets

import bcrypt

from postboard.core.config import settings


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_token_secret() -> str:
    """Return a fresh URL-safe random secret for a personal access token."""
    return secrets.token_urlsafe(settings.TOKEN_SECRET_BYTES)


def digest_token_secret(secret: str) -> str:
    """SHA-256 hex digest of a token secret; only this form is persisted."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def token_secret_matches(secret: str, stored_digest: str) -> bool:
    """Constant-time comparison of a presented secret against a stored digest."""
    return hmac.compare_digest(digest_token_secret(secret), stored_digest)
