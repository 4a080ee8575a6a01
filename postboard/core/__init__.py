"""Core: configuration, database session, security primitives and the error taxonomy."""

from postboard.core.config import get_settings, settings
from postboard.core.database import get_db
from postboard.core.errors import (
    ApiError,
    Forbidden,
    NotFound,
    Unauthenticated,
    ValidationFailed,
)

__all__ = [
    "ApiError",
    "Forbidden",
    "NotFound",
    "Unauthenticated",
    "ValidationFailed",
    "get_db",
    "get_settings",
    "settings",
]
