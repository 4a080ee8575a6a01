"""Pydantic request/response schemas."""

from postboard.schemas.auth import Identity, LoginRequest, RegisterRequest
from postboard.schemas.health import HealthStatus
from postboard.schemas.posts import PostCreateRequest, PostOut, PostUpdateRequest
from postboard.schemas.users import UserCreateRequest, UserOut, UserUpdateRequest

__all__ = [
    "HealthStatus",
    "Identity",
    "LoginRequest",
    "PostCreateRequest",
    "PostOut",
    "PostUpdateRequest",
    "RegisterRequest",
    "UserCreateRequest",
    "UserOut",
    "UserUpdateRequest",
]
