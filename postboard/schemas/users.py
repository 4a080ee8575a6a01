"""Request/response schemas for user endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from postboard.core.abilities import Role


class UserOut(BaseModel):
    """Public user representation (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserCreateRequest(BaseModel):
    """Admin creation of a user; role defaults to 'user' when omitted."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Field(default=Role.USER)


class UserUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are validated and applied."""

    name: str = Field(default=None, min_length=1, max_length=255)
    email: EmailStr = Field(default=None)
    role: Role = Field(default=None)
