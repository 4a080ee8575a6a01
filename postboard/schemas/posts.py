"""Request/response schemas for post endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from postboard.schemas.users import UserOut

TITLE_MAX_LENGTH = 255


class PostOut(BaseModel):
    """Post with its owner embedded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserOut | None = None


class PostCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1)


class PostUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are validated and applied."""

    title: str = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default=None, min_length=1)
