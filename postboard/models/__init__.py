"""SQLAlchemy ORM models."""

from postboard.models.base import Base
from postboard.models.post import Post
from postboard.models.token import PersonalAccessToken
from postboard.models.user import User

__all__ = ["Base", "PersonalAccessToken", "Post", "User"]
