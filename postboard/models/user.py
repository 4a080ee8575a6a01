"""ORM model for application users (auth and admin management)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from postboard.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    User account owning posts and personal access tokens.

    role: 'admin' or 'user'; decides the abilities granted at login.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")

    posts = relationship(
        "Post",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    tokens = relationship(
        "PersonalAccessToken",
        back_populates="user",
        cascade="all, delete-orphan",
    )
