"""ORM model for user-owned posts."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from postboard.models.base import Base, TimestampMixin


class Post(TimestampMixin, Base):
    """A post; user_id is the owner and never changes after creation."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    user = relationship("User", back_populates="posts")
