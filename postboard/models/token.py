"""ORM model for personal access tokens (opaque bearer tokens with abilities)."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from postboard.models.base import Base


class PersonalAccessToken(Base):
    """
    One issued bearer token.

    token holds the SHA-256 digest of the secret, never the secret itself.
    abilities is the list of ability strings fixed at issuance.
    """

    __tablename__ = "personal_access_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    token = Column(String(64), nullable=False, unique=True, index=True)
    abilities = Column(JSON, nullable=False, default=list)
    last_used_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="tokens")
