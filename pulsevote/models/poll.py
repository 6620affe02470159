"""ORM models for polls and their ordered options."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from pulsevote.models.base import Base


class Poll(Base):
    """A question with ordered options, created by a user."""

    __tablename__ = "polls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question = Column(Text, nullable=False)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    options = relationship(
        "PollOption",
        order_by="PollOption.position",
        cascade="all, delete-orphan",
        back_populates="poll",
    )
    creator = relationship("User", lazy="joined")


class PollOption(Base):
    """One answer of a poll; position is its 0-based index in the poll."""

    __tablename__ = "poll_options"
    __table_args__ = (
        UniqueConstraint("poll_id", "position", name="uq_poll_options_poll_position"),
        CheckConstraint("votes >= 0", name="ck_poll_options_votes"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    poll_id = Column(
        Integer,
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False)
    text = Column(String(500), nullable=False)
    votes = Column(Integer, nullable=False, default=0)

    poll = relationship("Poll", back_populates="options")
