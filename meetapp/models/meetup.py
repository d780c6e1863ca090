"""Meetup model - events users can subscribe to."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meetapp.db.base import Base
from meetapp.db.types import UTCDateTime, utc_now
from meetapp.models.user import User


class Meetup(Base):
    """Meetup database model."""

    __tablename__ = "meetups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date: Mapped[datetime] = mapped_column(UTCDateTime, index=True)

    # Organizer
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utc_now)

    organizer: Mapped[User] = relationship(lazy="raise")

    @property
    def organizer_id(self) -> int:
        """Alias for the organizer's user id."""
        return self.user_id
