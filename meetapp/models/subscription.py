"""Subscription model - one user registered to one meetup."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meetapp.db.base import Base
from meetapp.db.types import UTCDateTime, utc_now
from meetapp.models.meetup import Meetup


class Subscription(Base):
    """Subscription database model."""

    __tablename__ = "subscriptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    meetup_id: Mapped[int] = mapped_column(ForeignKey("meetups.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utc_now)

    meetup: Mapped[Meetup] = relationship(lazy="raise")

    # A user holds at most one subscription per meetup, enforced atomically
    __table_args__ = (
        UniqueConstraint("user_id", "meetup_id", name="uq_subscriptions_user_meetup"),
    )
