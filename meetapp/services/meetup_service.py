"""Meetup service - read-only event directory."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from meetapp.core.errors import MeetupNotFoundError
from meetapp.db.types import utc_now
from meetapp.models.meetup import Meetup
from meetapp.services.base_service import BaseService


class MeetupService(BaseService[Meetup]):
    """Looks up meetups together with their organizer."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Meetup)

    async def get_by_id(self, id: int) -> Meetup | None:
        """Get meetup by primary key, organizer loaded."""
        result = await self.db.execute(
            select(Meetup)
            .options(selectinload(Meetup.organizer))
            .where(Meetup.id == id)
        )
        return result.scalar_one_or_none()

    async def get_required(self, id: int) -> Meetup:
        """Get meetup by primary key or raise MeetupNotFoundError."""
        meetup = await self.get_by_id(id)
        if meetup is None:
            raise MeetupNotFoundError(id)
        return meetup

    async def list_upcoming(self) -> list[Meetup]:
        """Meetups that have not started yet, soonest first."""
        result = await self.db.execute(
            select(Meetup).where(Meetup.date > utc_now()).order_by(Meetup.date)
        )
        return list(result.scalars().all())
