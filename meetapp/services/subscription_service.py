"""Subscription service - the persistent subscription store."""

from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from meetapp.core.errors import StoreError, SubscriptionConflictError
from meetapp.db.types import utc_now
from meetapp.models.meetup import Meetup
from meetapp.models.subscription import Subscription
from meetapp.services.base_service import BaseService

UNIQUE_CONSTRAINT = "uq_subscriptions_user_meetup"

# SQLite reports the columns instead of the constraint name
SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed: subscriptions.user_id, subscriptions.meetup_id"


def is_duplicate_subscription(error: IntegrityError) -> bool:
    """Whether an insert failed on the unique (user_id, meetup_id) constraint."""
    message = str(error.orig)
    return UNIQUE_CONSTRAINT in message or SQLITE_UNIQUE_MESSAGE in message


class SubscriptionService(BaseService[Subscription]):
    """Subscription store backed by the ``subscriptions`` table."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Subscription)

    async def find_by_user_and_meetup(
        self, user_id: int, meetup_id: int
    ) -> Subscription | None:
        """Existing subscription of a user to a meetup, if any."""
        result = await self.db.execute(
            select(Subscription).where(
                Subscription.user_id == user_id,
                Subscription.meetup_id == meetup_id,
            )
        )
        return result.scalar_one_or_none()

    async def find_by_user_at_date(
        self, user_id: int, date: datetime
    ) -> Subscription | None:
        """Any subscription of the user to a meetup starting exactly at ``date``."""
        result = await self.db.execute(
            select(Subscription)
            .join(Meetup, Subscription.meetup_id == Meetup.id)
            .where(Subscription.user_id == user_id, Meetup.date == date)
            .limit(1)
        )
        return result.scalars().first()

    async def insert(self, user_id: int, meetup_id: int) -> Subscription:
        """
        Persist a new subscription.

        Raises:
            SubscriptionConflictError: the unique (user, meetup) constraint fired.
            StoreError: any other storage failure.
        """
        subscription = Subscription(user_id=user_id, meetup_id=meetup_id)
        try:
            return await self.create(subscription)
        except IntegrityError as e:
            await self.db.rollback()
            if not is_duplicate_subscription(e):
                raise StoreError(f"Subscription insert rejected: {e.orig}") from e
            logger.warning(
                f"Subscription insert lost a race: user={user_id} meetup={meetup_id}"
            )
            raise SubscriptionConflictError(user_id, meetup_id) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Subscription store unavailable: {e}") from e

    async def list_upcoming(self, user_id: int) -> list[Subscription]:
        """User's subscriptions to meetups that have not happened yet."""
        result = await self.db.execute(
            select(Subscription)
            .join(Meetup, Subscription.meetup_id == Meetup.id)
            .options(selectinload(Subscription.meetup))
            .where(Subscription.user_id == user_id, Meetup.date > utc_now())
            .order_by(Meetup.date)
        )
        return list(result.scalars().all())
