"""Subscription booking: validate, persist, then notify."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from meetapp.core.errors import (
    DispatchError,
    StoreError,
    SubscriptionConflictError,
    UserNotFoundError,
)
from meetapp.db.types import utc_now
from meetapp.models.subscription import Subscription
from meetapp.services.admission import (
    AdmissionValidator,
    Decision,
    EventDirectory,
    SubscriptionStore,
)
from meetapp.services.meetup_service import MeetupService
from meetapp.services.subscription_service import SubscriptionService
from meetapp.services.user_service import UserService
from meetapp.workers.jobs import InscriptionMailJob
from meetapp.workers.mail_queue import NotificationDispatcher


@dataclass(frozen=True)
class BookingResult:
    """Created subscription, or the reason the booking was refused."""

    decision: Decision
    subscription: Subscription | None = None

    @property
    def booked(self) -> bool:
        return self.subscription is not None


class BookingService:
    """Books a user onto a meetup.

    Only the subscription insert decides success. The notification job is
    handed to the dispatcher afterwards and its failure never undoes a booking.
    """

    def __init__(
        self,
        directory: EventDirectory,
        store: SubscriptionStore,
        users: UserService,
        dispatcher: NotificationDispatcher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.users = users
        self.dispatcher = dispatcher
        self.validator = AdmissionValidator(directory, store, clock=clock)

    @classmethod
    def for_session(
        cls, db: AsyncSession, dispatcher: NotificationDispatcher
    ) -> "BookingService":
        """Wire the service to SQLAlchemy-backed collaborators."""
        return cls(
            directory=MeetupService(db),
            store=SubscriptionService(db),
            users=UserService(db),
            dispatcher=dispatcher,
        )

    async def book(self, requester_id: int, meetup_id: int) -> BookingResult:
        """
        Subscribe a user to a meetup.

        Raises:
            MeetupNotFoundError: unknown meetup id.
            UserNotFoundError: the requester id is not a known user.
            StoreError: storage failed; the call may be retried.
        """
        try:
            meetup = await self.validator.load_meetup(meetup_id)
            decision = await self.validator.evaluate_meetup(requester_id, meetup)
            if not decision.admitted:
                logger.info(
                    f"Subscription refused: user={requester_id} "
                    f"meetup={meetup_id} reason={decision.value}"
                )
                return BookingResult(decision=decision)

            subscriber = await self.users.get_by_id(requester_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Subscription lookup failed: {e}") from e

        if subscriber is None:
            raise UserNotFoundError(requester_id)

        try:
            subscription = await self.store.insert(requester_id, meetup_id)
        except SubscriptionConflictError:
            return BookingResult(decision=Decision.ALREADY_SUBSCRIBED)

        logger.info(
            f"Subscription {subscription.id} created: "
            f"user={requester_id} meetup={meetup_id}"
        )

        self._notify(InscriptionMailJob.from_booking(meetup, subscriber))
        return BookingResult(decision=Decision.ADMIT, subscription=subscription)

    def _notify(self, job: InscriptionMailJob) -> None:
        try:
            self.dispatcher.submit(job)
        except DispatchError as e:
            logger.error(
                f"Subscription saved but {job.key} was not queued "
                f"(meetup={job.meetup.id} subscriber={job.subscriber.id}): {e}"
            )
