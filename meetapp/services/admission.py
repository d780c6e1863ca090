"""
Admission rules for meetup subscriptions.

The validator decides whether a user may register for a meetup. It only reads
from the event directory and the subscription store; it never writes.

Rules are checked in a fixed order and the first failing rule wins:

1. the requester organizes the meetup -> ORGANIZER_CONFLICT
2. the meetup's hour has started or passed -> EVENT_PAST
3. the requester is already subscribed -> ALREADY_SUBSCRIBED
4. the requester holds a subscription to another meetup at the exact same
   date -> TIME_SLOT_CONFLICT

The past check truncates the meetup date to its hour while the slot check
compares exact dates. Both behaviors are observable and kept as-is.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Protocol

from meetapp.core.errors import MeetupNotFoundError
from meetapp.db.types import as_utc, utc_now
from meetapp.models.meetup import Meetup
from meetapp.models.subscription import Subscription


class Decision(str, Enum):
    """Outcome of an admission check."""

    ADMIT = "admit"
    ORGANIZER_CONFLICT = "organizer_conflict"
    EVENT_PAST = "event_past"
    ALREADY_SUBSCRIBED = "already_subscribed"
    TIME_SLOT_CONFLICT = "time_slot_conflict"

    @property
    def admitted(self) -> bool:
        return self is Decision.ADMIT

    @property
    def message(self) -> str:
        """User-facing explanation."""
        return _MESSAGES[self]


_MESSAGES = {
    Decision.ADMIT: "Subscription allowed",
    Decision.ORGANIZER_CONFLICT: "User organizer can not register in the same event",
    Decision.EVENT_PAST: "You can not sign up for an event that has passed",
    Decision.ALREADY_SUBSCRIBED: "User is already subscribed",
    Decision.TIME_SLOT_CONFLICT: "It is not possible to sign up for an event at the same time",
}


class EventDirectory(Protocol):
    """Read-only meetup lookup."""

    async def get_by_id(self, id: int) -> Meetup | None: ...


class SubscriptionStore(Protocol):
    """Query and write contract of the subscription table."""

    async def find_by_user_and_meetup(
        self, user_id: int, meetup_id: int
    ) -> Subscription | None: ...

    async def find_by_user_at_date(
        self, user_id: int, date: datetime
    ) -> Subscription | None: ...

    async def insert(self, user_id: int, meetup_id: int) -> Subscription: ...


def hour_floor(value: datetime) -> datetime:
    """Truncate a timestamp to the start of its hour."""
    return value.replace(minute=0, second=0, microsecond=0)


class AdmissionValidator:
    """Decides ADMIT or a rejection reason for (requester, meetup)."""

    def __init__(
        self,
        directory: EventDirectory,
        store: SubscriptionStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.directory = directory
        self.store = store
        self.clock = clock

    async def load_meetup(self, meetup_id: int) -> Meetup:
        """Fetch the target meetup; unknown ids violate the caller's contract."""
        meetup = await self.directory.get_by_id(meetup_id)
        if meetup is None:
            raise MeetupNotFoundError(meetup_id)
        return meetup

    async def evaluate(self, requester_id: int, meetup_id: int) -> Decision:
        """Evaluate the admission rules for one booking attempt."""
        meetup = await self.load_meetup(meetup_id)
        return await self.evaluate_meetup(requester_id, meetup)

    async def evaluate_meetup(self, requester_id: int, meetup: Meetup) -> Decision:
        """Evaluate the admission rules against an already loaded meetup."""
        if meetup.user_id == requester_id:
            return Decision.ORGANIZER_CONFLICT

        if hour_floor(as_utc(meetup.date)) <= as_utc(self.clock()):
            return Decision.EVENT_PAST

        existing = await self.store.find_by_user_and_meetup(requester_id, meetup.id)
        if existing is not None:
            return Decision.ALREADY_SUBSCRIBED

        same_slot = await self.store.find_by_user_at_date(requester_id, meetup.date)
        if same_slot is not None:
            return Decision.TIME_SLOT_CONFLICT

        return Decision.ADMIT
