"""Pydantic schemas for API request/response validation."""

from meetapp.schemas.auth import SessionCreate, SessionToken, SessionUser
from meetapp.schemas.meetup import MeetupDTO
from meetapp.schemas.subscription import (
    RejectionDTO,
    SubscribedMeetupDTO,
    SubscriptionCreate,
    SubscriptionDTO,
)

__all__ = [
    # Auth
    "SessionCreate",
    "SessionToken",
    "SessionUser",
    # Meetup
    "MeetupDTO",
    # Subscription
    "RejectionDTO",
    "SubscribedMeetupDTO",
    "SubscriptionCreate",
    "SubscriptionDTO",
]
