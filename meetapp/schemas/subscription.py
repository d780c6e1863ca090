"""Subscription schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt

from meetapp.schemas.meetup import MeetupDTO


class SubscriptionCreate(BaseModel):
    """Subscription request schema.

    The requester comes from the session token, never from the body.
    """

    meetup_id: StrictInt = Field(..., gt=0, description="Meetup to subscribe to")


class SubscriptionDTO(BaseModel):
    """Created subscription response schema."""

    id: int
    user_id: int
    meetup_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class SubscribedMeetupDTO(SubscriptionDTO):
    """Subscription with its meetup, for the user's agenda."""

    meetup: MeetupDTO


class RejectionDTO(BaseModel):
    """Business rejection response body."""

    error: str
    reason: str
