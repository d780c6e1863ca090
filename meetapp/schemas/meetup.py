"""Meetup schemas."""

from datetime import datetime

from pydantic import BaseModel


class MeetupDTO(BaseModel):
    """Meetup response schema."""

    id: int
    title: str
    description: str | None = None
    location: str | None = None
    date: datetime
    user_id: int

    model_config = {"from_attributes": True}
