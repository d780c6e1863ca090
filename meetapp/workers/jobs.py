"""Typed notification jobs.

Each job kind is its own frozen model carrying snapshots taken at booking
time, so a worker running minutes later never sees later edits.
"""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from meetapp.models.meetup import Meetup
from meetapp.models.user import User


class UserSnapshot(BaseModel):
    """User identity as it was when the job was created."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    email: str


class MeetupSnapshot(BaseModel):
    """Meetup details as they were when the job was created."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    title: str
    location: str | None = None
    date: datetime


class MailJob(BaseModel):
    """Base class for jobs handled by the mail queue."""

    model_config = ConfigDict(frozen=True)

    key: ClassVar[str]


class InscriptionMailJob(MailJob):
    """Tell an organizer that someone subscribed to their meetup."""

    key: ClassVar[str] = "InscriptionMail"

    meetup: MeetupSnapshot
    organizer: UserSnapshot
    subscriber: UserSnapshot

    @classmethod
    def from_booking(cls, meetup: Meetup, subscriber: User) -> "InscriptionMailJob":
        """Snapshot a meetup (organizer loaded) and its new subscriber."""
        return cls(
            meetup=MeetupSnapshot.model_validate(meetup),
            organizer=UserSnapshot.model_validate(meetup.organizer),
            subscriber=UserSnapshot.model_validate(subscriber),
        )
