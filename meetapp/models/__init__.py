"""Database models."""

from meetapp.models.meetup import Meetup
from meetapp.models.subscription import Subscription
from meetapp.models.user import User

__all__ = [
    "Meetup",
    "Subscription",
    "User",
]
