"""
Model registry.

Import all models here to ensure they are registered with SQLAlchemy metadata
before ``Base.metadata.create_all`` runs.
"""

from meetapp.db.base import Base
from meetapp.models.meetup import Meetup
from meetapp.models.subscription import Subscription
from meetapp.models.user import User

__all__ = [
    "Base",
    "Meetup",
    "Subscription",
    "User",
]
