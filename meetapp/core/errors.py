"""Exception hierarchy for Meetapp failures.

Business rejections are not exceptions: they are ``Decision`` values returned
by the admission validator. Exceptions here cover caller contract violations,
storage failures and the notification pipeline.
"""


class MeetappError(Exception):
    """Base exception for all Meetapp errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PreconditionError(MeetappError):
    """The caller violated the operation's contract."""


class MeetupNotFoundError(PreconditionError):
    """Meetup id does not exist in the directory."""

    def __init__(self, meetup_id: int):
        super().__init__(f"Meetup {meetup_id} not found")
        self.meetup_id = meetup_id


class UserNotFoundError(PreconditionError):
    """Authenticated user id no longer exists."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class StoreError(MeetappError):
    """Persistent store failed; the whole operation may be retried."""


class SubscriptionConflictError(StoreError):
    """Unique (user_id, meetup_id) constraint fired on insert."""

    def __init__(self, user_id: int, meetup_id: int):
        super().__init__(
            f"Subscription already exists for user {user_id} and meetup {meetup_id}"
        )
        self.user_id = user_id
        self.meetup_id = meetup_id


class DispatchError(MeetappError):
    """Notification job could not be submitted."""


class MailDeliveryError(MeetappError):
    """SMTP delivery failed."""
