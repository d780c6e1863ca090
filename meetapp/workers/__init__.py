"""Background workers for deferred notifications."""

from meetapp.workers.inscription_mail import InscriptionMailHandler
from meetapp.workers.jobs import (
    InscriptionMailJob,
    MailJob,
    MeetupSnapshot,
    UserSnapshot,
)
from meetapp.workers.mail_queue import MailQueue, NotificationDispatcher

__all__ = [
    "InscriptionMailHandler",
    "InscriptionMailJob",
    "MailJob",
    "MailQueue",
    "MeetupSnapshot",
    "NotificationDispatcher",
    "UserSnapshot",
]
