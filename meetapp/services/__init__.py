"""Service layer for business logic."""

from meetapp.services.admission import AdmissionValidator, Decision
from meetapp.services.auth_service import AuthService
from meetapp.services.booking import BookingResult, BookingService
from meetapp.services.mail_service import MailService
from meetapp.services.meetup_service import MeetupService
from meetapp.services.subscription_service import SubscriptionService
from meetapp.services.user_service import UserService

__all__ = [
    "AdmissionValidator",
    "AuthService",
    "BookingResult",
    "BookingService",
    "Decision",
    "MailService",
    "MeetupService",
    "SubscriptionService",
    "UserService",
]
