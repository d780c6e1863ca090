"""Inscription mail job handler."""

from meetapp.services.mail_service import MailService
from meetapp.workers.jobs import InscriptionMailJob

SUBJECT = "New subscription: {title}"

BODY = """Hello {organizer},

{subscriber} ({email}) has just subscribed to your meetup "{title}"
on {date:%Y-%m-%d at %H:%M} UTC{location}.

Meetapp
"""


class InscriptionMailHandler:
    """Notifies the organizer about a new subscriber."""

    def __init__(self, mail_service: MailService):
        self.mail_service = mail_service

    def render(self, job: InscriptionMailJob) -> tuple[str, str]:
        """Subject and body for the organizer's mail."""
        location = f", at {job.meetup.location}" if job.meetup.location else ""
        subject = SUBJECT.format(title=job.meetup.title)
        body = BODY.format(
            organizer=job.organizer.name,
            subscriber=job.subscriber.name,
            email=job.subscriber.email,
            title=job.meetup.title,
            date=job.meetup.date,
            location=location,
        )
        return subject, body

    async def __call__(self, job: InscriptionMailJob) -> None:
        subject, body = self.render(job)
        await self.mail_service.send_mail(job.organizer.email, subject, body)
