"""SMTP mail delivery."""

from email.message import EmailMessage

import aiosmtplib
from loguru import logger

from meetapp.core.config import Settings, get_settings
from meetapp.core.errors import MailDeliveryError


class MailService:
    """Sends plain-text mail through the configured SMTP server."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.mail_from
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send_mail(self, to: str, subject: str, body: str) -> None:
        """Deliver one message; raises MailDeliveryError on SMTP failure."""
        message = self.build_message(to, subject, body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.mail_host,
                port=self.settings.mail_port,
                username=self.settings.mail_user,
                password=self.settings.mail_password,
                start_tls=self.settings.mail_start_tls,
                timeout=self.settings.mail_timeout_seconds,
            )
        except aiosmtplib.SMTPException as e:
            raise MailDeliveryError(f"SMTP delivery to {to} failed: {e}") from e
        except OSError as e:
            raise MailDeliveryError(f"SMTP server unreachable: {e}") from e

        logger.debug(f"Mail sent: {subject} -> {to}")
