"""
SMTP delivery for SDK emails, using aiosmtplib.

One message per call, one recipient, body sent either as text/plain or
text/html depending on how the recipe rendered it.
"""

import logging
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

import aiosmtplib

from auth_session_sdk.ports.communication import EmailContent, EmailSenderPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMTPSettings:
    """
    SMTP server and sender identity.

    secure=True connects over implicit TLS (usually port 465); otherwise
    aiosmtplib upgrades with STARTTLS when the server offers it.
    """

    host: str
    port: int
    from_email: str
    from_name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    secure: bool = False
    timeout: float = 10.0

    @property
    def sender(self) -> str:
        """From header value: 'Name <email>' or the bare address."""
        if self.from_name:
            return formataddr((self.from_name, self.from_email))
        return self.from_email


class AsyncSMTPEmailSender(EmailSenderPort):
    """EmailSenderPort over SMTP."""

    def __init__(self, settings: SMTPSettings):
        self.settings = settings

    def build_message(self, content: EmailContent) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.sender
        message["To"] = content.to_email
        message["Subject"] = content.subject
        message.set_content(content.body, subtype="html" if content.is_html else "plain")
        return message

    async def send_raw_email(self, content: EmailContent) -> None:
        settings = self.settings
        try:
            await aiosmtplib.send(
                self.build_message(content),
                sender=settings.from_email,
                recipients=[content.to_email],
                hostname=settings.host,
                port=settings.port,
                username=settings.username,
                password=settings.password,
                use_tls=settings.secure,
                timeout=settings.timeout,
            )
        except aiosmtplib.SMTPException as e:
            logger.error(
                f"SMTP delivery to {content.to_email} via {settings.host} failed: {e}"
            )
            raise
        logger.info(f"Sent '{content.subject}' to {content.to_email}")
