"""
Communication Ports.

Defines the protocol for delivering rendered emails (email verification
links). Rendering belongs to the recipe; delivery to the port.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class EmailContent:
    """Rendered email, ready for raw delivery."""

    to_email: str
    subject: str
    body: str
    is_html: bool = False


class EmailSenderPort(Protocol):
    """
    Port for delivering a rendered email to a single recipient.

    Implementations: AsyncSMTPEmailSender (aiosmtplib), or any host-provided
    sender (SendGrid, SES, ...).
    """

    async def send_raw_email(self, content: EmailContent) -> None:
        """
        Raises:
            Exception: Whatever the delivery backend raises; not retried
        """
        ...
