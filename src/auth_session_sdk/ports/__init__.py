"""Ports (interfaces) to external collaborators."""

from auth_session_sdk.ports.core import CoreQuerierPort
from auth_session_sdk.ports.communication import EmailContent, EmailSenderPort

__all__ = [
    "CoreQuerierPort",
    "EmailContent",
    "EmailSenderPort",
]
