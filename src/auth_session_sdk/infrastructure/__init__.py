"""Concrete infrastructure adapters (authentication core client, SMTP)."""

from auth_session_sdk.infrastructure.querier import HttpxCoreQuerier
from auth_session_sdk.infrastructure.mail import AsyncSMTPEmailSender, SMTPSettings

__all__ = [
    "HttpxCoreQuerier",
    "AsyncSMTPEmailSender",
    "SMTPSettings",
]
