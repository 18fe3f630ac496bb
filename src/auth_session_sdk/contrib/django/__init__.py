"""
Django integration for auth-session-sdk.

Provides the session middleware, request/response adapters and a
session-verifying view decorator.
"""

from .middleware import (
    DjangoRequest,
    SessionMiddleware,
    apply_session_response,
    get_session_response,
)
from .decorators import verify_session

__all__ = [
    "DjangoRequest",
    "SessionMiddleware",
    "apply_session_response",
    "get_session_response",
    "verify_session",
]
