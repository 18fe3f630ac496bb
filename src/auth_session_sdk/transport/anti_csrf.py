"""Anti-CSRF token propagation through the anti-csrf header."""

from typing import Optional

from auth_session_sdk.transport.codec import read_header, write_header
from auth_session_sdk.transport.constants import (
    ACCESS_CONTROL_EXPOSE_HEADERS,
    ANTI_CSRF_HEADER_KEY,
    AUTH_MODE_HEADER_KEY,
    AUTHORIZATION_HEADER_KEY,
    RID_HEADER_KEY,
)
from auth_session_sdk.transport.http import BaseRequest, SessionResponse


def get_anti_csrf_token(request: BaseRequest) -> Optional[str]:
    return read_header(request, ANTI_CSRF_HEADER_KEY)


def set_anti_csrf_token(response: SessionResponse, anti_csrf_token: str) -> None:
    write_header(response, ANTI_CSRF_HEADER_KEY, anti_csrf_token, allow_duplicate=False)
    write_header(
        response,
        ACCESS_CONTROL_EXPOSE_HEADERS,
        ANTI_CSRF_HEADER_KEY,
        allow_duplicate=True,
    )


def get_cors_allowed_headers() -> list[str]:
    """Request headers a CORS setup must allow for the SDK to work cross-origin."""
    return [
        ANTI_CSRF_HEADER_KEY,
        RID_HEADER_KEY,
        AUTHORIZATION_HEADER_KEY,
        AUTH_MODE_HEADER_KEY,
    ]
