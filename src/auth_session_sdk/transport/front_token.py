"""Front-token header: a client-readable session summary."""

from typing import Any

from auth_session_sdk.domain.value_objects import TokenInfo
from auth_session_sdk.transport.codec import write_header
from auth_session_sdk.transport.constants import (
    ACCESS_CONTROL_EXPOSE_HEADERS,
    FRONT_TOKEN_HEADER_KEY,
    FRONT_TOKEN_REMOVED,
)
from auth_session_sdk.transport.http import SessionResponse


def announce_front_token(
    response: SessionResponse,
    user_id: str,
    access_token_expiry_millis: int,
    payload: Any,
) -> TokenInfo:
    token_info = TokenInfo(uid=user_id, ate=access_token_expiry_millis, up=payload)
    write_header(
        response, FRONT_TOKEN_HEADER_KEY, token_info.encode(), allow_duplicate=False
    )
    write_header(
        response,
        ACCESS_CONTROL_EXPOSE_HEADERS,
        FRONT_TOKEN_HEADER_KEY,
        allow_duplicate=True,
    )
    return token_info


def announce_front_token_removed(response: SessionResponse) -> None:
    """Tell the client to drop its cached session state."""
    write_header(
        response, FRONT_TOKEN_HEADER_KEY, FRONT_TOKEN_REMOVED, allow_duplicate=False
    )
    # May be exposed more than once per response; clients tolerate it.
    write_header(
        response,
        ACCESS_CONTROL_EXPOSE_HEADERS,
        FRONT_TOKEN_HEADER_KEY,
        allow_duplicate=True,
    )
