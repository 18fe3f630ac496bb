"""
Attaching a newly created or refreshed session to a response.

Used by the session recipe after the authentication core issues tokens.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from auth_session_sdk.config import SessionConfig
from auth_session_sdk.domain.value_objects import TokenType, TransferMethod
from auth_session_sdk.transport.anti_csrf import set_anti_csrf_token
from auth_session_sdk.transport.clearing import clear_session
from auth_session_sdk.transport.constants import AVAILABLE_TOKEN_TRANSFER_METHODS
from auth_session_sdk.transport.front_token import announce_front_token
from auth_session_sdk.transport.http import BaseRequest, SessionResponse
from auth_session_sdk.transport.tokens import get_token, set_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    """A token issued by the core. `expiry` is epoch millis."""

    token: str
    expiry: int
    created_time: int = 0


@dataclass(frozen=True)
class SessionTokens:
    """Everything the core returned that has to travel back to the client."""

    user_id: str
    access_token: IssuedToken
    refresh_token: Optional[IssuedToken] = None
    anti_csrf_token: Optional[str] = None
    access_token_payload: Any = field(default_factory=dict)


def attach_tokens(
    config: SessionConfig,
    request: BaseRequest,
    response: SessionResponse,
    tokens: SessionTokens,
    transfer_method: TransferMethod,
) -> None:
    """
    Write front-token, access/refresh tokens and anti-csrf for `transfer_method`.

    Tokens the request carried on another transfer method are cleared so
    the client cannot end up with two diverging sessions.
    """
    for other in AVAILABLE_TOKEN_TRANSFER_METHODS:
        if other == transfer_method:
            continue
        if get_token(request, TokenType.ACCESS, other) is not None:
            logger.debug(f"Clearing stale session carried by {other.value}")
            clear_session(config, response, other)

    announce_front_token(
        response,
        tokens.user_id,
        tokens.access_token.expiry,
        tokens.access_token_payload,
    )
    # The access token cookie outlives the token itself; expiry is enforced
    # by the core, and the front-token carries the real expiry.
    set_token(
        config,
        response,
        TokenType.ACCESS,
        tokens.access_token.token,
        access_token_cookie_expiry(),
        transfer_method,
    )
    if tokens.refresh_token is not None:
        set_token(
            config,
            response,
            TokenType.REFRESH,
            tokens.refresh_token.token,
            tokens.refresh_token.expiry,
            transfer_method,
        )
    if tokens.anti_csrf_token is not None:
        set_anti_csrf_token(response, tokens.anti_csrf_token)


_HUNDRED_YEARS_MILLIS = 100 * 365 * 24 * 60 * 60 * 1000


def access_token_cookie_expiry() -> int:
    return int(time.time() * 1000) + _HUNDRED_YEARS_MILLIS
