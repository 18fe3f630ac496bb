"""
Session clearing.

On logout or invalidation the SDK overwrites tokens on every transfer
method, not only the one the request used. The response may already
carry tokens staged by earlier code (e.g. an overridden sign-in that
rejects the user after the session was created), and the server cannot
tell reliably which transport the client stores its session in.
"""

import logging

from auth_session_sdk.config import SessionConfig
from auth_session_sdk.domain.value_objects import TokenType, TransferMethod
from auth_session_sdk.transport.constants import (
    ANTI_CSRF_HEADER_KEY,
    AVAILABLE_TOKEN_TRANSFER_METHODS,
)
from auth_session_sdk.transport.front_token import announce_front_token_removed
from auth_session_sdk.transport.http import BaseRequest, SessionResponse
from auth_session_sdk.transport.tokens import set_token

logger = logging.getLogger(__name__)


def clear_session(
    config: SessionConfig,
    response: SessionResponse,
    transfer_method: TransferMethod,
) -> None:
    """Clear both tokens for one transfer method, drop anti-csrf, announce removal."""
    for token_type in (TokenType.ACCESS, TokenType.REFRESH):
        set_token(config, response, token_type, "", 0, transfer_method)

    response.remove_header(ANTI_CSRF_HEADER_KEY)
    announce_front_token_removed(response)


def clear_session_from_all_transfer_methods(
    config: SessionConfig,
    request: BaseRequest,
    response: SessionResponse,
) -> None:
    logger.debug("Clearing session from all token transfer methods")
    for transfer_method in AVAILABLE_TOKEN_TRANSFER_METHODS:
        clear_session(config, response, transfer_method)
