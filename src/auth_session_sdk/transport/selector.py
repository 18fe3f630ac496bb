"""
Token transfer method selection.

The client may declare how it wants to receive tokens through the
st-auth-mode header. The deployment policy (SessionConfig) decides how
that declaration combines with configured defaults.
"""

import logging
from typing import Optional, Union

from auth_session_sdk.config import TOKEN_TRANSFER_ANY, SessionConfig
from auth_session_sdk.domain.errors import UnknownTransferMethodError
from auth_session_sdk.domain.value_objects import TransferMethod
from auth_session_sdk.transport.codec import read_header
from auth_session_sdk.transport.constants import AUTH_MODE_HEADER_KEY
from auth_session_sdk.transport.http import BaseRequest

logger = logging.getLogger(__name__)


def get_auth_mode_from_header(request: BaseRequest) -> Optional[TransferMethod]:
    """Transfer method requested by the client, None if not (validly) declared."""
    value = read_header(request, AUTH_MODE_HEADER_KEY)
    if value is None:
        return None
    try:
        return TransferMethod(value.strip().lower())
    except ValueError:
        logger.debug(f"Ignoring unrecognised {AUTH_MODE_HEADER_KEY}: {value!r}")
        return None


def get_token_transfer_method(
    config: SessionConfig,
    request: BaseRequest,
    for_create_new_session: bool,
) -> Union[TransferMethod, str]:
    """
    Transfer method allowed for this request: COOKIE, HEADER or "any".

    Order: config.get_token_transfer_method override, then the client's
    st-auth-mode header, then config.token_transfer_method.
    """
    if config.get_token_transfer_method is not None:
        method = config.get_token_transfer_method(request, for_create_new_session)
        if method != TOKEN_TRANSFER_ANY and not isinstance(method, TransferMethod):
            raise UnknownTransferMethodError(method)
        return method

    auth_mode = get_auth_mode_from_header(request)
    if auth_mode is not None:
        return auth_mode
    return config.token_transfer_method


def resolve_output_transfer_method(
    config: SessionConfig, request: BaseRequest
) -> TransferMethod:
    """Concrete method for writing a new session: "any" follows st-auth-mode, else cookies."""
    method = get_token_transfer_method(config, request, for_create_new_session=True)
    if method == TOKEN_TRANSFER_ANY:
        if get_auth_mode_from_header(request) == TransferMethod.HEADER:
            return TransferMethod.HEADER
        return TransferMethod.COOKIE
    logger.debug(f"Output transfer method fixed to {method.value}")
    return method
