"""
Token handling utilities.

Reads session tokens from a request and writes them onto a response,
for either transfer method:
- COOKIE: sAccessToken / sRefreshToken httpOnly cookies
- HEADER: Authorization: Bearer <token> in, st-access-token /
  st-refresh-token out
"""

import logging
from dataclasses import dataclass
from typing import Optional

from auth_session_sdk.config import TOKEN_TRANSFER_ANY, SessionConfig
from auth_session_sdk.domain.errors import (
    UnknownTokenTypeError,
    UnknownTransferMethodError,
)
from auth_session_sdk.domain.value_objects import CookieSpec, TokenType, TransferMethod
from auth_session_sdk.transport.codec import (
    escape_cookie_value,
    read_cookie,
    read_header,
    write_cookie,
    write_header,
)
from auth_session_sdk.transport.constants import (
    ACCESS_CONTROL_EXPOSE_HEADERS,
    ACCESS_TOKEN_COOKIE_KEY,
    ACCESS_TOKEN_HEADER_KEY,
    AUTHORIZATION_HEADER_KEY,
    BEARER_PREFIX,
    REFRESH_TOKEN_COOKIE_KEY,
    REFRESH_TOKEN_HEADER_KEY,
)
from auth_session_sdk.transport.http import BaseRequest, SessionResponse
from auth_session_sdk.transport.selector import get_token_transfer_method

logger = logging.getLogger(__name__)


def cookie_name_for(token_type: TokenType) -> str:
    if token_type == TokenType.ACCESS:
        return ACCESS_TOKEN_COOKIE_KEY
    if token_type == TokenType.REFRESH:
        return REFRESH_TOKEN_COOKIE_KEY
    raise UnknownTokenTypeError(token_type)


def response_header_name_for(token_type: TokenType) -> str:
    if token_type == TokenType.ACCESS:
        return ACCESS_TOKEN_HEADER_KEY
    if token_type == TokenType.REFRESH:
        return REFRESH_TOKEN_HEADER_KEY
    raise UnknownTokenTypeError(token_type)


def cookie_path_for(config: SessionConfig, token_type: TokenType) -> str:
    if token_type == TokenType.ACCESS:
        return "/"
    if token_type == TokenType.REFRESH:
        return config.refresh_token_path
    raise UnknownTokenTypeError(token_type)


def get_token(
    request: BaseRequest, token_type: TokenType, transfer_method: TransferMethod
) -> Optional[str]:
    """
    Read a token from the request.

    Header transfer only honours "Authorization: Bearer <token>"; any other
    authorization scheme means "no token", not an error.

    Raises:
        UnknownTransferMethodError: transfer_method is not a TransferMethod
        UnknownTokenTypeError: token_type is not a TokenType
    """
    if transfer_method == TransferMethod.COOKIE:
        return read_cookie(request, cookie_name_for(token_type))
    if transfer_method == TransferMethod.HEADER:
        if token_type not in (TokenType.ACCESS, TokenType.REFRESH):
            raise UnknownTokenTypeError(token_type)
        value = read_header(request, AUTHORIZATION_HEADER_KEY)
        if value is None or not value.startswith(BEARER_PREFIX):
            return None
        return value[len(BEARER_PREFIX) :].strip()
    raise UnknownTransferMethodError(transfer_method)


def set_token(
    config: SessionConfig,
    response: SessionResponse,
    token_type: TokenType,
    value: str,
    expires_at_millis: int,
    transfer_method: TransferMethod,
) -> None:
    """
    Write a token onto the response.

    An empty value with expires_at_millis=0 clears the token.
    """
    if transfer_method == TransferMethod.COOKIE:
        cookie = CookieSpec(
            name=cookie_name_for(token_type),
            value=escape_cookie_value(value),
            path=cookie_path_for(config, token_type),
            domain=config.cookie_domain,
            expires=expires_at_millis,
            secure=config.cookie_secure,
            http_only=True,
            same_site=config.cookie_same_site,
        )
        write_cookie(response, cookie)
    elif transfer_method == TransferMethod.HEADER:
        header_name = response_header_name_for(token_type)
        write_header(response, header_name, value, allow_duplicate=False)
        write_header(
            response, ACCESS_CONTROL_EXPOSE_HEADERS, header_name, allow_duplicate=True
        )
    else:
        raise UnknownTransferMethodError(transfer_method)


@dataclass
class TokenExtractionResult:
    """
    Tokens found on a request and the transfer method that carried them.

    Tracks the source so the response can answer through the same
    channel.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    transfer_method: Optional[TransferMethod] = None

    @property
    def is_present(self) -> bool:
        """Check if an access token was found."""
        return self.access_token is not None

    @property
    def has_refresh(self) -> bool:
        """Check if refresh token is available."""
        return self.refresh_token is not None


def extract_tokens(
    config: SessionConfig,
    request: BaseRequest,
    token_type: TokenType = TokenType.ACCESS,
) -> TokenExtractionResult:
    """
    Extract session tokens honouring the allowed transfer method.

    With "any", a header-carried token takes precedence over cookies.
    `token_type` selects what the Authorization header carries: the access
    token normally, the refresh token on the refresh endpoint.
    """
    allowed = get_token_transfer_method(config, request, for_create_new_session=False)

    if allowed in (TOKEN_TRANSFER_ANY, TransferMethod.HEADER):
        bearer = get_token(request, token_type, TransferMethod.HEADER)
        if bearer:
            logger.debug(f"{token_type.value} token read from authorization header")
            if token_type == TokenType.REFRESH:
                return TokenExtractionResult(
                    refresh_token=bearer, transfer_method=TransferMethod.HEADER
                )
            return TokenExtractionResult(
                access_token=bearer, transfer_method=TransferMethod.HEADER
            )

    if allowed in (TOKEN_TRANSFER_ANY, TransferMethod.COOKIE):
        access = get_token(request, TokenType.ACCESS, TransferMethod.COOKIE)
        refresh = get_token(request, TokenType.REFRESH, TransferMethod.COOKIE)
        if access or refresh:
            logger.debug("Session tokens read from cookies")
            return TokenExtractionResult(
                access_token=access or None,
                refresh_token=refresh or None,
                transfer_method=TransferMethod.COOKIE,
            )

    return TokenExtractionResult()
