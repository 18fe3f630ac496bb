"""Session token transport: how tokens travel between client and backend."""

from auth_session_sdk.transport.http import (
    BaseRequest,
    SimpleRequest,
    SessionResponse,
    parse_cookie_header,
)
from auth_session_sdk.transport.codec import (
    read_header,
    write_header,
    read_cookie,
    write_cookie,
    escape_cookie_value,
    unescape_cookie_value,
    cookie_name_from_set_cookie,
)
from auth_session_sdk.transport.selector import (
    get_auth_mode_from_header,
    get_token_transfer_method,
    resolve_output_transfer_method,
)
from auth_session_sdk.transport.tokens import (
    TokenExtractionResult,
    cookie_name_for,
    response_header_name_for,
    get_token,
    set_token,
    extract_tokens,
)
from auth_session_sdk.transport.clearing import (
    clear_session,
    clear_session_from_all_transfer_methods,
)
from auth_session_sdk.transport.front_token import (
    announce_front_token,
    announce_front_token_removed,
)
from auth_session_sdk.transport.anti_csrf import (
    get_anti_csrf_token,
    set_anti_csrf_token,
    get_cors_allowed_headers,
)
from auth_session_sdk.transport.attach import (
    IssuedToken,
    SessionTokens,
    attach_tokens,
)

__all__ = [
    # HTTP abstractions
    "BaseRequest",
    "SimpleRequest",
    "SessionResponse",
    "parse_cookie_header",
    # Codec
    "read_header",
    "write_header",
    "read_cookie",
    "write_cookie",
    "escape_cookie_value",
    "unescape_cookie_value",
    "cookie_name_from_set_cookie",
    # Selector
    "get_auth_mode_from_header",
    "get_token_transfer_method",
    "resolve_output_transfer_method",
    # Tokens
    "TokenExtractionResult",
    "cookie_name_for",
    "response_header_name_for",
    "get_token",
    "set_token",
    "extract_tokens",
    # Clearing
    "clear_session",
    "clear_session_from_all_transfer_methods",
    # Front token / anti-csrf
    "announce_front_token",
    "announce_front_token_removed",
    "get_anti_csrf_token",
    "set_anti_csrf_token",
    "get_cors_allowed_headers",
    # Attach
    "IssuedToken",
    "SessionTokens",
    "attach_tokens",
]
