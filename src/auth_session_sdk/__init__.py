"""
auth-session-sdk: session token transport for backends embedding an
external authentication core.

Decides per request how access/refresh and anti-CSRF tokens travel
(cookies or headers), and reads, rotates and clears them consistently
with the core's session verification.
"""

__version__ = "0.1.0"

from auth_session_sdk.config import SessionConfig, DashboardConfig
from auth_session_sdk.domain import (
    AuthDomainError,
    AuthenticationError,
    CookieSpec,
    SameSite,
    SessionTransportError,
    TokenInfo,
    TokenTheftDetectedError,
    TokenType,
    TransferMethod,
    TransportFailureError,
    TryRefreshTokenError,
    UnauthorisedError,
    UnknownTokenTypeError,
    UnknownTransferMethodError,
)
from auth_session_sdk.transport import (
    BaseRequest,
    SimpleRequest,
    SessionResponse,
    get_token,
    set_token,
    extract_tokens,
    clear_session,
    clear_session_from_all_transfer_methods,
    announce_front_token,
    announce_front_token_removed,
    get_anti_csrf_token,
    set_anti_csrf_token,
)
from auth_session_sdk.recipes import (
    RecipeOverride,
    SessionInfo,
    SessionRecipe,
    DashboardRecipe,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "SessionConfig",
    "DashboardConfig",
    # Value objects
    "CookieSpec",
    "SameSite",
    "TokenInfo",
    "TokenType",
    "TransferMethod",
    # Errors
    "AuthDomainError",
    "AuthenticationError",
    "SessionTransportError",
    "TokenTheftDetectedError",
    "TransportFailureError",
    "TryRefreshTokenError",
    "UnauthorisedError",
    "UnknownTokenTypeError",
    "UnknownTransferMethodError",
    # Transport
    "BaseRequest",
    "SimpleRequest",
    "SessionResponse",
    "get_token",
    "set_token",
    "extract_tokens",
    "clear_session",
    "clear_session_from_all_transfer_methods",
    "announce_front_token",
    "announce_front_token_removed",
    "get_anti_csrf_token",
    "set_anti_csrf_token",
    # Recipes
    "RecipeOverride",
    "SessionInfo",
    "SessionRecipe",
    "DashboardRecipe",
]
