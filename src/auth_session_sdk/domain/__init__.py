"""Domain layer: value objects and the error taxonomy."""

from auth_session_sdk.domain.errors import (
    AuthDomainError,
    AuthenticationError,
    SessionTransportError,
    TokenTheftDetectedError,
    TransportFailureError,
    TryRefreshTokenError,
    UnauthorisedError,
    UnknownTokenTypeError,
    UnknownTransferMethodError,
)
from auth_session_sdk.domain.value_objects import (
    CookieSpec,
    SameSite,
    TokenInfo,
    TokenType,
    TransferMethod,
)

__all__ = [
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
]
