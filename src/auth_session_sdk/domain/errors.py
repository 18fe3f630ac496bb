"""
Domain errors for the session SDK.

These errors provide a consistent interface for reporting failures
across the transport layer, the recipes and the framework adapters.
"""

from typing import Optional, Any


class AuthDomainError(Exception):
    """Base class for all SDK errors."""

    def __init__(
        self,
        message: str,
        code: str = "AUTH_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


# ═══════════════════════════════════════════════════════════════
# INVARIANT VIOLATIONS (internal errors)
# ═══════════════════════════════════════════════════════════════


class SessionTransportError(AuthDomainError):
    """Raised when the transport layer is handed a value outside its closed enums."""

    pass


class UnknownTokenTypeError(SessionTransportError):
    def __init__(self, token_type: Any = None):
        super().__init__(
            "Unknown token type, should never happen",
            "UNKNOWN_TOKEN_TYPE",
            {"token_type": repr(token_type)},
        )


class UnknownTransferMethodError(SessionTransportError):
    def __init__(self, transfer_method: Any = None):
        super().__init__(
            "Unknown token transfer method, should never happen",
            "UNKNOWN_TRANSFER_METHOD",
            {"transfer_method": repr(transfer_method)},
        )


# ═══════════════════════════════════════════════════════════════
# AUTHENTICATION CORE
# ═══════════════════════════════════════════════════════════════


class TransportFailureError(AuthDomainError):
    """
    Raised when a call to the authentication core could not complete
    (network error, non-2xx status, malformed JSON).
    """

    def __init__(
        self,
        message: str = "Authentication core request failed",
        code: str = "CORE_TRANSPORT_FAILURE",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


# ═══════════════════════════════════════════════════════════════
# SESSION STATE (user-facing, 401)
# ═══════════════════════════════════════════════════════════════


class AuthenticationError(AuthDomainError):
    """Raised when a request carries no usable session."""

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_FAILED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class UnauthorisedError(AuthenticationError):
    """
    Session missing or invalid.

    `clear_tokens` tells the framework adapter whether the tokens on the
    response must be cleared on every transfer method.
    """

    def __init__(
        self,
        message: str = "Session does not exist or has expired",
        clear_tokens: bool = True,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, "UNAUTHORISED", details)
        self.clear_tokens = clear_tokens


class TryRefreshTokenError(AuthenticationError):
    """Access token expired; the client should call the refresh endpoint."""

    def __init__(
        self,
        message: str = "Try refresh token",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, "TRY_REFRESH_TOKEN", details)


class TokenTheftDetectedError(AuthenticationError):
    """A refresh token was reused; the core revoked the session family."""

    def __init__(
        self,
        session_handle: Optional[str] = None,
        user_id: Optional[str] = None,
    ):
        details = {"session_handle": session_handle, "user_id": user_id}
        details = {k: v for k, v in details.items() if v is not None}
        super().__init__("Token theft detected", "TOKEN_THEFT_DETECTED", details)
        self.session_handle = session_handle
        self.user_id = user_id
