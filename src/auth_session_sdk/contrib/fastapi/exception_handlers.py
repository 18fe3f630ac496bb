"""
Exception handlers for FastAPI.

Maps SDK errors to HTTP responses. Session errors that invalidate the
session also clear its tokens on every transfer method.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from auth_session_sdk.config import SessionConfig
from auth_session_sdk.domain.errors import (
    AuthDomainError,
    SessionTransportError,
    TokenTheftDetectedError,
    TransportFailureError,
    TryRefreshTokenError,
    UnauthorisedError,
)
from auth_session_sdk.transport.clearing import clear_session_from_all_transfer_methods
from .adapters import StarletteRequest, apply_session_response
from .middleware import get_session_response

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: AuthDomainError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message, "details": exc.details},
    )


def create_exception_handlers(config: SessionConfig) -> dict:
    """Handlers keyed by exception type, bound to the session config."""

    def _clear(request: Request, response: JSONResponse) -> None:
        staged = get_session_response(request)
        clear_session_from_all_transfer_methods(
            config, StarletteRequest(request), staged
        )
        # Without SessionMiddleware nobody else flushes the staged response.
        if not getattr(request.state, "session_middleware", False):
            apply_session_response(staged, response)

    async def unauthorised_handler(request: Request, exc: UnauthorisedError):
        """Handle UnauthorisedError (401)."""
        response = _error_response(status.HTTP_401_UNAUTHORIZED, exc)
        if exc.clear_tokens:
            _clear(request, response)
        return response

    async def try_refresh_token_handler(request: Request, exc: TryRefreshTokenError):
        """Handle TryRefreshTokenError (401, tokens kept)."""
        return _error_response(status.HTTP_401_UNAUTHORIZED, exc)

    async def token_theft_handler(request: Request, exc: TokenTheftDetectedError):
        """Handle TokenTheftDetectedError (401)."""
        response = _error_response(status.HTTP_401_UNAUTHORIZED, exc)
        _clear(request, response)
        return response

    async def transport_failure_handler(request: Request, exc: TransportFailureError):
        """Handle TransportFailureError (503): the core could not be reached."""
        logger.error(f"Authentication core unavailable: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": exc.code, "message": exc.message},
        )

    async def internal_error_handler(request: Request, exc: SessionTransportError):
        """Handle invariant violations (500)."""
        logger.error(f"Session transport invariant violated: {exc.message} {exc.details}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "INTERNAL_ERROR", "message": "An internal error occurred"},
        )

    return {
        UnauthorisedError: unauthorised_handler,
        TryRefreshTokenError: try_refresh_token_handler,
        TokenTheftDetectedError: token_theft_handler,
        TransportFailureError: transport_failure_handler,
        SessionTransportError: internal_error_handler,
    }


def register_exception_handlers(app, config: SessionConfig):
    """
    Register uniform exception handlers for the FastAPI app.

    Args:
        app: The FastAPI application instance
        config: Session config used when clearing tokens
    """
    for exc_class, handler in create_exception_handlers(config).items():
        app.add_exception_handler(exc_class, handler)
