import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from auth_session_sdk.transport.http import SessionResponse
from .adapters import apply_session_response

logger = logging.getLogger(__name__)


def get_session_response(request: Request) -> SessionResponse:
    """
    Staged response for the current request.

    Created by SessionMiddleware; created on demand otherwise, in which
    case the caller is responsible for flushing it.
    """
    staged = getattr(request.state, "session_response", None)
    if staged is None:
        staged = SessionResponse()
        request.state.session_response = staged
    return staged


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Stages session headers/cookies for each request and flushes them once,
    onto whatever response the app (or an exception handler) produced.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        staged = SessionResponse()
        request.state.session_response = staged
        request.state.session_middleware = True
        response = await call_next(request)
        if not staged.is_empty():
            logger.debug(
                f"Flushing {len(staged.cookies)} session cookie(s) for {request.url.path}"
            )
        apply_session_response(staged, response)
        return response
