from typing import Iterable, Optional, Tuple
import logging

from django.http import HttpRequest, HttpResponse

from auth_session_sdk.transport.constants import ACCESS_CONTROL_EXPOSE_HEADERS
from auth_session_sdk.transport.http import SessionResponse, parse_cookie_header

logger = logging.getLogger(__name__)

SESSION_RESPONSE_ATTR = "auth_session_response"


class DjangoRequest:
    """BaseRequest over a Django request."""

    def __init__(self, request: HttpRequest):
        self.request = request

    def get_header(self, key: str) -> Optional[str]:
        return self.request.headers.get(key)

    def get_cookies(self) -> Iterable[Tuple[str, str]]:
        # request.COOKIES keeps the last duplicate; the first must win
        return parse_cookie_header(self.request.META.get("HTTP_COOKIE"))

    def get_method(self) -> str:
        return (self.request.method or "GET").upper()


def get_session_response(request: HttpRequest) -> SessionResponse:
    """Staged response for the current request, created on demand."""
    staged = getattr(request, SESSION_RESPONSE_ATTR, None)
    if staged is None:
        staged = SessionResponse()
        setattr(request, SESSION_RESPONSE_ATTR, staged)
    return staged


def apply_session_response(staged: SessionResponse, response: HttpResponse) -> None:
    """
    Flush staged headers and cookies onto a Django response.

    Django keys response cookies by name, so a staged cookie replaces any
    cookie of the same name the view already set.
    """
    for key in staged.removed_headers:
        if response.has_header(key):
            del response[key]

    for key, value in staged.headers.items():
        existing = response.get(key)
        if existing and key.lower() == ACCESS_CONTROL_EXPOSE_HEADERS.lower():
            value = f"{existing}, {value}"
        response[key] = value

    for cookie in staged.cookies:
        response.set_cookie(
            cookie.name,
            cookie.value,
            expires=cookie.expires_header,
            path=cookie.path,
            domain=cookie.domain,
            secure=cookie.secure,
            httponly=cookie.http_only,
            samesite=cookie.same_site.attribute,
        )


class SessionMiddleware:
    """Stages session headers/cookies per request and flushes them onto the response."""

    async_capable = True
    sync_capable = False

    def __init__(self, get_response):
        self.get_response = get_response

    async def __call__(self, request: HttpRequest) -> HttpResponse:
        staged = SessionResponse()
        setattr(request, SESSION_RESPONSE_ATTR, staged)
        response = await self.get_response(request)
        apply_session_response(staged, response)
        return response
