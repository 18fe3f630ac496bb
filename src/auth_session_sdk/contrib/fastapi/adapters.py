"""
Starlette request/response adapters.

Bridges FastAPI/Starlette objects and the framework-agnostic transport
layer: wraps the inbound request as a BaseRequest and flushes a staged
SessionResponse onto the outgoing response.
"""

from typing import Iterable, Optional, Tuple

from starlette.requests import Request
from starlette.responses import Response

from auth_session_sdk.transport.codec import cookie_name_from_set_cookie
from auth_session_sdk.transport.constants import ACCESS_CONTROL_EXPOSE_HEADERS
from auth_session_sdk.transport.http import SessionResponse, parse_cookie_header


class StarletteRequest:
    """BaseRequest over a Starlette request."""

    def __init__(self, request: Request):
        self.request = request

    def get_header(self, key: str) -> Optional[str]:
        return self.request.headers.get(key)

    def get_cookies(self) -> Iterable[Tuple[str, str]]:
        # request.cookies keeps the last duplicate; the first must win
        return parse_cookie_header(self.request.headers.get("cookie"))

    def get_method(self) -> str:
        return self.request.method.upper()


def apply_session_response(staged: SessionResponse, response: Response) -> None:
    """
    Flush staged headers and cookies onto a Starlette response.

    Any Set-Cookie already on the response for a staged cookie name is
    dropped first, so each name appears exactly once.
    """
    if staged.is_empty():
        return

    staged_names = {cookie.name for cookie in staged.cookies}
    if staged_names:
        response.raw_headers[:] = [
            (key, value)
            for key, value in response.raw_headers
            if not (
                key == b"set-cookie"
                and cookie_name_from_set_cookie(value.decode("latin-1"))
                in staged_names
            )
        ]

    for key in staged.removed_headers:
        if key in response.headers:
            del response.headers[key]

    for key, value in staged.headers.items():
        existing = response.headers.get(key)
        if existing and key.lower() == ACCESS_CONTROL_EXPOSE_HEADERS.lower():
            value = f"{existing}, {value}"
        response.headers[key] = value

    for set_cookie in staged.set_cookie_headers():
        response.headers.append("set-cookie", set_cookie)
