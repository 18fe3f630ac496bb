"""
Header and cookie codec.

Pure functions reading or writing a single named header or cookie.
Absent values are signalled with None, never with an exception.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote_plus, unquote_plus

from auth_session_sdk.domain.value_objects import CookieSpec
from auth_session_sdk.transport.http import BaseRequest, SessionResponse

logger = logging.getLogger(__name__)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def escape_cookie_value(value: str) -> str:
    """Query-escape: space -> '+', anything outside [A-Za-z0-9-_.~] -> %XX."""
    return quote_plus(value, safe="")


def unescape_cookie_value(value: str) -> str:
    """
    Inverse of escape_cookie_value.

    Raises:
        ValueError: On a '%' not followed by two hex digits, or on
            escapes that do not decode to UTF-8
    """
    if _BAD_ESCAPE.search(value):
        raise ValueError(f"invalid URL escape in {value!r}")
    return unquote_plus(value, errors="strict")


def read_header(request: BaseRequest, key: str) -> Optional[str]:
    value = request.get_header(key)
    if not value:
        return None
    return value


def write_header(
    response: SessionResponse, key: str, value: str, allow_duplicate: bool
) -> None:
    """
    Set a response header.

    With allow_duplicate an existing value is extended as "existing, value"
    (used for Access-Control-Expose-Headers); otherwise last write wins.
    """
    existing = response.get_header(key)
    if existing and allow_duplicate:
        response.set_header(key, f"{existing}, {value}")
    else:
        response.set_header(key, value)


def read_cookie(request: BaseRequest, name: str) -> Optional[str]:
    """
    First cookie with the given name, URL-decoded.

    A value that fails to decode is treated as absent: a malformed cookie
    is equivalent to no session.
    """
    for cookie_name, raw_value in request.get_cookies():
        if cookie_name != name:
            continue
        try:
            return unescape_cookie_value(raw_value)
        except ValueError as e:
            logger.warning(f"Ignoring malformed cookie {name}: {e}")
            return None
    return None


def write_cookie(response: SessionResponse, cookie: CookieSpec) -> None:
    """Stage a cookie; replaces any cookie of the same name already staged."""
    response.set_cookie(cookie)


def cookie_name_from_set_cookie(header_value: str) -> str:
    """'sAccessToken=abc; Path=/' -> 'sAccessToken'"""
    first = header_value.strip().split(";", 1)[0].strip()
    if not first:
        return ""
    return first.split("=", 1)[0].strip()
