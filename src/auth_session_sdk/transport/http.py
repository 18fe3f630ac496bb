"""
Framework-agnostic request/response abstractions.

The transport layer never touches a framework object directly. It reads
from a `BaseRequest` and stages its writes on a `SessionResponse`, which a
framework adapter (FastAPI, Django) flushes onto the real response once,
when the response is finalised.

Staging is what makes "one Set-Cookie per cookie name, last write wins"
possible: most HTTP libraries only append Set-Cookie headers.
"""

from typing import Iterable, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

from auth_session_sdk.domain.value_objects import CookieSpec


def parse_cookie_header(cookie_header: Optional[str]) -> list[Tuple[str, str]]:
    """
    Raw `Cookie:` header -> (name, raw value) pairs in header order.

    Duplicate names are kept; values are not unquoted or decoded.
    """
    pairs = []
    for part in (cookie_header or "").split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name:
            pairs.append((name.strip(), value.strip()))
    return pairs


@runtime_checkable
class BaseRequest(Protocol):
    """
    Read-only view over an inbound HTTP request.

    Implementations:
    - SimpleRequest: plain mappings (tests, custom servers)
    - StarletteRequest: FastAPI/Starlette (contrib.fastapi)
    - DjangoRequest: Django (contrib.django)
    """

    def get_header(self, key: str) -> Optional[str]:
        """Header value by case-insensitive name, None if absent."""
        ...

    def get_cookies(self) -> Iterable[Tuple[str, str]]:
        """All (name, raw value) cookie pairs in request order."""
        ...

    def get_method(self) -> str:
        ...


class SimpleRequest:
    """BaseRequest over plain mappings."""

    def __init__(
        self,
        headers: Optional[Mapping[str, str]] = None,
        cookies: Union[Mapping[str, str], Iterable[Tuple[str, str]], None] = None,
        method: str = "GET",
    ):
        self._headers = {k.lower(): v for k, v in (headers or {}).items()}
        if cookies is None:
            cookies = []
        elif isinstance(cookies, Mapping):
            cookies = list(cookies.items())
        self._cookies = list(cookies)
        self._method = method.upper()

    @classmethod
    def from_cookie_header(
        cls,
        cookie_header: str,
        headers: Optional[Mapping[str, str]] = None,
        method: str = "GET",
    ) -> "SimpleRequest":
        """Build a request from a raw `Cookie:` header value."""
        return cls(
            headers=headers, cookies=parse_cookie_header(cookie_header), method=method
        )

    def get_header(self, key: str) -> Optional[str]:
        return self._headers.get(key.lower())

    def get_cookies(self) -> Iterable[Tuple[str, str]]:
        return iter(self._cookies)

    def get_method(self) -> str:
        return self._method


class SessionResponse:
    """
    Header and cookie writes staged for a single response.

    Scoped to one response lifecycle; only the handler producing that
    response may mutate it.

    - Header names are case-insensitive; the first spelling used is kept.
    - Cookies are keyed by name: writing a staged name replaces it in place.
    - Removed headers are remembered so the flush can delete values the
      framework response already carries.
    """

    def __init__(self):
        self._headers: dict[str, Tuple[str, str]] = {}
        self._removed: set[str] = set()
        self._cookies: dict[str, CookieSpec] = {}

    def get_header(self, key: str) -> Optional[str]:
        entry = self._headers.get(key.lower())
        return entry[1] if entry else None

    def set_header(self, key: str, value: str) -> None:
        lower = key.lower()
        existing = self._headers.get(lower)
        self._headers[lower] = (existing[0] if existing else key, value)
        self._removed.discard(lower)

    def remove_header(self, key: str) -> None:
        lower = key.lower()
        self._headers.pop(lower, None)
        self._removed.add(lower)

    def set_cookie(self, cookie: CookieSpec) -> None:
        self._cookies[cookie.name] = cookie

    def get_cookie(self, name: str) -> Optional[CookieSpec]:
        return self._cookies.get(name)

    @property
    def headers(self) -> dict[str, str]:
        return {key: value for key, value in self._headers.values()}

    @property
    def removed_headers(self) -> frozenset[str]:
        return frozenset(self._removed)

    @property
    def cookies(self) -> list[CookieSpec]:
        return list(self._cookies.values())

    def set_cookie_headers(self) -> list[str]:
        """Set-Cookie values, one per cookie name, in first-write order."""
        return [cookie.serialize() for cookie in self._cookies.values()]

    def is_empty(self) -> bool:
        return not (self._headers or self._removed or self._cookies)
