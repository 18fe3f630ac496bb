"""
Domain value objects for session token transport.

Value objects are immutable and have no identity: they are defined
only by their attributes. Everything the transport layer writes onto
a response is expressed with these types first.
"""

import base64
import json
from dataclasses import dataclass
from email.utils import formatdate
from enum import Enum
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════


class TransferMethod(str, Enum):
    """
    Wire representation carrying a session token.

    - COOKIE: httpOnly cookies (browser clients)
    - HEADER: Authorization request header, st-* response headers
    """

    COOKIE = "cookie"
    HEADER = "header"


class TokenType(str, Enum):
    """Session token kinds. Drives cookie name, header name and cookie path."""

    ACCESS = "access"
    REFRESH = "refresh"


class SameSite(str, Enum):
    NONE = "none"
    LAX = "lax"
    STRICT = "strict"

    @property
    def attribute(self) -> str:
        """Value as written in a Set-Cookie header."""
        return self.value.capitalize()


# ═══════════════════════════════════════════════════════════════
# FRONT TOKEN
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TokenInfo:
    """
    Client-readable summary of a session.

    Announced in the front-token header so front-end code can learn
    the user id and access token expiry without polling the backend.
    """

    uid: str
    ate: int  # access token expiry, epoch millis
    up: Any = None  # access token payload

    def to_json(self) -> str:
        return json.dumps(
            {"uid": self.uid, "ate": self.ate, "up": self.up},
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def encode(self) -> str:
        """JSON, then standard base64."""
        return base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")

    @classmethod
    def decode(cls, value: str) -> "TokenInfo":
        data = json.loads(base64.b64decode(value))
        return cls(uid=data["uid"], ate=data["ate"], up=data.get("up"))


# ═══════════════════════════════════════════════════════════════
# COOKIES
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class CookieSpec:
    """
    A cookie staged for a response.

    `value` is stored already escaped. `expires` is epoch millis and is
    written with seconds resolution; 0 expires the cookie immediately.
    """

    name: str
    value: str
    path: str = "/"
    domain: Optional[str] = None
    expires: int = 0
    secure: bool = False
    http_only: bool = True
    same_site: SameSite = SameSite.LAX

    @property
    def expires_header(self) -> str:
        return formatdate(self.expires // 1000, usegmt=True)

    def serialize(self) -> str:
        """Render as a Set-Cookie header value."""
        parts = [f"{self.name}={self.value}"]
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain.lstrip('.')}")
        parts.append(f"Expires={self.expires_header}")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        parts.append(f"SameSite={self.same_site.attribute}")
        return "; ".join(parts)
