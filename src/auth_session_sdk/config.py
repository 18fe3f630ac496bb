"""
SDK configuration.

Configuration is normalised once, at startup, into frozen dataclasses
and then handed to every component that needs it. Nothing in the SDK
reads configuration from a global.

Usage:
    config = SessionConfig.normalise(
        api_domain="https://api.example.com",
        cookie_domain=".example.com",
        cookie_same_site="lax",
    )
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union
from urllib.parse import urlparse

from auth_session_sdk.domain.value_objects import SameSite, TransferMethod

logger = logging.getLogger(__name__)


TOKEN_TRANSFER_ANY = "any"

ANTI_CSRF_VIA_TOKEN = "VIA_TOKEN"
ANTI_CSRF_VIA_CUSTOM_HEADER = "VIA_CUSTOM_HEADER"
ANTI_CSRF_NONE = "NONE"

_ANTI_CSRF_MODES = (ANTI_CSRF_VIA_TOKEN, ANTI_CSRF_VIA_CUSTOM_HEADER, ANTI_CSRF_NONE)

REFRESH_API_PATH = "/session/refresh"
SIGNOUT_API_PATH = "/signout"

# (request, for_create_new_session) -> TransferMethod or "any"
TokenTransferMethodGetter = Callable[[Any, bool], Union[TransferMethod, str]]


def normalise_api_base_path(path: Optional[str]) -> str:
    """'auth/' -> '/auth', '' or '/' -> ''"""
    if not path:
        return ""
    path = "/" + path.strip().strip("/")
    return "" if path == "/" else path


def normalise_cookie_domain(domain: Optional[str]) -> Optional[str]:
    """
    Reduce a configured cookie domain to a bare host.

    Accepts URLs ("https://api.example.com:3000/auth") as well as hosts.
    A leading dot is preserved; it widens the cookie to subdomains.
    """
    if domain is None:
        return None
    domain = domain.strip().lower()
    if not domain:
        return None
    leading_dot = domain.startswith(".")
    if leading_dot:
        domain = domain[1:]
    if "://" not in domain:
        domain = "http://" + domain
    host = urlparse(domain).hostname
    if not host:
        raise ValueError(f"Please provide a valid cookie_domain: {domain!r}")
    return "." + host if leading_dot else host


def normalise_same_site(value: Union[str, SameSite, None]) -> SameSite:
    if value is None:
        return SameSite.LAX
    if isinstance(value, SameSite):
        return value
    try:
        return SameSite(value.strip().lower())
    except ValueError:
        raise ValueError(
            'cookie_same_site must be one of "strict", "lax", or "none"'
        ) from None


def normalise_token_transfer_method(
    value: Union[str, TransferMethod, None],
) -> Union[TransferMethod, str]:
    if value is None or value == TOKEN_TRANSFER_ANY:
        return TOKEN_TRANSFER_ANY
    if isinstance(value, TransferMethod):
        return value
    try:
        return TransferMethod(value.strip().lower())
    except ValueError:
        raise ValueError(
            'token_transfer_method must be one of "any", "cookie", or "header"'
        ) from None


@dataclass(frozen=True)
class SessionConfig:
    """Normalised session configuration. Build with `normalise` or `from_dict`."""

    api_base_path: str = "/auth"
    cookie_domain: Optional[str] = None
    cookie_secure: bool = True
    cookie_same_site: SameSite = SameSite.LAX
    anti_csrf: str = ANTI_CSRF_NONE
    token_transfer_method: Union[TransferMethod, str] = TOKEN_TRANSFER_ANY
    get_token_transfer_method: Optional[TokenTransferMethodGetter] = None

    @property
    def refresh_token_path(self) -> str:
        return self.api_base_path + REFRESH_API_PATH

    @property
    def signout_path(self) -> str:
        return self.api_base_path + SIGNOUT_API_PATH

    @classmethod
    def normalise(
        cls,
        api_domain: Optional[str] = None,
        api_base_path: Optional[str] = "/auth",
        cookie_domain: Optional[str] = None,
        cookie_secure: Optional[bool] = None,
        cookie_same_site: Union[str, SameSite, None] = None,
        anti_csrf: Optional[str] = None,
        token_transfer_method: Union[str, TransferMethod, None] = None,
        get_token_transfer_method: Optional[TokenTransferMethodGetter] = None,
    ) -> "SessionConfig":
        """
        Validate raw settings and fill in defaults.

        Defaults:
            cookie_secure: True when api_domain is https (True if unknown)
            cookie_same_site: lax
            anti_csrf: VIA_CUSTOM_HEADER for SameSite=None, NONE otherwise

        Raises:
            ValueError: On invalid values or an insecure SameSite=None setup
        """
        same_site = normalise_same_site(cookie_same_site)

        if cookie_secure is None:
            cookie_secure = (
                True if api_domain is None else api_domain.startswith("https")
            )

        if same_site == SameSite.NONE and not cookie_secure:
            raise ValueError(
                'cookie_same_site "none" requires secure cookies: serve the API '
                "over https and do not set cookie_secure to False"
            )

        if anti_csrf is None:
            anti_csrf = (
                ANTI_CSRF_VIA_CUSTOM_HEADER
                if same_site == SameSite.NONE
                else ANTI_CSRF_NONE
            )
        anti_csrf = anti_csrf.upper()
        if anti_csrf not in _ANTI_CSRF_MODES:
            raise ValueError(
                'anti_csrf must be one of "VIA_TOKEN", "VIA_CUSTOM_HEADER" or "NONE"'
            )

        config = cls(
            api_base_path=normalise_api_base_path(api_base_path),
            cookie_domain=normalise_cookie_domain(cookie_domain),
            cookie_secure=cookie_secure,
            cookie_same_site=same_site,
            anti_csrf=anti_csrf,
            token_transfer_method=normalise_token_transfer_method(
                token_transfer_method
            ),
            get_token_transfer_method=get_token_transfer_method,
        )
        logger.debug(f"Session config normalised: {config}")
        return config

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "SessionConfig":
        """Normalise from a plain mapping (e.g. dependency_injector config)."""
        data = data or {}
        return cls.normalise(
            api_domain=data.get("api_domain"),
            api_base_path=data.get("api_base_path", "/auth"),
            cookie_domain=data.get("cookie_domain"),
            cookie_secure=data.get("cookie_secure"),
            cookie_same_site=data.get("cookie_same_site"),
            anti_csrf=data.get("anti_csrf"),
            token_transfer_method=data.get("token_transfer_method"),
        )


@dataclass(frozen=True)
class DashboardConfig:
    """Dashboard recipe configuration. Without an api_key, access is verified by the core."""

    api_key: str = ""
    dashboard_version: str = "0.6"

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DashboardConfig":
        """Unset or None keys keep their defaults."""
        data = data or {}
        defaults = cls()
        api_key = data.get("api_key")
        version = data.get("dashboard_version")
        return cls(
            api_key=defaults.api_key if api_key is None else api_key,
            dashboard_version=(
                defaults.dashboard_version if version is None else str(version)
            ),
        )
