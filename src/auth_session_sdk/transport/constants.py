"""Wire names shared by the transport layer."""

from auth_session_sdk.domain.value_objects import TransferMethod

AUTHORIZATION_HEADER_KEY = "authorization"
ACCESS_TOKEN_COOKIE_KEY = "sAccessToken"
ACCESS_TOKEN_HEADER_KEY = "st-access-token"
REFRESH_TOKEN_COOKIE_KEY = "sRefreshToken"
REFRESH_TOKEN_HEADER_KEY = "st-refresh-token"

ANTI_CSRF_HEADER_KEY = "anti-csrf"
RID_HEADER_KEY = "rid"

FRONT_TOKEN_HEADER_KEY = "front-token"
FRONT_TOKEN_REMOVED = "remove"

AUTH_MODE_HEADER_KEY = "st-auth-mode"

ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"

BEARER_PREFIX = "Bearer "

# Fixed and deployment independent: clearing always covers both.
AVAILABLE_TOKEN_TRANSFER_METHODS = (TransferMethod.COOKIE, TransferMethod.HEADER)
