"""
Session recipe.

Creates, verifies, refreshes and revokes sessions by calling the
authentication core, and uses the transport layer to move the resulting
tokens between client and backend.

Usage:
    recipe = SessionRecipe(config, HttpxCoreQuerier("http://localhost:3567"))

    response = SessionResponse()
    session = await recipe.get_session(request, response)
    # ... then flush `response` onto the framework response
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from auth_session_sdk.config import (
    ANTI_CSRF_NONE,
    ANTI_CSRF_VIA_CUSTOM_HEADER,
    ANTI_CSRF_VIA_TOKEN,
    SessionConfig,
)
from auth_session_sdk.domain.errors import (
    TokenTheftDetectedError,
    TryRefreshTokenError,
    UnauthorisedError,
)
from auth_session_sdk.domain.value_objects import TokenType, TransferMethod
from auth_session_sdk.ports.core import CoreQuerierPort
from auth_session_sdk.transport.anti_csrf import get_anti_csrf_token
from auth_session_sdk.transport.attach import (
    IssuedToken,
    SessionTokens,
    access_token_cookie_expiry,
    attach_tokens,
)
from auth_session_sdk.transport.clearing import clear_session_from_all_transfer_methods
from auth_session_sdk.transport.codec import read_header
from auth_session_sdk.transport.constants import RID_HEADER_KEY
from auth_session_sdk.transport.front_token import announce_front_token
from auth_session_sdk.transport.http import BaseRequest, SessionResponse
from auth_session_sdk.transport.selector import resolve_output_transfer_method
from auth_session_sdk.transport.tokens import extract_tokens, set_token

logger = logging.getLogger(__name__)

CREATE_SESSION_PATH = "/recipe/session"
VERIFY_SESSION_PATH = "/recipe/session/verify"
REFRESH_SESSION_PATH = "/recipe/session/refresh"
REMOVE_SESSION_PATH = "/recipe/session/remove"


@dataclass
class SessionInfo:
    """A verified session, as seen by request handlers."""

    session_handle: str
    user_id: str
    access_token: str
    transfer_method: TransferMethod
    access_token_payload: dict = field(default_factory=dict)


class SessionRecipeInterface(Protocol):
    """Operations of the session recipe. Wrap with RecipeOverride to customise."""

    config: SessionConfig

    async def create_new_session(
        self,
        request: BaseRequest,
        response: SessionResponse,
        user_id: str,
        access_token_payload: Optional[dict] = None,
        session_data: Optional[dict] = None,
    ) -> SessionInfo: ...

    async def get_session(
        self,
        request: BaseRequest,
        response: SessionResponse,
        anti_csrf_check: Optional[bool] = None,
        session_required: bool = True,
    ) -> Optional[SessionInfo]: ...

    async def refresh_session(
        self, request: BaseRequest, response: SessionResponse
    ) -> SessionInfo: ...

    async def revoke_session(
        self,
        request: BaseRequest,
        response: SessionResponse,
        session_handle: str,
    ) -> bool: ...


def _issued(data: Optional[dict]) -> Optional[IssuedToken]:
    if not data:
        return None
    return IssuedToken(
        token=data["token"],
        expiry=int(data["expiry"]),
        created_time=int(data.get("createdTime", 0)),
    )


class SessionRecipe(SessionRecipeInterface):
    """Default SessionRecipeInterface implementation backed by the core."""

    def __init__(self, config: SessionConfig, querier: CoreQuerierPort):
        self.config = config
        self.querier = querier

    @property
    def anti_csrf_enabled(self) -> bool:
        return self.config.anti_csrf == ANTI_CSRF_VIA_TOKEN

    def _attach(
        self,
        request: BaseRequest,
        response: SessionResponse,
        result: dict,
        transfer_method: TransferMethod,
    ) -> SessionInfo:
        session = result["session"]
        tokens = SessionTokens(
            user_id=session["userId"],
            access_token=_issued(result["accessToken"]),
            refresh_token=_issued(result.get("refreshToken")),
            anti_csrf_token=result.get("antiCsrfToken"),
            access_token_payload=session.get("userDataInJWT") or {},
        )
        attach_tokens(self.config, request, response, tokens, transfer_method)
        return SessionInfo(
            session_handle=session["handle"],
            user_id=tokens.user_id,
            access_token=tokens.access_token.token,
            transfer_method=transfer_method,
            access_token_payload=tokens.access_token_payload,
        )

    def _check_custom_header(self, request: BaseRequest) -> None:
        if read_header(request, RID_HEADER_KEY) is None:
            raise UnauthorisedError(
                "anti-csrf check failed. Please pass 'rid: \"session\"' header "
                "in the request, or set anti_csrf to NONE",
                clear_tokens=False,
            )

    async def create_new_session(
        self,
        request: BaseRequest,
        response: SessionResponse,
        user_id: str,
        access_token_payload: Optional[dict] = None,
        session_data: Optional[dict] = None,
    ) -> SessionInfo:
        transfer_method = resolve_output_transfer_method(self.config, request)
        result = await self.querier.send_post_request(
            CREATE_SESSION_PATH,
            {
                "userId": user_id,
                "userDataInJWT": access_token_payload or {},
                "userDataInDatabase": session_data or {},
                # Anti-csrf tokens only protect cookies
                "enableAntiCsrf": self.anti_csrf_enabled
                and transfer_method == TransferMethod.COOKIE,
            },
        )
        logger.info(f"Created session for user {user_id} via {transfer_method.value}")
        return self._attach(request, response, result, transfer_method)

    async def get_session(
        self,
        request: BaseRequest,
        response: SessionResponse,
        anti_csrf_check: Optional[bool] = None,
        session_required: bool = True,
    ) -> Optional[SessionInfo]:
        """
        Verify the session carried by `request`.

        Raises:
            UnauthorisedError: No session (when required) or invalid session
            TryRefreshTokenError: Access token expired
            TransportFailureError: Core unreachable
        """
        tokens = extract_tokens(self.config, request)
        if not tokens.is_present:
            if not session_required:
                return None
            # A lone refresh token means the access token expired client-side
            if tokens.has_refresh:
                raise TryRefreshTokenError()
            raise UnauthorisedError("Session does not exist", clear_tokens=False)

        transfer_method = tokens.transfer_method
        if anti_csrf_check is None:
            anti_csrf_check = request.get_method() != "GET"
        if (
            transfer_method == TransferMethod.HEADER
            or self.config.anti_csrf == ANTI_CSRF_NONE
        ):
            anti_csrf_check = False
        elif anti_csrf_check and self.config.anti_csrf == ANTI_CSRF_VIA_CUSTOM_HEADER:
            self._check_custom_header(request)
            anti_csrf_check = False

        result = await self.querier.send_post_request(
            VERIFY_SESSION_PATH,
            {
                "accessToken": tokens.access_token,
                "antiCsrfToken": get_anti_csrf_token(request),
                "doAntiCsrfCheck": anti_csrf_check,
                "enableAntiCsrf": self.anti_csrf_enabled,
            },
        )
        status = result.get("status")
        if status == "UNAUTHORISED":
            raise UnauthorisedError(result.get("message", "Session is invalid"))
        if status == "TRY_REFRESH_TOKEN":
            raise TryRefreshTokenError(result.get("message", "Try refresh token"))
        if status != "OK":
            raise UnauthorisedError(f"Unexpected verify status: {status}")

        session = result["session"]
        access_token = tokens.access_token
        payload = session.get("userDataInJWT") or {}
        rotated = _issued(result.get("accessToken"))
        if rotated is not None:
            logger.debug(f"Access token rotated for session {session['handle']}")
            announce_front_token(response, session["userId"], rotated.expiry, payload)
            set_token(
                self.config,
                response,
                TokenType.ACCESS,
                rotated.token,
                access_token_cookie_expiry(),
                transfer_method,
            )
            access_token = rotated.token

        return SessionInfo(
            session_handle=session["handle"],
            user_id=session["userId"],
            access_token=access_token,
            transfer_method=transfer_method,
            access_token_payload=payload,
        )

    async def refresh_session(
        self, request: BaseRequest, response: SessionResponse
    ) -> SessionInfo:
        """
        Rotate the session using the refresh token.

        Raises:
            UnauthorisedError: Missing or invalid refresh token
            TokenTheftDetectedError: Refresh token reuse detected by the core
        """
        tokens = extract_tokens(self.config, request, token_type=TokenType.REFRESH)
        if not tokens.has_refresh:
            raise UnauthorisedError("Refresh token not found", clear_tokens=False)

        transfer_method = tokens.transfer_method
        if (
            transfer_method == TransferMethod.COOKIE
            and self.config.anti_csrf == ANTI_CSRF_VIA_CUSTOM_HEADER
        ):
            self._check_custom_header(request)

        result = await self.querier.send_post_request(
            REFRESH_SESSION_PATH,
            {
                "refreshToken": tokens.refresh_token,
                "antiCsrfToken": get_anti_csrf_token(request),
                "enableAntiCsrf": self.anti_csrf_enabled
                and transfer_method == TransferMethod.COOKIE,
            },
        )
        status = result.get("status")
        if status == "OK":
            return self._attach(request, response, result, transfer_method)

        clear_session_from_all_transfer_methods(self.config, request, response)
        if status == "TOKEN_THEFT_DETECTED":
            session = result.get("session", {})
            logger.warning(
                f"Token theft detected for session {session.get('handle')}"
            )
            raise TokenTheftDetectedError(session.get("handle"), session.get("userId"))
        raise UnauthorisedError(result.get("message", "Refresh token is invalid"))

    async def revoke_session(
        self,
        request: BaseRequest,
        response: SessionResponse,
        session_handle: str,
    ) -> bool:
        """Revoke in the core, then clear tokens on every transfer method."""
        result = await self.querier.send_post_request(
            REMOVE_SESSION_PATH, {"sessionHandles": [session_handle]}
        )
        clear_session_from_all_transfer_methods(self.config, request, response)
        return session_handle in result.get("sessionHandlesRevoked", [])
