"""
Dashboard recipe.

Decides who may open the admin dashboard and where its bundle is served
from. Without a configured API key, the bearer value is a dashboard
session id verified by the authentication core.
"""

import hmac
import logging
from typing import Protocol

from auth_session_sdk.config import DashboardConfig
from auth_session_sdk.ports.core import CoreQuerierPort
from auth_session_sdk.transport.codec import read_header
from auth_session_sdk.transport.constants import AUTHORIZATION_HEADER_KEY
from auth_session_sdk.transport.http import BaseRequest

logger = logging.getLogger(__name__)

DASHBOARD_SESSION_VERIFY_PATH = "/recipe/dashboard/session/verify"
DASHBOARD_BUNDLE_URL = "https://cdn.jsdelivr.net/gh/supertokens/dashboard@v{version}/build/"


class DashboardRecipeInterface(Protocol):
    async def get_dashboard_bundle_location(self) -> str: ...

    async def should_allow_access(self, request: BaseRequest) -> bool: ...


def _bearer_value(request: BaseRequest) -> str:
    """'Bearer KEY' -> 'KEY'; the last space-separated part of authorization."""
    value = read_header(request, AUTHORIZATION_HEADER_KEY) or ""
    return value.split(" ")[-1]


class DashboardRecipe(DashboardRecipeInterface):
    def __init__(self, config: DashboardConfig, querier: CoreQuerierPort):
        self.config = config
        self.querier = querier

    async def get_dashboard_bundle_location(self) -> str:
        return DASHBOARD_BUNDLE_URL.format(version=self.config.dashboard_version)

    async def should_allow_access(self, request: BaseRequest) -> bool:
        """
        Raises:
            TransportFailureError: The core could not be reached; there is
                no safe default answer
        """
        key = _bearer_value(request)

        if not self.config.api_key:
            result = await self.querier.send_post_request(
                DASHBOARD_SESSION_VERIFY_PATH, {"sessionId": key}
            )
            allowed = result.get("status") == "OK"
            if not allowed:
                logger.info(f"Dashboard session rejected: {result.get('status')}")
            return allowed

        if not key:
            return False
        return hmac.compare_digest(key.encode(), self.config.api_key.encode())
