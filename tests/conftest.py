"""
Pytest configuration for auth-session-sdk tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from auth_session_sdk.config import SessionConfig
from auth_session_sdk.ports.core import CoreQuerierPort
from auth_session_sdk.transport.http import SessionResponse


@pytest.fixture
def config():
    """Cookie-friendly config: secure lax cookies on example.com."""
    return SessionConfig.normalise(
        api_domain="https://api.example.com",
        api_base_path="/auth",
        cookie_domain="example.com",
        cookie_same_site="lax",
    )


@pytest.fixture
def response():
    return SessionResponse()


# -----------------------------------------------------------------------------
# MOCKS
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_querier():
    mock = MagicMock(spec=CoreQuerierPort)
    mock.send_post_request = AsyncMock(return_value={"status": "OK"})
    mock.send_get_request = AsyncMock(return_value={"status": "OK"})
    return mock


def core_session_result(
    user_id="user-1",
    handle="handle-1",
    access_token="at-1",
    refresh_token="rt-1",
    anti_csrf=None,
    payload=None,
):
    """Body the core returns from session create/refresh."""
    result = {
        "status": "OK",
        "session": {
            "handle": handle,
            "userId": user_id,
            "userDataInJWT": payload or {},
        },
        "accessToken": {
            "token": access_token,
            "expiry": 1700000000000,
            "createdTime": 1699990000000,
        },
        "refreshToken": {
            "token": refresh_token,
            "expiry": 1800000000000,
            "createdTime": 1699990000000,
        },
    }
    if anti_csrf is not None:
        result["antiCsrfToken"] = anti_csrf
    return result


@pytest.fixture
def session_result():
    return core_session_result
