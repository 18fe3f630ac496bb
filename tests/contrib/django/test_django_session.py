import json
from unittest.mock import AsyncMock

import pytest
from django.http import HttpResponse, JsonResponse
from django.test import RequestFactory

from auth_session_sdk.contrib.django.decorators import verify_session
from auth_session_sdk.contrib.django.middleware import (
    SESSION_RESPONSE_ATTR,
    DjangoRequest,
    SessionMiddleware,
    apply_session_response,
    get_session_response,
)
from auth_session_sdk.domain.errors import TransportFailureError
from auth_session_sdk.domain.value_objects import CookieSpec, SameSite
from auth_session_sdk.recipes.session import SessionRecipe
from auth_session_sdk.transport.http import SessionResponse


def _verify_ok():
    return {
        "status": "OK",
        "session": {"handle": "handle-1", "userId": "user-1", "userDataInJWT": {}},
    }


async def _unreachable_view(request):
    raise AssertionError("view must not run without a session")


@pytest.fixture
def request_factory():
    return RequestFactory()


@pytest.fixture
def recipe(config, mock_querier):
    return SessionRecipe(config, mock_querier)


# -----------------------------------------------------------------------------
# Adapters
# -----------------------------------------------------------------------------


def test_django_request_adapter(request_factory):
    request = request_factory.post(
        "/",
        HTTP_AUTHORIZATION="Bearer at",
        HTTP_COOKIE="sAccessToken=a%2Bb; other=1",
    )
    wrapped = DjangoRequest(request)

    assert wrapped.get_header("authorization") == "Bearer at"
    assert wrapped.get_header("anti-csrf") is None
    assert dict(wrapped.get_cookies())["sAccessToken"] == "a%2Bb"
    assert wrapped.get_method() == "POST"


def test_django_request_duplicate_cookie_first_one_wins(request_factory):
    request = request_factory.get(
        "/", HTTP_COOKIE="sAccessToken=first; sAccessToken=second"
    )

    assert list(DjangoRequest(request).get_cookies()) == [
        ("sAccessToken", "first"),
        ("sAccessToken", "second"),
    ]


def test_apply_session_response():
    response = HttpResponse("OK")
    response.set_cookie("sAccessToken", "stale")
    response["anti-csrf"] = "old"
    response["Access-Control-Expose-Headers"] = "x-app"

    staged = SessionResponse()
    staged.set_cookie(
        CookieSpec(
            name="sAccessToken",
            value="fresh",
            domain="example.com",
            expires=0,
            secure=True,
            same_site=SameSite.NONE,
        )
    )
    staged.remove_header("anti-csrf")
    staged.set_header("Access-Control-Expose-Headers", "front-token")

    apply_session_response(staged, response)

    morsel = response.cookies["sAccessToken"]
    assert morsel.value == "fresh"
    assert morsel["expires"] == "Thu, 01 Jan 1970 00:00:00 GMT"
    assert morsel["domain"] == "example.com"
    assert morsel["samesite"] == "None"
    assert morsel["secure"] is True
    assert morsel["httponly"] is True
    assert not response.has_header("anti-csrf")
    assert response["Access-Control-Expose-Headers"] == "x-app, front-token"


def test_get_session_response_is_cached(request_factory):
    request = request_factory.get("/")
    assert get_session_response(request) is get_session_response(request)


# -----------------------------------------------------------------------------
# Middleware
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_middleware_flushes_staged_writes(request_factory):
    async def view(request):
        staged = getattr(request, SESSION_RESPONSE_ATTR)
        staged.set_header("front-token", "remove")
        staged.set_cookie(CookieSpec(name="sRefreshToken", value=""))
        return HttpResponse("OK")

    middleware = SessionMiddleware(get_response=view)
    response = await middleware(request_factory.get("/"))

    assert response["front-token"] == "remove"
    assert response.cookies["sRefreshToken"].value == ""


# -----------------------------------------------------------------------------
# verify_session decorator
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_verify_session_ok(recipe, mock_querier, request_factory):
    mock_querier.send_post_request.return_value = _verify_ok()

    @verify_session(recipe)
    async def view(request):
        return JsonResponse({"user_id": request.session_info.user_id})

    response = await view(request_factory.get("/", HTTP_AUTHORIZATION="Bearer at"))

    assert response.status_code == 200
    assert json.loads(response.content) == {"user_id": "user-1"}


@pytest.mark.asyncio
async def test_verify_session_optional(recipe, request_factory):
    @verify_session(recipe, session_required=False)
    async def view(request):
        return JsonResponse({"signed_in": request.session_info is not None})

    response = await view(request_factory.get("/"))
    assert json.loads(response.content) == {"signed_in": False}


@pytest.mark.asyncio
async def test_verify_session_missing(recipe, request_factory):
    view_impl = AsyncMock(return_value=HttpResponse("OK"))

    @verify_session(recipe)
    async def view(request):
        return await view_impl(request)

    response = await view(request_factory.get("/"))

    assert response.status_code == 401
    assert json.loads(response.content)["error"] == "UNAUTHORISED"
    assert not response.cookies
    view_impl.assert_not_awaited()


@pytest.mark.asyncio
async def test_verify_session_invalid_clears_tokens(recipe, mock_querier, request_factory):
    mock_querier.send_post_request.return_value = {"status": "UNAUTHORISED"}
    view = verify_session(recipe)(_unreachable_view)

    response = await view(request_factory.get("/", HTTP_COOKIE="sAccessToken=revoked"))

    assert response.status_code == 401
    assert response.cookies["sAccessToken"]["expires"] == "Thu, 01 Jan 1970 00:00:00 GMT"
    assert response.cookies["sRefreshToken"]["path"] == "/auth/session/refresh"
    assert response["front-token"] == "remove"


@pytest.mark.asyncio
async def test_verify_session_core_unavailable(recipe, mock_querier, request_factory):
    mock_querier.send_post_request.side_effect = TransportFailureError()
    view = verify_session(recipe)(_unreachable_view)

    response = await view(request_factory.get("/", HTTP_AUTHORIZATION="Bearer at"))

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_verify_session_under_middleware(recipe, mock_querier, request_factory):
    mock_querier.send_post_request.return_value = {
        **_verify_ok(),
        "accessToken": {"token": "at-2", "expiry": 1700000000000},
    }

    @verify_session(recipe)
    async def view(request):
        return HttpResponse("OK")

    middleware = SessionMiddleware(get_response=view)
    response = await middleware(
        request_factory.get("/", HTTP_COOKIE="sAccessToken=at-1")
    )

    assert response.status_code == 200
    assert response.cookies["sAccessToken"].value == "at-2"
    assert response["front-token"]
