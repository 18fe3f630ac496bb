"""
Tests for HttpxCoreQuerier.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from auth_session_sdk.domain.errors import TransportFailureError
from auth_session_sdk.infrastructure.querier import HttpxCoreQuerier


def _querier(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxCoreQuerier("http://core.local:3567/", client=client, **kwargs)


@pytest.mark.asyncio
async def test_post_request():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"status": "OK"})

    querier = _querier(handler, api_key="key-1", rid="session")
    result = await querier.send_post_request("/recipe/session", {"userId": "u1"})

    assert result == {"status": "OK"}
    assert seen["url"] == "http://core.local:3567/recipe/session"
    assert seen["body"] == {"userId": "u1"}
    assert seen["headers"]["api-key"] == "key-1"
    assert seen["headers"]["rid"] == "session"


@pytest.mark.asyncio
async def test_get_request_params_and_no_api_key():
    seen = {}

    def handler(request: httpx.Request):
        seen["params"] = dict(request.url.params)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"status": "OK", "isVerified": True})

    querier = _querier(handler)
    result = await querier.send_get_request("/recipe/user/email/verify", {"userId": "u1"})

    assert result["isVerified"] is True
    assert seen["params"] == {"userId": "u1"}
    assert "api-key" not in seen["headers"]


@pytest.mark.asyncio
async def test_error_status_is_transport_failure():
    querier = _querier(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(TransportFailureError) as exc:
        await querier.send_post_request("/recipe/session", {})

    assert exc.value.details["status_code"] == 500
    assert exc.value.details["body"] == "boom"


@pytest.mark.asyncio
async def test_network_error_is_transport_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportFailureError) as exc:
        await _querier(handler).send_post_request("/recipe/session", {})
    assert exc.value.details == {"path": "/recipe/session"}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"not json", b"[1, 2]"])
async def test_bad_body_is_transport_failure(content):
    querier = _querier(lambda request: httpx.Response(200, content=content))
    with pytest.raises(TransportFailureError):
        await querier.send_post_request("/recipe/session", {})


@pytest.mark.asyncio
async def test_without_client_uses_short_lived_client():
    response = httpx.Response(
        200, json={"status": "OK"}, request=httpx.Request("POST", "http://core")
    )
    with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = response

        querier = HttpxCoreQuerier("http://core", timeout=3.0)
        assert await querier.send_post_request("/x", {"a": 1}) == {"status": "OK"}

        args, kwargs = mock_request.call_args
        assert args == ("POST", "http://core/x")
        assert kwargs["json"] == {"a": 1}


def test_from_dict_defaults_and_overrides():
    querier = HttpxCoreQuerier.from_dict(
        {"connection_uri": "http://core.local", "timeout": "2.5", "rid": "session"}
    )
    assert querier.timeout == 2.5
    assert querier.rid == "session"
    assert querier.api_key is None

    assert HttpxCoreQuerier.from_dict({"connection_uri": "http://core"}).timeout == 10.0


def test_from_dict_requires_connection_uri():
    with pytest.raises(ValueError):
        HttpxCoreQuerier.from_dict({"api_key": "k"})
