"""
Tests for domain errors.
"""

import pytest

from auth_session_sdk.domain.errors import (
    AuthDomainError,
    AuthenticationError,
    SessionTransportError,
    TokenTheftDetectedError,
    TransportFailureError,
    TryRefreshTokenError,
    UnauthorisedError,
    UnknownTokenTypeError,
    UnknownTransferMethodError,
)


def test_auth_domain_error_defaults():
    err = AuthDomainError("boom")
    assert str(err) == "boom"
    assert err.message == "boom"
    assert err.code == "AUTH_ERROR"
    assert err.details == {}


@pytest.mark.parametrize(
    "error, code",
    [
        (UnknownTokenTypeError("x"), "UNKNOWN_TOKEN_TYPE"),
        (UnknownTransferMethodError("x"), "UNKNOWN_TRANSFER_METHOD"),
    ],
)
def test_invariant_errors(error, code):
    assert isinstance(error, SessionTransportError)
    assert error.code == code
    assert error.details
    assert "should never happen" in error.message


def test_transport_failure_is_not_authentication_error():
    err = TransportFailureError(details={"path": "/recipe/session"})
    assert not isinstance(err, AuthenticationError)
    assert err.code == "CORE_TRANSPORT_FAILURE"
    assert err.details == {"path": "/recipe/session"}


def test_unauthorised_clear_tokens_flag():
    assert UnauthorisedError().clear_tokens is True
    assert UnauthorisedError("gone", clear_tokens=False).clear_tokens is False
    assert UnauthorisedError().code == "UNAUTHORISED"


def test_try_refresh_token_error():
    err = TryRefreshTokenError()
    assert isinstance(err, AuthenticationError)
    assert err.code == "TRY_REFRESH_TOKEN"


def test_token_theft_details_skip_missing_values():
    err = TokenTheftDetectedError(session_handle="h1")
    assert err.details == {"session_handle": "h1"}
    assert err.user_id is None

    full = TokenTheftDetectedError("h1", "u1")
    assert full.details == {"session_handle": "h1", "user_id": "u1"}
    assert full.code == "TOKEN_THEFT_DETECTED"
