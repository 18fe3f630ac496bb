"""
Tests for the email verification recipe.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from auth_session_sdk.ports.communication import EmailContent, EmailSenderPort
from auth_session_sdk.recipes.email_verification import (
    CREATE_TOKEN_PATH,
    VERIFY_EMAIL_PATH,
    EmailVerificationConfig,
    EmailVerificationRecipe,
    EmailVerificationUser,
    SMTPEmailDeliveryService,
    build_email_verification_recipe,
)
from auth_session_sdk.recipes.override import RecipeOverride


async def _email_for(user_id):
    return f"{user_id}@example.com"


@pytest.fixture
def ev_config():
    return EmailVerificationConfig(
        get_email_for_user_id=_email_for,
        get_email_verification_url=lambda user: "https://app.example.com/verify",
    )


@pytest.fixture
def mock_sender():
    mock = MagicMock(spec=EmailSenderPort)
    mock.send_raw_email = AsyncMock()
    return mock


@pytest.mark.asyncio
async def test_create_token(ev_config, mock_querier):
    mock_querier.send_post_request.return_value = {"status": "OK", "token": "tok"}
    recipe = EmailVerificationRecipe(ev_config, mock_querier)

    assert await recipe.create_email_verification_token("u1") == "tok"
    mock_querier.send_post_request.assert_awaited_once_with(
        CREATE_TOKEN_PATH, {"userId": "u1", "email": "u1@example.com"}
    )


@pytest.mark.asyncio
async def test_create_token_already_verified(ev_config, mock_querier):
    mock_querier.send_post_request.return_value = {"status": "EMAIL_ALREADY_VERIFIED_ERROR"}
    recipe = EmailVerificationRecipe(ev_config, mock_querier)
    assert await recipe.create_email_verification_token("u1") is None


@pytest.mark.asyncio
async def test_verify_email_using_token(ev_config, mock_querier):
    mock_querier.send_post_request.return_value = {
        "status": "OK",
        "userId": "u1",
        "email": "u1@example.com",
    }
    recipe = EmailVerificationRecipe(ev_config, mock_querier)

    user = await recipe.verify_email_using_token("tok")

    assert user == EmailVerificationUser(id="u1", email="u1@example.com")
    mock_querier.send_post_request.assert_awaited_once_with(
        VERIFY_EMAIL_PATH, {"method": "token", "token": "tok"}
    )

    mock_querier.send_post_request.return_value = {
        "status": "EMAIL_VERIFICATION_INVALID_TOKEN_ERROR"
    }
    assert await recipe.verify_email_using_token("bad") is None


@pytest.mark.asyncio
async def test_is_email_verified(ev_config, mock_querier):
    mock_querier.send_get_request.return_value = {"status": "OK", "isVerified": True}
    recipe = EmailVerificationRecipe(ev_config, mock_querier)

    assert await recipe.is_email_verified("u1") is True
    mock_querier.send_get_request.assert_awaited_once_with(
        VERIFY_EMAIL_PATH, {"userId": "u1", "email": "u1@example.com"}
    )


@pytest.mark.asyncio
async def test_send_verification_email_smtp(ev_config, mock_querier, mock_sender):
    mock_querier.send_post_request.return_value = {"status": "OK", "token": "a b"}
    delivery = SMTPEmailDeliveryService(mock_sender, app_name="Acme")
    recipe = EmailVerificationRecipe(ev_config, mock_querier, delivery)

    assert await recipe.send_verification_email("u1") is True

    content = mock_sender.send_raw_email.call_args[0][0]
    assert content.to_email == "u1@example.com"
    assert content.subject.startswith("Acme")
    assert content.is_html is False
    assert "https://app.example.com/verify?token=a+b" in content.body


@pytest.mark.asyncio
async def test_send_verification_email_custom(mock_querier):
    custom = AsyncMock()
    config = EmailVerificationConfig(
        get_email_for_user_id=_email_for,
        get_email_verification_url=lambda user: "https://app/verify",
        create_and_send_custom_email=custom,
    )
    mock_querier.send_post_request.return_value = {"status": "OK", "token": "tok"}
    recipe = EmailVerificationRecipe(config, mock_querier)

    await recipe.send_verification_email("u1")

    custom.assert_awaited_once_with(
        EmailVerificationUser(id="u1", email="u1@example.com"), "https://app/verify?token=tok"
    )


@pytest.mark.asyncio
async def test_send_verification_email_already_verified(ev_config, mock_querier, mock_sender):
    mock_querier.send_post_request.return_value = {"status": "EMAIL_ALREADY_VERIFIED_ERROR"}
    delivery = SMTPEmailDeliveryService(mock_sender)
    recipe = EmailVerificationRecipe(ev_config, mock_querier, delivery)

    assert await recipe.send_verification_email("u1") is False
    mock_sender.send_raw_email.assert_not_awaited()


@pytest.mark.asyncio
async def test_send_verification_email_without_delivery(ev_config, mock_querier):
    mock_querier.send_post_request.return_value = {"status": "OK", "token": "tok"}
    recipe = EmailVerificationRecipe(ev_config, mock_querier)

    with pytest.raises(ValueError):
        await recipe.send_verification_email("u1")


@pytest.mark.asyncio
async def test_delivery_passes_rendered_content_through(mock_sender):
    content = EmailContent(to_email="a@b.c", subject="s", body="<b>hi</b>", is_html=True)
    await SMTPEmailDeliveryService(mock_sender).send_raw_email(content)

    mock_sender.send_raw_email.assert_awaited_once_with(content)


@pytest.mark.asyncio
async def test_build_with_overrides(ev_config, mock_querier):
    async def is_email_verified(original, user_id):
        if user_id == "admin":
            return True
        return await original(user_id)

    config = EmailVerificationConfig(
        get_email_for_user_id=_email_for,
        get_email_verification_url=ev_config.get_email_verification_url,
        override_functions={"is_email_verified": is_email_verified},
    )
    mock_querier.send_get_request.return_value = {"status": "OK", "isVerified": False}

    recipe = build_email_verification_recipe(config, mock_querier)

    assert isinstance(recipe, RecipeOverride)
    assert await recipe.is_email_verified("admin") is True
    assert await recipe.is_email_verified("u1") is False
    mock_querier.send_get_request.assert_awaited_once()


def test_build_without_overrides(ev_config, mock_querier):
    recipe = build_email_verification_recipe(ev_config, mock_querier)
    assert isinstance(recipe, EmailVerificationRecipe)
