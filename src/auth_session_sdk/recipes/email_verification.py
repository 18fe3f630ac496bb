"""
Email verification recipe.

Thin delegation to the authentication core plus email delivery:
- the core issues and consumes verification tokens
- the SDK builds the link and sends the email (SMTP by default)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Protocol
from urllib.parse import urlencode

from auth_session_sdk.ports.communication import EmailContent, EmailSenderPort
from auth_session_sdk.ports.core import CoreQuerierPort
from auth_session_sdk.recipes.override import RecipeOverride

logger = logging.getLogger(__name__)

CREATE_TOKEN_PATH = "/recipe/user/email/verify/token"
VERIFY_EMAIL_PATH = "/recipe/user/email/verify"


# ═══════════════════════════════════════════════════════════════
# MODELS
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class EmailVerificationUser:
    id: str
    email: str


@dataclass(frozen=True)
class EmailVerificationConfig:
    """
    Email verification settings.

    get_email_for_user_id: async user id -> email lookup (required)
    get_email_verification_url: user -> page that consumes the token
    create_and_send_custom_email: replaces the built-in delivery when set
    override_functions: operation name -> override, see RecipeOverride
    """

    get_email_for_user_id: Callable[[str], Awaitable[str]]
    get_email_verification_url: Callable[[EmailVerificationUser], str]
    create_and_send_custom_email: Optional[
        Callable[[EmailVerificationUser, str], Awaitable[None]]
    ] = None
    override_functions: dict[str, Callable[..., Any]] = field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════
# DELIVERY
# ═══════════════════════════════════════════════════════════════


class SMTPEmailDeliveryService:
    """Renders verification emails and hands them to an EmailSenderPort."""

    def __init__(self, sender: EmailSenderPort, app_name: str = "App"):
        self.sender = sender
        self.app_name = app_name

    def get_content(self, user: EmailVerificationUser, link: str) -> EmailContent:
        body = (
            f"Please verify your email address for {self.app_name}.\n\n"
            f"Click the link below to verify your email:\n{link}\n\n"
            "If you did not request this, you can ignore this email."
        )
        return EmailContent(
            to_email=user.email,
            subject=f"{self.app_name}: email verification instructions",
            body=body,
        )

    async def send_raw_email(self, content: EmailContent) -> None:
        await self.sender.send_raw_email(content)


# ═══════════════════════════════════════════════════════════════
# RECIPE
# ═══════════════════════════════════════════════════════════════


class EmailVerificationRecipeInterface(Protocol):
    async def create_email_verification_token(self, user_id: str) -> Optional[str]: ...

    async def verify_email_using_token(
        self, token: str
    ) -> Optional[EmailVerificationUser]: ...

    async def is_email_verified(self, user_id: str) -> bool: ...

    async def send_verification_email(self, user_id: str) -> bool: ...


class EmailVerificationRecipe(EmailVerificationRecipeInterface):
    def __init__(
        self,
        config: EmailVerificationConfig,
        querier: CoreQuerierPort,
        delivery: Optional[SMTPEmailDeliveryService] = None,
    ):
        self.config = config
        self.querier = querier
        self.delivery = delivery

    async def create_email_verification_token(self, user_id: str) -> Optional[str]:
        """Token to embed in the link, None if the email is already verified."""
        email = await self.config.get_email_for_user_id(user_id)
        result = await self.querier.send_post_request(
            CREATE_TOKEN_PATH, {"userId": user_id, "email": email}
        )
        if result.get("status") == "OK":
            return result["token"]
        return None

    async def verify_email_using_token(
        self, token: str
    ) -> Optional[EmailVerificationUser]:
        result = await self.querier.send_post_request(
            VERIFY_EMAIL_PATH, {"method": "token", "token": token}
        )
        if result.get("status") != "OK":
            logger.info(f"Email verification token rejected: {result.get('status')}")
            return None
        return EmailVerificationUser(id=result["userId"], email=result["email"])

    async def is_email_verified(self, user_id: str) -> bool:
        email = await self.config.get_email_for_user_id(user_id)
        result = await self.querier.send_get_request(
            VERIFY_EMAIL_PATH, {"userId": user_id, "email": email}
        )
        return bool(result.get("isVerified"))

    async def send_verification_email(self, user_id: str) -> bool:
        """Returns False when the email is already verified."""
        token = await self.create_email_verification_token(user_id)
        if token is None:
            return False

        user = EmailVerificationUser(
            id=user_id, email=await self.config.get_email_for_user_id(user_id)
        )
        base_url = self.config.get_email_verification_url(user)
        link = f"{base_url}?{urlencode({'token': token})}"

        if self.config.create_and_send_custom_email is not None:
            await self.config.create_and_send_custom_email(user, link)
        elif self.delivery is not None:
            await self.delivery.send_raw_email(self.delivery.get_content(user, link))
        else:
            raise ValueError("No email delivery configured for email verification")
        return True


def build_email_verification_recipe(
    config: EmailVerificationConfig,
    querier: CoreQuerierPort,
    delivery: Optional[SMTPEmailDeliveryService] = None,
) -> EmailVerificationRecipeInterface:
    recipe = EmailVerificationRecipe(config, querier, delivery)
    if config.override_functions:
        return RecipeOverride(recipe, **config.override_functions)
    return recipe
