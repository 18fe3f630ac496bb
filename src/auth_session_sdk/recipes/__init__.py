"""Recipes: session, dashboard, email verification, third-party."""

from auth_session_sdk.recipes.override import RecipeOverride
from auth_session_sdk.recipes.session import (
    SessionInfo,
    SessionRecipe,
    SessionRecipeInterface,
)
from auth_session_sdk.recipes.dashboard import (
    DashboardRecipe,
    DashboardRecipeInterface,
)
from auth_session_sdk.recipes.email_verification import (
    EmailVerificationConfig,
    EmailVerificationRecipe,
    EmailVerificationUser,
    SMTPEmailDeliveryService,
    build_email_verification_recipe,
)
from auth_session_sdk.recipes.thirdparty import (
    EmailPasswordFromCombinedRecipe,
    ThirdPartyRecipeInterface,
)

__all__ = [
    "RecipeOverride",
    "SessionInfo",
    "SessionRecipe",
    "SessionRecipeInterface",
    "DashboardRecipe",
    "DashboardRecipeInterface",
    "EmailVerificationConfig",
    "EmailVerificationRecipe",
    "EmailVerificationUser",
    "SMTPEmailDeliveryService",
    "build_email_verification_recipe",
    "EmailPasswordFromCombinedRecipe",
    "ThirdPartyRecipeInterface",
]
