"""
Third-party and email-password recipe interfaces.

OAuth provider flows live elsewhere; the SDK only needs the user-facing
operations, forwarded to the authentication core. The combined
third-party + email-password recipe can be viewed as a plain
email-password recipe, with third-party users filtered out.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class ThirdPartyInfo:
    id: str
    user_id: str


@dataclass(frozen=True)
class User:
    """A user of the combined recipe. `third_party` is None for email-password users."""

    id: str
    email: str
    time_joined: int
    third_party: Optional[ThirdPartyInfo] = None


@dataclass(frozen=True)
class EmailPasswordUser:
    id: str
    email: str
    time_joined: int


@dataclass(frozen=True)
class SignInUpResult:
    created_new_user: bool
    user: User


class ThirdPartyRecipeInterface(Protocol):
    async def get_user_by_id(self, user_id: str) -> Optional[User]: ...

    async def get_users_by_email(self, email: str) -> list[User]: ...

    async def get_user_by_third_party_info(
        self, third_party_id: str, third_party_user_id: str
    ) -> Optional[User]: ...

    async def sign_in_up(
        self, third_party_id: str, third_party_user_id: str, email: str
    ) -> SignInUpResult: ...


class ThirdPartyEmailPasswordRecipeInterface(ThirdPartyRecipeInterface, Protocol):
    """Combined recipe. sign_up/sign_in return None on duplicate email / wrong credentials."""

    async def sign_up(self, email: str, password: str) -> Optional[User]: ...

    async def sign_in(self, email: str, password: str) -> Optional[User]: ...

    async def create_reset_password_token(self, user_id: str) -> Optional[str]: ...

    async def reset_password_using_token(
        self, token: str, new_password: str
    ) -> Optional[str]: ...

    async def update_email_or_password(
        self,
        user_id: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str: ...


class EmailPasswordRecipeInterface(Protocol):
    async def sign_up(self, email: str, password: str) -> Optional[EmailPasswordUser]: ...

    async def sign_in(self, email: str, password: str) -> Optional[EmailPasswordUser]: ...

    async def get_user_by_id(self, user_id: str) -> Optional[EmailPasswordUser]: ...

    async def get_user_by_email(self, email: str) -> Optional[EmailPasswordUser]: ...

    async def create_reset_password_token(self, user_id: str) -> Optional[str]: ...

    async def reset_password_using_token(
        self, token: str, new_password: str
    ) -> Optional[str]: ...

    async def update_email_or_password(
        self,
        user_id: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str: ...


def _to_email_password_user(user: Optional[User]) -> Optional[EmailPasswordUser]:
    if user is None:
        return None
    return EmailPasswordUser(id=user.id, email=user.email, time_joined=user.time_joined)


class EmailPasswordFromCombinedRecipe(EmailPasswordRecipeInterface):
    """EmailPasswordRecipeInterface view over a ThirdPartyEmailPasswordRecipeInterface."""

    def __init__(self, recipe: ThirdPartyEmailPasswordRecipeInterface):
        self.recipe = recipe

    async def sign_up(self, email: str, password: str) -> Optional[EmailPasswordUser]:
        return _to_email_password_user(await self.recipe.sign_up(email, password))

    async def sign_in(self, email: str, password: str) -> Optional[EmailPasswordUser]:
        return _to_email_password_user(await self.recipe.sign_in(email, password))

    async def get_user_by_id(self, user_id: str) -> Optional[EmailPasswordUser]:
        user = await self.recipe.get_user_by_id(user_id)
        if user is None or user.third_party is not None:
            return None
        return _to_email_password_user(user)

    async def get_user_by_email(self, email: str) -> Optional[EmailPasswordUser]:
        for user in await self.recipe.get_users_by_email(email):
            if user.third_party is None:
                return _to_email_password_user(user)
        return None

    async def create_reset_password_token(self, user_id: str) -> Optional[str]:
        return await self.recipe.create_reset_password_token(user_id)

    async def reset_password_using_token(
        self, token: str, new_password: str
    ) -> Optional[str]:
        return await self.recipe.reset_password_using_token(token, new_password)

    async def update_email_or_password(
        self,
        user_id: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str:
        return await self.recipe.update_email_or_password(user_id, email, password)
