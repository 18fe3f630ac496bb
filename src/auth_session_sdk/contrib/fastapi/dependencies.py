from typing import Callable, Optional

from fastapi import Depends, Request
from dependency_injector.wiring import inject, Provide

from auth_session_sdk.contrib.dependency_injector import SessionContainer
from auth_session_sdk.recipes.session import SessionInfo, SessionRecipeInterface
from .adapters import StarletteRequest
from .middleware import get_session_response


@inject
async def get_session(
    request: Request,
    recipe: SessionRecipeInterface = Depends(Provide[SessionContainer.session_recipe]),
) -> SessionInfo:
    """Dependency that requires a verified session."""
    return await recipe.get_session(
        StarletteRequest(request), get_session_response(request)
    )


@inject
async def get_optional_session(
    request: Request,
    recipe: SessionRecipeInterface = Depends(Provide[SessionContainer.session_recipe]),
) -> Optional[SessionInfo]:
    """Dependency that returns the session if there is one, None otherwise."""
    return await recipe.get_session(
        StarletteRequest(request),
        get_session_response(request),
        session_required=False,
    )


def create_verify_session_dependency(
    recipe: SessionRecipeInterface,
    session_required: bool = True,
    anti_csrf_check: Optional[bool] = None,
) -> Callable:
    """
    Factory to create a session dependency with the recipe injected.
    """

    async def verify_session(request: Request) -> Optional[SessionInfo]:
        return await recipe.get_session(
            StarletteRequest(request),
            get_session_response(request),
            anti_csrf_check=anti_csrf_check,
            session_required=session_required,
        )

    return verify_session
