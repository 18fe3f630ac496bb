from fastapi import APIRouter, Depends, Request, status
from dependency_injector.wiring import inject, Provide

from auth_session_sdk.contrib.dependency_injector import SessionContainer
from auth_session_sdk.recipes.session import SessionRecipeInterface
from auth_session_sdk.transport.clearing import clear_session_from_all_transfer_methods
from .adapters import StarletteRequest
from .middleware import get_session_response


# -----------------------------------------------------------------------------
# Module-level handlers (required for dependency-injector wiring)
# -----------------------------------------------------------------------------


@inject
async def refresh(
    request: Request,
    recipe: SessionRecipeInterface = Depends(Provide[SessionContainer.session_recipe]),
):
    session = await recipe.refresh_session(
        StarletteRequest(request), get_session_response(request)
    )
    return {"status": "OK", "userId": session.user_id}


@inject
async def signout(
    request: Request,
    recipe: SessionRecipeInterface = Depends(Provide[SessionContainer.session_recipe]),
):
    wrapped = StarletteRequest(request)
    staged = get_session_response(request)
    session = await recipe.get_session(wrapped, staged, session_required=False)
    if session is not None:
        await recipe.revoke_session(wrapped, staged, session.session_handle)
    else:
        clear_session_from_all_transfer_methods(recipe.config, wrapped, staged)
    return {"status": "OK"}


# -----------------------------------------------------------------------------
# Router Factory
# -----------------------------------------------------------------------------


def create_session_router(prefix: str = "/auth") -> APIRouter:
    """
    Factory to create a FastAPI router with the session endpoints:
    POST {prefix}/session/refresh and POST {prefix}/signout.

    `prefix` must match SessionConfig.api_base_path: the refresh token
    cookie is only sent to the refresh path.
    """
    router = APIRouter(prefix=prefix, tags=["session"])
    router.add_api_route(
        "/session/refresh", refresh, methods=["POST"], status_code=status.HTTP_200_OK
    )
    router.add_api_route(
        "/signout", signout, methods=["POST"], status_code=status.HTTP_200_OK
    )
    return router
