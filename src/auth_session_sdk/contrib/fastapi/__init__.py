"""
FastAPI integration for auth-session-sdk.

Provides middleware, dependencies, exception handlers and the session
router for FastAPI applications.

Example usage:
    from fastapi import FastAPI, Depends
    from auth_session_sdk.contrib.fastapi import (
        SessionMiddleware,
        create_verify_session_dependency,
        register_exception_handlers,
    )

    app = FastAPI()
    app.add_middleware(SessionMiddleware)
    register_exception_handlers(app, recipe.config)

    @app.get("/me")
    async def me(session=Depends(create_verify_session_dependency(recipe))):
        return {"user_id": session.user_id}
"""

from .adapters import StarletteRequest, apply_session_response
from .middleware import SessionMiddleware, get_session_response
from .dependencies import (
    get_session,
    get_optional_session,
    create_verify_session_dependency,
)
from .exception_handlers import create_exception_handlers, register_exception_handlers
from .router import create_session_router

__all__ = [
    "StarletteRequest",
    "apply_session_response",
    "SessionMiddleware",
    "get_session_response",
    "get_session",
    "get_optional_session",
    "create_verify_session_dependency",
    "create_exception_handlers",
    "register_exception_handlers",
    "create_session_router",
]
