from functools import wraps
from typing import Callable, Optional

from django.http import JsonResponse

from auth_session_sdk.domain.errors import (
    AuthenticationError,
    TokenTheftDetectedError,
    TransportFailureError,
    UnauthorisedError,
)
from auth_session_sdk.recipes.session import SessionRecipeInterface
from auth_session_sdk.transport.clearing import clear_session_from_all_transfer_methods
from .middleware import (
    SESSION_RESPONSE_ATTR,
    DjangoRequest,
    apply_session_response,
    get_session_response,
)


def verify_session(
    recipe: SessionRecipeInterface,
    session_required: bool = True,
    anti_csrf_check: Optional[bool] = None,
) -> Callable:
    """
    Decorator verifying the session before an async view runs.

    The verified SessionInfo (or None) is available as `request.session_info`.
    """

    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        async def wrapper(request, *args, **kwargs):
            flush_here = getattr(request, SESSION_RESPONSE_ATTR, None) is None
            staged = get_session_response(request)
            wrapped = DjangoRequest(request)
            try:
                request.session_info = await recipe.get_session(
                    wrapped,
                    staged,
                    anti_csrf_check=anti_csrf_check,
                    session_required=session_required,
                )
            except AuthenticationError as e:
                if isinstance(e, TokenTheftDetectedError) or (
                    isinstance(e, UnauthorisedError) and e.clear_tokens
                ):
                    clear_session_from_all_transfer_methods(
                        recipe.config, wrapped, staged
                    )
                response = JsonResponse(
                    {"error": e.code, "message": e.message, "details": e.details},
                    status=401,
                )
            except TransportFailureError as e:
                response = JsonResponse(
                    {"error": e.code, "message": e.message}, status=503
                )
            else:
                response = await view_func(request, *args, **kwargs)

            if flush_here:
                apply_session_response(staged, response)
            return response

        return wrapper

    return decorator
