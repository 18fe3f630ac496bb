"""
Recipe overrides.

Every recipe exposes its operations through an interface (a Protocol).
To customise a recipe, wrap its implementation in a RecipeOverride
instead of patching it:

    async def sign_in(original, email, password):
        result = await original(email, password)
        if result is not None and is_banned(result.id):
            return None
        return result

    recipe = RecipeOverride(base_recipe, sign_in=sign_in)

Each override receives the base implementation's bound method as its
first argument. Operations that are not overridden delegate to the base.
The base instance is never modified.
"""

import functools
from typing import Any, Callable


class RecipeOverride:
    """Decorator around a recipe implementation that replaces named operations."""

    def __init__(self, base: Any, **overrides: Callable[..., Any]):
        for name in overrides:
            if name.startswith("_") or not callable(getattr(base, name, None)):
                raise ValueError(
                    f"{type(base).__name__} has no overridable operation {name!r}"
                )
        self._base = base
        self._overrides = dict(overrides)

    @property
    def base(self) -> Any:
        return self._base

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not found on the wrapper itself.
        overrides = self.__dict__.get("_overrides", {})
        if name in overrides:
            return functools.partial(overrides[name], getattr(self._base, name))
        return getattr(self.__dict__["_base"], name)

    def __repr__(self) -> str:
        return (
            f"RecipeOverride({self._base!r}, overrides={sorted(self._overrides)})"
        )
