"""
Dependency Injector integration for auth-session-sdk.

Provides an optional IoC Container with pre-configured SDK services.
Host applications can extend this container or use it directly.

Usage:
    from auth_session_sdk.contrib.dependency_injector import SessionContainer

    container = SessionContainer()
    container.config.from_dict({
        "core": {"connection_uri": "http://localhost:3567", "api_key": "..."},
        "session": {"api_domain": "https://api.example.com", "cookie_same_site": "lax"},
        "dashboard": {"api_key": ""},
    })

    session_recipe = container.session_recipe()
"""

from dependency_injector import containers, providers

from auth_session_sdk.config import DashboardConfig, SessionConfig
from auth_session_sdk.infrastructure.querier import HttpxCoreQuerier
from auth_session_sdk.recipes.dashboard import DashboardRecipe
from auth_session_sdk.recipes.session import SessionRecipe


class SessionContainer(containers.DeclarativeContainer):
    """
    IoC Container for SDK services.

    Config requirements (under config.core.*):
    - connection_uri: Authentication core URL
    - api_key: Core API key (optional)
    - timeout: Request timeout in seconds (optional, default 10)
    - rid: rid header sent to the core (optional)

    Config (under config.session.*): see SessionConfig.from_dict
    Config (under config.dashboard.*): api_key, dashboard_version (default "0.6")

    Every provider can be overridden by the host app, e.g. to plug in a
    RecipeOverride around session_recipe.
    """

    wiring_config = containers.WiringConfiguration(
        modules=[
            "auth_session_sdk.contrib.fastapi.dependencies",
            "auth_session_sdk.contrib.fastapi.router",
        ]
    )

    config = providers.Configuration()

    # Normalised once; immutable afterwards
    session_config = providers.Singleton(
        SessionConfig.from_dict,
        data=config.session,
    )

    dashboard_config = providers.Singleton(
        DashboardConfig.from_dict,
        data=config.dashboard,
    )

    querier = providers.Singleton(
        HttpxCoreQuerier.from_dict,
        data=config.core,
    )

    session_recipe = providers.Singleton(
        SessionRecipe,
        config=session_config,
        querier=querier,
    )

    dashboard_recipe = providers.Singleton(
        DashboardRecipe,
        config=dashboard_config,
        querier=querier,
    )
