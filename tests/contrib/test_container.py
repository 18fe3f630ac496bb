"""
Tests for the dependency_injector SessionContainer.
"""

from auth_session_sdk.config import DashboardConfig, SessionConfig
from auth_session_sdk.contrib.dependency_injector import SessionContainer
from auth_session_sdk.domain.value_objects import SameSite
from auth_session_sdk.infrastructure.querier import HttpxCoreQuerier
from auth_session_sdk.recipes.dashboard import DashboardRecipe
from auth_session_sdk.recipes.override import RecipeOverride
from auth_session_sdk.recipes.session import SessionRecipe


def _container():
    container = SessionContainer()
    container.config.from_dict(
        {
            "core": {"connection_uri": "http://core.local:3567", "api_key": "key-1"},
            "session": {
                "api_domain": "https://api.example.com",
                "cookie_same_site": "strict",
            },
            "dashboard": {"api_key": "dash-key"},
        }
    )
    return container


def test_container_builds_services():
    container = _container()
    try:
        recipe = container.session_recipe()
        assert isinstance(recipe, SessionRecipe)
        assert isinstance(recipe.config, SessionConfig)
        assert recipe.config.cookie_same_site == SameSite.STRICT
        assert isinstance(recipe.querier, HttpxCoreQuerier)
        assert recipe.querier.api_key == "key-1"

        dashboard = container.dashboard_recipe()
        assert isinstance(dashboard, DashboardRecipe)
        assert dashboard.config == DashboardConfig(api_key="dash-key")
        assert dashboard.querier is recipe.querier
        assert container.session_recipe() is recipe
    finally:
        container.unwire()


def test_session_recipe_can_be_overridden():
    container = _container()
    try:
        base = container.session_recipe()
        container.session_recipe.override(RecipeOverride(base))
        assert container.session_recipe().base is base
    finally:
        container.unwire()


def test_optional_settings_reach_providers():
    container = SessionContainer()
    container.config.from_dict(
        {
            "core": {"connection_uri": "http://core.local:3567", "timeout": 2.5},
            "dashboard": {"dashboard_version": "0.7"},
        }
    )
    try:
        assert container.querier().timeout == 2.5
        assert container.dashboard_config() == DashboardConfig(dashboard_version="0.7")
    finally:
        container.unwire()


def test_optional_settings_default_when_unset():
    container = SessionContainer()
    container.config.from_dict({"core": {"connection_uri": "http://core.local:3567"}})
    try:
        assert container.querier().timeout == 10.0
        assert container.querier().api_key is None
        assert container.dashboard_config() == DashboardConfig()
    finally:
        container.unwire()
