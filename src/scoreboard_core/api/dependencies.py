"""
Dependency injection for API endpoints.

The plugin registry is built once per application in the lifespan handler
and lives on ``app.state``; routes receive it (or the active plugin) through
these dependencies instead of a module-level singleton.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..core.config import Settings
from ..plugins import PluginRegistry, SportPlugin
from .errors import NoActivePluginError


def get_registry(request: Request) -> PluginRegistry:
    return request.app.state.registry


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_active_plugin(registry: Annotated[PluginRegistry, Depends(get_registry)]) -> SportPlugin:
    """The active sport plugin; 409 when no sport has been activated."""
    plugin = registry.active
    if plugin is None:
        raise NoActivePluginError()
    return plugin


RegistryDependency = Annotated[PluginRegistry, Depends(get_registry)]
SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
ActivePluginDependency = Annotated[SportPlugin, Depends(get_active_plugin)]
