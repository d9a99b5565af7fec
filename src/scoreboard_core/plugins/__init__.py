"""
Plugin system: manifests, lazy loading and the activation registry.

Usage:
    from scoreboard_core.plugins import build_registry

    registry = build_registry()
    plugin = await registry.activate("bundesliga")
    games = await plugin.adapter.fetch_scoreboard()
"""

from .definitions import PLUGIN_MANIFESTS, PLUGIN_MODULES, build_registry, plugin_definitions
from .registry import PluginRegistry
from .types import Hook, PluginDefinition, PluginLoader, PluginManifest, SportPlugin

__all__ = [
    "PLUGIN_MANIFESTS",
    "PLUGIN_MODULES",
    "Hook",
    "PluginDefinition",
    "PluginLoader",
    "PluginManifest",
    "PluginRegistry",
    "SportPlugin",
    "build_registry",
    "plugin_definitions",
]
