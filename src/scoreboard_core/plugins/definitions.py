"""
Plugin definitions - every sport the application knows about.

Manifests are static so sports can be listed without importing them; each
loader imports its sport module on demand and calls ``create_plugin``.

To add a sport:
1. Create ``scoreboard_core/sports/<name>/`` exposing ``create_plugin(manifest, settings)``
2. Add its manifest to ``PLUGIN_MANIFESTS`` and its module to ``PLUGIN_MODULES``
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from typing import Optional

from ..core.config import Settings, get_settings
from .registry import PluginRegistry
from .types import PluginDefinition, PluginLoader, PluginManifest, SportPlugin

logger = logging.getLogger(__name__)

PLUGIN_MANIFESTS: dict[str, PluginManifest] = {
    "nfl": PluginManifest(
        id="nfl",
        version="1.0.0",
        name="NFL Plugin",
        display_name="NFL",
        description="American Football",
        icon="/logos/Logo_NFL.png",
        has_stats=True,
        celebration_types=("touchdown", "fieldgoal", "interception", "sack", "fumble", "safety"),
        competitions=("nfl",),
        core_version="^3.0.0",
    ),
    "bundesliga": PluginManifest(
        id="bundesliga",
        version="1.0.0",
        name="Bundesliga Plugin",
        display_name="Bundesliga",
        description="Deutscher Fußball",
        icon="/title/bundesliga-logo.png",
        has_stats=False,
        celebration_types=("goal", "penalty", "own_goal", "red_card", "yellow_red_card"),
        competitions=("bundesliga", "dfb-pokal"),
        core_version="^3.0.0",
    ),
    "uefa": PluginManifest(
        id="uefa",
        version="1.0.0",
        name="UEFA Champions League Plugin",
        display_name="UEFA Champions League",
        description="European Football",
        icon="/title/uefa-logo.png",
        has_stats=False,
        celebration_types=("goal", "penalty", "own_goal", "red_card", "yellow_red_card"),
        competitions=("champions-league",),
        core_version="^3.0.0",
    ),
    "worldcup": PluginManifest(
        id="worldcup",
        version="1.0.0",
        name="FIFA World Cup Plugin",
        display_name="FIFA Weltmeisterschaft 2026",
        description="International Tournament",
        icon="/title/worldcup-logo.png",
        has_stats=False,
        celebration_types=("goal", "penalty", "own_goal", "red_card", "yellow_red_card"),
        competitions=("fifa-worldcup",),
        core_version="^3.0.0",
    ),
    "euro": PluginManifest(
        id="euro",
        version="1.0.0",
        name="UEFA Euro Plugin",
        display_name="UEFA Europameisterschaft 2020",
        description="European Tournament",
        icon="/title/euro-logo.png",
        has_stats=False,
        celebration_types=("goal", "penalty", "own_goal", "red_card", "yellow_red_card"),
        competitions=("uefa-euro",),
        core_version="^3.0.0",
    ),
}

PLUGIN_MODULES: dict[str, str] = {
    "nfl": "scoreboard_core.sports.nfl",
    "bundesliga": "scoreboard_core.sports.bundesliga",
    "uefa": "scoreboard_core.sports.uefa",
    "worldcup": "scoreboard_core.sports.worldcup",
    "euro": "scoreboard_core.sports.euro",
}


def module_loader(module_name: str, manifest: PluginManifest, settings: Settings) -> PluginLoader:
    """Async constructor that imports ``module_name`` and builds its plugin."""

    async def load() -> SportPlugin:
        logger.debug(f"Importing {module_name}")
        # Module import is blocking; keep the event loop free
        module = await asyncio.to_thread(importlib.import_module, module_name)
        return module.create_plugin(manifest, settings)

    return load


def plugin_definitions(settings: Optional[Settings] = None) -> list[PluginDefinition]:
    settings = settings or get_settings()
    return [
        PluginDefinition(
            manifest=manifest,
            loader=module_loader(PLUGIN_MODULES[plugin_id], manifest, settings),
        )
        for plugin_id, manifest in PLUGIN_MANIFESTS.items()
    ]


def build_registry(settings: Optional[Settings] = None) -> PluginRegistry:
    """A registry with every known sport registered and none loaded."""
    registry = PluginRegistry(plugin_definitions(settings))
    logger.info(f"Registered {len(PLUGIN_MANIFESTS)} plugins")
    return registry
