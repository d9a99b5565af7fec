"""
Bundesliga sport plugin (OpenLigaDB): Bundesliga and DFB-Pokal.
"""

from __future__ import annotations

import logging
from typing import Optional

from ...core.config import Settings, get_settings
from ...plugins.types import PluginManifest, SportPlugin
from ...providers.openligadb import client_from_settings
from .adapter import BundesligaAdapter

logger = logging.getLogger(__name__)

__all__ = ["BundesligaAdapter", "create_plugin"]


def create_plugin(manifest: PluginManifest, settings: Optional[Settings] = None) -> SportPlugin:
    settings = settings or get_settings()
    client = client_from_settings(settings)
    adapter = BundesligaAdapter(
        client,
        league=settings.bundesliga_league,
        cup_league=settings.cup_league,
        season=settings.season_override,
    )

    def on_load() -> None:
        logger.info(f"Bundesliga plugin loaded (season {adapter.season})")

    def on_activate() -> None:
        logger.info("Bundesliga plugin activated")

    def on_deactivate() -> None:
        # Stale matchday data must not survive a switch back
        client.clear_cache()
        logger.info("Bundesliga plugin deactivated")

    async def on_unload() -> None:
        await adapter.close()

    return SportPlugin(
        manifest=manifest,
        adapter=adapter,
        on_load=on_load,
        on_activate=on_activate,
        on_deactivate=on_deactivate,
        on_unload=on_unload,
    )
