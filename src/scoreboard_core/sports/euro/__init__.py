"""
UEFA Euro sport plugin (OpenLigaDB).
"""

from __future__ import annotations

import logging
from typing import Optional

from ...core.config import Settings, get_settings
from ...plugins.types import PluginManifest, SportPlugin
from ...providers.openligadb import client_from_settings
from .adapter import EuroAdapter

logger = logging.getLogger(__name__)

__all__ = ["EuroAdapter", "create_plugin"]


def create_plugin(manifest: PluginManifest, settings: Optional[Settings] = None) -> SportPlugin:
    settings = settings or get_settings()
    client = client_from_settings(settings)
    adapter = EuroAdapter(client, league=settings.euro_league, season=settings.euro_season)

    def on_load() -> None:
        logger.info(f"Euro plugin loaded ({adapter.league}, season {adapter.season})")

    def on_deactivate() -> None:
        client.clear_cache()

    async def on_unload() -> None:
        await adapter.close()

    return SportPlugin(
        manifest=manifest,
        adapter=adapter,
        on_load=on_load,
        on_deactivate=on_deactivate,
        on_unload=on_unload,
    )
