"""
UEFA Champions League sport plugin (OpenLigaDB).
"""

from __future__ import annotations

import logging
from typing import Optional

from ...core.config import Settings, get_settings
from ...plugins.types import PluginManifest, SportPlugin
from ...providers.openligadb import client_from_settings
from .adapter import UEFAAdapter

logger = logging.getLogger(__name__)

__all__ = ["UEFAAdapter", "create_plugin"]


def create_plugin(manifest: PluginManifest, settings: Optional[Settings] = None) -> SportPlugin:
    settings = settings or get_settings()
    client = client_from_settings(settings)
    adapter = UEFAAdapter(client, league=settings.uefa_league, season=settings.season_override)

    def on_load() -> None:
        logger.info(f"UEFA Champions League plugin loaded ({adapter.league})")

    def on_activate() -> None:
        logger.info("UEFA Champions League plugin activated")

    def on_deactivate() -> None:
        client.clear_cache()
        logger.info("UEFA Champions League plugin deactivated")

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
