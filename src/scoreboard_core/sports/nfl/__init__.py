"""
NFL sport plugin (ESPN).

Imported lazily by the plugin registry on first activation.
"""

from __future__ import annotations

import logging
from typing import Optional

from ...core.config import Settings, get_settings
from ...plugins.types import PluginManifest, SportPlugin
from ...providers.espn import ESPNClient
from .adapter import NFLAdapter

logger = logging.getLogger(__name__)

__all__ = ["NFLAdapter", "create_plugin"]


def create_plugin(manifest: PluginManifest, settings: Optional[Settings] = None) -> SportPlugin:
    settings = settings or get_settings()
    client = ESPNClient(
        base_url=settings.espn_base_url,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
        requests_per_minute=settings.requests_per_minute,
    )
    adapter = NFLAdapter(client)

    def on_load() -> None:
        logger.info("NFL plugin loaded")

    def on_activate() -> None:
        logger.info("NFL plugin activated")

    def on_deactivate() -> None:
        logger.info("NFL plugin deactivated")

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
