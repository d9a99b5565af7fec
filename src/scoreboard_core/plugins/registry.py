"""
Plugin Registry - lazily loads, activates and tears down sport plugins.

Every plugin id moves through:

    registered -> loading -> active <-> inactive
                     |
                     +-> error   (load failed; the next activation retries)

Activations are serialized: the previous plugin's on_deactivate always
finishes before the next plugin loads or activates. Each activate() call
takes a request token; a call that was overtaken by a newer request for a
different sport still runs to completion (module imports and fetches cannot
be interrupted) but never writes the active slot. It unwinds itself and
leaves the registry as it found it.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..adapters.base import SportAdapter
from ..core.errors import (
    ActivationError,
    DuplicatePluginError,
    PluginLoadError,
    UnknownPluginError,
)
from ..core.types import PluginState
from .types import Hook, PluginDefinition, PluginLoader, PluginManifest, SportPlugin

logger = logging.getLogger(__name__)


@dataclass
class _RegistryEntry:
    manifest: PluginManifest
    loader: PluginLoader
    state: PluginState = PluginState.registered
    plugin: Optional[SportPlugin] = None
    error: Optional[BaseException] = None


async def _call_hook(hook: Optional[Hook]) -> None:
    if hook is None:
        return
    result = hook()
    if inspect.isawaitable(result):
        await result


class PluginRegistry:
    """
    Registry of sport plugins with a single active slot.

    Construct one per application and inject it where sports are switched:

        registry = PluginRegistry()
        registry.register(manifest, loader)
        plugin = await registry.activate("nfl")
        games = await plugin.adapter.fetch_scoreboard()
    """

    def __init__(self, definitions: Iterable[PluginDefinition] = ()):
        self._entries: dict[str, _RegistryEntry] = {}
        self._active_id: Optional[str] = None
        self._lock = asyncio.Lock()
        self._generation = 0
        self._latest_request: Optional[str] = None

        for definition in definitions:
            self.register(definition.manifest, definition.loader)

    # ==========================================================================
    # Registration & discovery
    # ==========================================================================

    def register(self, manifest: PluginManifest, loader: PluginLoader) -> None:
        """Register a plugin definition. Nothing is imported until activation."""
        if manifest.id in self._entries:
            raise DuplicatePluginError(manifest.id)

        self._entries[manifest.id] = _RegistryEntry(manifest=manifest, loader=loader)
        logger.info(f"Registered plugin: {manifest.name} v{manifest.version}")

    def get_all_plugins(self, enabled: Optional[Iterable[str]] = None) -> list[PluginManifest]:
        """
        Manifests of all registered plugins in registration order.

        Args:
            enabled: Optional allow-list of ids; when given only those
                manifests are returned (a pure filter, never loads anything)
        """
        manifests = [entry.manifest for entry in self._entries.values()]
        if enabled is None:
            return manifests
        allowed = set(enabled)
        return [m for m in manifests if m.id in allowed]

    def __contains__(self, plugin_id: str) -> bool:
        return plugin_id in self._entries

    def get_plugin(self, plugin_id: str) -> Optional[SportPlugin]:
        """The loaded plugin instance, or None if never loaded."""
        entry = self._entries.get(plugin_id)
        return entry.plugin if entry else None

    def is_loaded(self, plugin_id: str) -> bool:
        return self.get_plugin(plugin_id) is not None

    def state(self, plugin_id: str) -> PluginState:
        return self._require(plugin_id).state

    def last_error(self, plugin_id: str) -> Optional[BaseException]:
        return self._require(plugin_id).error

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def active(self) -> Optional[SportPlugin]:
        """The currently active plugin, if any."""
        return self.get_plugin(self._active_id) if self._active_id else None

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    async def activate(self, plugin_id: str) -> SportPlugin:
        """
        Make ``plugin_id`` the active sport.

        Loads the plugin on first use (on_load runs once), deactivates the
        current plugin, then runs on_activate. Activating the plugin that is
        already active returns it without running hooks.

        Raises:
            UnknownPluginError: If the id was never registered
            PluginLoadError: If loading failed; the previous plugin stays active
            ActivationError: If on_activate failed; the previous plugin stays active
        """
        entry = self._require(plugin_id)

        self._generation += 1
        token = self._generation
        self._latest_request = plugin_id

        async with self._lock:
            if self._active_id == plugin_id and entry.plugin is not None:
                return entry.plugin

            if self._is_superseded(token, plugin_id):
                # Overtaken while waiting for the lock; skip the hooks entirely
                logger.info(f"Activation of {plugin_id} superseded before it started")
                return await self._load(entry)

            previous = self._active_entry()
            if previous is not None:
                await self._deactivate_entry(previous)

            try:
                plugin = await self._load(entry)
                await self._activate_entry(entry)
            except (PluginLoadError, ActivationError):
                if previous is not None:
                    await self._restore(previous)
                raise

            if self._is_superseded(token, plugin_id):
                logger.info(
                    f"Activation of {plugin_id} superseded by {self._latest_request}; discarding result"
                )
                await self._deactivate_entry(entry)
                if previous is not None:
                    await self._restore(previous)
                return plugin

            self._active_id = plugin_id
            logger.info(f"Activated plugin: {entry.manifest.name}")
            return plugin

    async def deactivate(self, plugin_id: str) -> None:
        """Deactivate ``plugin_id`` if it is the active plugin."""
        entry = self._require(plugin_id)
        async with self._lock:
            if self._active_id == plugin_id:
                await self._deactivate_entry(entry)

    async def unload_all(self) -> None:
        """
        Deactivate the active plugin and run on_unload for every loaded one.

        Loaded instances are dropped; registrations are kept.
        """
        async with self._lock:
            active = self._active_entry()
            if active is not None:
                await self._deactivate_entry(active)

            for entry in self._entries.values():
                if entry.plugin is None:
                    continue
                try:
                    await _call_hook(entry.plugin.on_unload)
                except Exception:
                    logger.exception(f"on_unload failed for plugin {entry.manifest.id}")
                entry.plugin = None
                entry.state = PluginState.registered
                logger.info(f"Unloaded plugin: {entry.manifest.name}")

    # ==========================================================================
    # Internals
    # ==========================================================================

    def _require(self, plugin_id: str) -> _RegistryEntry:
        entry = self._entries.get(plugin_id)
        if entry is None:
            raise UnknownPluginError(plugin_id)
        return entry

    def _active_entry(self) -> Optional[_RegistryEntry]:
        return self._entries.get(self._active_id) if self._active_id else None

    def _is_superseded(self, token: int, plugin_id: str) -> bool:
        # A newer request for the same sport does not invalidate this one
        return token != self._generation and self._latest_request != plugin_id

    async def _load(self, entry: _RegistryEntry) -> SportPlugin:
        if entry.plugin is not None:
            return entry.plugin

        plugin_id = entry.manifest.id
        logger.info(f"Loading plugin: {entry.manifest.name}...")
        entry.state = PluginState.loading

        try:
            plugin = await entry.loader()
            self._validate(plugin, entry.manifest)
            await _call_hook(plugin.on_load)
        except asyncio.CancelledError:
            entry.state = PluginState.registered
            raise
        except Exception as exc:
            entry.state = PluginState.error
            entry.error = exc
            logger.error(f"Failed to load plugin {plugin_id}: {exc}")
            raise PluginLoadError(plugin_id, f"Failed to load plugin {plugin_id}: {exc}") from exc

        entry.plugin = plugin
        entry.state = PluginState.inactive
        entry.error = None
        logger.info(f"Loaded plugin: {entry.manifest.name}")
        return plugin

    async def _activate_entry(self, entry: _RegistryEntry) -> None:
        plugin_id = entry.manifest.id
        try:
            await _call_hook(entry.plugin.on_activate)
        except Exception as exc:
            entry.state = PluginState.inactive
            entry.error = exc
            logger.error(f"Failed to activate plugin {plugin_id}: {exc}")
            raise ActivationError(plugin_id, f"Failed to activate plugin {plugin_id}: {exc}") from exc
        entry.state = PluginState.active

    async def _deactivate_entry(self, entry: _RegistryEntry) -> None:
        if entry.plugin is None or entry.state != PluginState.active:
            return
        try:
            await _call_hook(entry.plugin.on_deactivate)
        except Exception:
            # The switch goes ahead; a failing teardown must not pin the old sport
            logger.exception(f"on_deactivate failed for plugin {entry.manifest.id}")
        entry.state = PluginState.inactive
        if self._active_id == entry.manifest.id:
            self._active_id = None
        logger.info(f"Deactivated plugin: {entry.manifest.name}")

    async def _restore(self, entry: _RegistryEntry) -> None:
        """Re-activate the plugin that was active before a failed or discarded switch."""
        try:
            await self._activate_entry(entry)
        except ActivationError:
            logger.error(f"Could not restore plugin {entry.manifest.id}; no plugin is active")
            return
        self._active_id = entry.manifest.id
        logger.info(f"Restored plugin: {entry.manifest.name}")

    @staticmethod
    def _validate(plugin: SportPlugin, manifest: PluginManifest) -> None:
        if not isinstance(plugin, SportPlugin):
            raise TypeError(f"Loader for {manifest.id} returned {type(plugin).__name__}, not SportPlugin")
        if not isinstance(plugin.adapter, SportAdapter):
            raise TypeError(f"Plugin {manifest.id} missing adapter")
        if plugin.manifest.id != manifest.id:
            raise ValueError(f"Plugin ID mismatch: {plugin.manifest.id} vs {manifest.id}")
        undeclared = set(plugin.adapter.get_celebration_types()) - set(manifest.celebration_types)
        if undeclared:
            raise ValueError(
                f"Plugin {manifest.id} adapter produces undeclared celebration types: {sorted(undeclared)}"
            )
