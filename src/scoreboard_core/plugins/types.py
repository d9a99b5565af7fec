"""
Plugin manifest, plugin and loader types.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..adapters.base import SportAdapter

_SEMVER = re.compile(r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$")
_SEMVER_RANGE = re.compile(r"^(?:\^|~|>=|<=|>|<|=)?\s*\d+(?:\.\d+){0,2}(?:-[0-9A-Za-z.-]+)?$")


class PluginManifest(BaseModel):
    """
    Static, versioned description of a sport plugin.

    Known without importing the plugin, so the display layer can list every
    sport before any of them is loaded.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str
    version: str
    name: str

    # Display
    display_name: str
    description: str = ""
    icon: str = ""
    sport_selection_icon: Optional[str] = None

    # Capabilities
    has_stats: bool = False
    celebration_types: tuple[str, ...] = ()
    competitions: tuple[str, ...] = ()

    # Dependencies
    core_version: str = "*"

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not value or value != value.strip():
            raise ValueError("plugin id must be a non-empty string without surrounding whitespace")
        return value

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        if not _SEMVER.match(value):
            raise ValueError(f"version {value!r} is not a semantic version")
        return value

    @field_validator("core_version")
    @classmethod
    def _check_core_version(cls, value: str) -> str:
        if value != "*" and not _SEMVER_RANGE.match(value):
            raise ValueError(f"core_version {value!r} is not a semver range")
        return value

    @field_validator("celebration_types", "competitions")
    @classmethod
    def _dedupe(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # Ordered set semantics
        return tuple(dict.fromkeys(value))


Hook = Callable[[], Union[Awaitable[None], None]]


@dataclass
class SportPlugin:
    """
    A loaded sport plugin: manifest, adapter and optional lifecycle hooks.

    Hooks may be plain functions or coroutine functions:

    - on_load: once, when the registry first loads the plugin
    - on_activate: every time the sport becomes the active one
    - on_deactivate: when switching away from the sport
    - on_unload: at registry shutdown
    """

    manifest: PluginManifest
    adapter: SportAdapter
    on_load: Optional[Hook] = None
    on_activate: Optional[Hook] = None
    on_deactivate: Optional[Hook] = None
    on_unload: Optional[Hook] = None

    @property
    def id(self) -> str:
        return self.manifest.id


# No-argument async constructor; the registry calls it at most once per id
PluginLoader = Callable[[], Awaitable[SportPlugin]]


@dataclass(frozen=True)
class PluginDefinition:
    """Manifest plus the loader that builds the plugin on first activation."""

    manifest: PluginManifest
    loader: PluginLoader
