"""Plugin discovery and activation endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Query

from ...plugins import PluginManifest, PluginRegistry
from ..dependencies import RegistryDependency, SettingsDependency

router = APIRouter()


def _manifest_payload(manifest: PluginManifest, registry: PluginRegistry) -> dict[str, Any]:
    payload = manifest.model_dump(mode="json")
    payload["state"] = registry.state(manifest.id).value
    payload["active"] = registry.active_id == manifest.id
    return payload


@router.get("")
async def list_plugins(
    registry: RegistryDependency,
    settings: SettingsDependency,
    enabled: Optional[str] = Query(
        default=None,
        description="Comma-separated allow-list of plugin ids (defaults to configured enabled_plugins)",
    ),
) -> dict[str, Any]:
    """
    List registered sports in registration order.

    Listing never loads a plugin; ``state`` shows which ones are loaded.
    """
    if enabled is not None:
        allow_list = [p.strip() for p in enabled.split(",") if p.strip()]
    else:
        allow_list = settings.enabled_plugins or None

    manifests = registry.get_all_plugins(enabled=allow_list)
    return {
        "plugins": [_manifest_payload(m, registry) for m in manifests],
        "active": registry.active_id,
    }


@router.post("/{plugin_id}/activate")
async def activate_plugin(plugin_id: str, registry: RegistryDependency) -> dict[str, Any]:
    """
    Make ``plugin_id`` the active sport.

    Raises:
        UnknownPluginError: 404 for unregistered ids
        PluginLoadError / ActivationError: 503; the previous sport stays active
    """
    plugin = await registry.activate(plugin_id)
    return {
        "active": registry.active_id,
        "plugin": _manifest_payload(plugin.manifest, registry),
    }
