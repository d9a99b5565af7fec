"""Scoreboard, game detail and live table endpoints for the active sport."""

from typing import Any, Optional

from fastapi import APIRouter, Query

from ...standings import get_position_zone
from ..dependencies import ActivePluginDependency
from ..errors import ValidationError

router = APIRouter()


@router.get("/scoreboard")
async def get_scoreboard(plugin: ActivePluginDependency) -> dict[str, Any]:
    """Current games of the active sport."""
    adapter = plugin.adapter
    games = await adapter.fetch_scoreboard()
    return {
        "sport": plugin.id,
        "games": [
            {**game.model_dump(mode="json"), "competition_name": adapter.get_competition_name(game)}
            for game in games
        ],
    }


@router.get("/games/{game_id}")
async def get_game(game_id: str, plugin: ActivePluginDependency) -> dict[str, Any]:
    """
    One game with stats (``stats`` is null for sports without box scores).

    Raises:
        FetchError: 404 if the provider does not know the game
    """
    details = await plugin.adapter.fetch_game_details(game_id)
    return {"sport": plugin.id, **details.model_dump(mode="json")}


@router.get("/table")
async def get_live_table(
    plugin: ActivePluginDependency,
    season: Optional[int] = Query(default=None, description="Season start year", ge=2000, le=2100),
) -> dict[str, Any]:
    """Official table projected with in-progress results (league sports only)."""
    fetch_live_table = getattr(plugin.adapter, "fetch_live_table", None)
    if fetch_live_table is None:
        raise ValidationError(
            message=f"{plugin.manifest.display_name} has no league table",
            detail=f"plugin_id={plugin.id}",
        )

    entries = await fetch_live_table(season)
    rows = []
    for entry in entries:
        zone = get_position_zone(entry.position)
        rows.append(
            {
                **entry.model_dump(mode="json"),
                "movement": entry.movement,
                "zone": zone.zone,
                "zone_color": zone.color,
                "zone_label": zone.label,
            }
        )
    if season is None:
        season = getattr(plugin.adapter, "season", None)
    return {"sport": plugin.id, "season": season, "table": rows}
