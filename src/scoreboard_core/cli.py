#!/usr/bin/env python3
"""
Command-line interface for the scoreboard core.

Usage:
    scoreboard plugins                          # List registered sports
    scoreboard scoreboard --sport nfl           # Current games
    scoreboard game --sport bundesliga 66712    # One game with stats (JSON)
    scoreboard table --season 2025              # Live Bundesliga table
    scoreboard serve                            # Run the HTTP service
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Awaitable, Callable, TypeVar

from .core.config import Settings, get_settings
from .core.errors import ScoreboardError
from .plugins import SportPlugin, build_registry
from .standings import get_position_zone

logger = logging.getLogger("scoreboard.cli")

T = TypeVar("T")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def with_plugin(
    sport: str,
    settings: Settings,
    action: Callable[[SportPlugin], Awaitable[T]],
) -> T:
    """Activate ``sport`` on a fresh registry, run ``action``, then unload."""
    registry = build_registry(settings)
    try:
        plugin = await registry.activate(sport)
        return await action(plugin)
    finally:
        await registry.unload_all()


# =============================================================================
# Commands
# =============================================================================


def cmd_plugins(args: argparse.Namespace, settings: Settings) -> int:
    """List registered sports without loading any of them."""
    registry = build_registry(settings)
    manifests = registry.get_all_plugins(enabled=settings.enabled_plugins or None)

    print("\nRegistered Plugins")
    print("=" * 50)
    for manifest in manifests:
        stats = "stats" if manifest.has_stats else "no stats"
        print(f"  {manifest.id:<12} {manifest.display_name:<12} v{manifest.version}  ({stats})")
        print(f"  {'':<12} competitions: {', '.join(manifest.competitions)}")
    return 0


def cmd_scoreboard(args: argparse.Namespace, settings: Settings) -> int:
    """Print the current games of one sport."""

    async def run(plugin: SportPlugin) -> int:
        adapter = plugin.adapter
        games = await adapter.fetch_scoreboard()
        if not games:
            print(f"No {plugin.manifest.display_name} games found")
            return 0

        print(f"\n{plugin.manifest.display_name} Scoreboard")
        print("=" * 50)
        for game in games:
            home, away = game.home_team, game.away_team
            clock = getattr(game, "clock", None)
            state = f"{game.status.value}, {clock.display_value}" if clock else game.status.value
            print(
                f"  [{adapter.get_competition_name(game)}] "
                f"{home.short_display_name or home.name} {home.score} - "
                f"{away.score} {away.short_display_name or away.name}  "
                f"({state})  id={game.id}"
            )
        return 0

    return asyncio.run(with_plugin(args.sport, settings, run))


def cmd_game(args: argparse.Namespace, settings: Settings) -> int:
    """Print one game with stats as JSON."""

    async def run(plugin: SportPlugin) -> int:
        details = await plugin.adapter.fetch_game_details(args.game_id)
        print(json.dumps(details.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return 0

    return asyncio.run(with_plugin(args.sport, settings, run))


def cmd_table(args: argparse.Namespace, settings: Settings) -> int:
    """Print the live table of a league sport."""

    async def run(plugin: SportPlugin) -> int:
        fetch_live_table = getattr(plugin.adapter, "fetch_live_table", None)
        if fetch_live_table is None:
            logger.error(f"{plugin.manifest.display_name} has no league table")
            return 1

        entries = await fetch_live_table(args.season)
        arrows = {"up": "▲", "down": "▼", "same": " "}
        print(f"\n{plugin.manifest.display_name} Live Table")
        print("=" * 50)
        for entry in entries:
            zone = get_position_zone(entry.position)
            print(
                f"  {entry.position:>2}. {arrows[entry.movement]} {entry.team_name:<28} "
                f"{entry.live_points:>3} pts  {entry.live_goal_difference:+d}  {zone.label}"
            )
        return 0

    return asyncio.run(with_plugin(args.sport, settings, run))


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the HTTP service with uvicorn."""
    import uvicorn

    from .api.main import create_app

    uvicorn.run(
        create_app(settings),
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Scoreboard Core CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("plugins", help="List registered sport plugins")

    scoreboard_parser = subparsers.add_parser("scoreboard", help="Show current games")
    scoreboard_parser.add_argument("--sport", required=True, help="Plugin id (nfl, bundesliga, uefa, worldcup, euro)")

    game_parser = subparsers.add_parser("game", help="Show one game with stats")
    game_parser.add_argument("--sport", required=True, help="Plugin id (nfl, bundesliga, uefa, worldcup, euro)")
    game_parser.add_argument("game_id", help="Provider game id")

    table_parser = subparsers.add_parser("table", help="Show the live league table")
    table_parser.add_argument("--sport", default="bundesliga", help="Plugin id (default: bundesliga)")
    table_parser.add_argument("--season", type=int, help="Season start year (default: current)")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", help="Bind address (default: settings.api_host)")
    serve_parser.add_argument("--port", type=int, help="Port (default: settings.api_port)")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging(settings)

    commands = {
        "plugins": cmd_plugins,
        "scoreboard": cmd_scoreboard,
        "game": cmd_game,
        "table": cmd_table,
        "serve": cmd_serve,
    }

    try:
        return commands[args.command](args, settings)
    except ScoreboardError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
