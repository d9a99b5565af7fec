"""
Tests for the command-line interface.

Registries are swapped for fake plugins so no provider is contacted.
"""

from __future__ import annotations

import pytest

from conftest import PluginFactory, make_manifest
from scoreboard_core import cli
from scoreboard_core.plugins import PluginRegistry


@pytest.fixture
def fake_cli(monkeypatch, settings, factory: PluginFactory):
    def build_registry(_settings):
        registry = PluginRegistry()
        manifest = make_manifest("nfl")
        registry.register(manifest, factory.loader(manifest))
        return registry

    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    monkeypatch.setattr(cli, "build_registry", build_registry)
    return factory


class TestCLI:
    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_plugins(self, capsys, monkeypatch, settings):
        monkeypatch.setattr(cli, "get_settings", lambda: settings)

        assert cli.main(["plugins"]) == 0

        out = capsys.readouterr().out
        assert "nfl" in out
        assert "bundesliga, dfb-pokal" in out
        assert "champions-league" in out

    def test_scoreboard(self, capsys, fake_cli):
        assert cli.main(["scoreboard", "--sport", "nfl"]) == 0
        out = capsys.readouterr().out
        assert "[NFL] Home 7 - 3 Away  (in_progress)  id=1" in out

    def test_game_prints_json(self, capsys, fake_cli):
        assert cli.main(["game", "--sport", "nfl", "1"]) == 0

        out = capsys.readouterr().out
        assert '"stats": null' in out
        # The registry is always torn down
        assert fake_cli.hook_names("nfl") == ["load", "activate", "deactivate", "unload"]

    def test_unknown_sport(self, fake_cli):
        assert cli.main(["game", "--sport", "curling", "1"]) == 1

    def test_table_requires_league_sport(self, fake_cli):
        assert cli.main(["table", "--sport", "nfl"]) == 1
