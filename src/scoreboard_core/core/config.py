"""
Configuration management for the scoreboard core.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables prefixed with SCOREBOARD_,
e.g. SCOREBOARD_ENABLED_PLUGINS='["nfl"]'.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOREBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "Scoreboard Core"
    app_version: str = "3.0.0"
    debug: bool = False
    environment: str = Field(default="development", description="development, staging, production")
    log_level: str = Field(default="INFO", description="Root log level for the CLI and server")

    # ==========================================================================
    # Providers
    # ==========================================================================
    espn_base_url: str = "https://site.api.espn.com/apis/site/v2/sports/football/nfl"
    openligadb_base_url: str = "https://api.openligadb.de"
    bundesliga_league: str = Field(default="bl1", description="OpenLigaDB league shortcut")
    cup_league: str = Field(default="dfb", description="OpenLigaDB shortcut for the DFB-Pokal")
    season_override: Optional[int] = Field(
        default=None,
        description="Force an OpenLigaDB season instead of deriving it from today's date",
    )
    uefa_league: Optional[str] = Field(
        default=None,
        description="Champions League shortcut; derived from the season (ucl2025) when unset",
    )
    worldcup_league: str = "wm26"
    worldcup_season: int = 2026
    euro_league: str = "em20"
    euro_season: int = 2020

    http_timeout: float = Field(default=10.0, gt=0)
    http_max_retries: int = Field(default=3, ge=1, le=10)
    # OpenLigaDB allows roughly 1000 requests/hour
    requests_per_minute: int = Field(default=120, ge=1)

    # ==========================================================================
    # Caching (seconds)
    # ==========================================================================
    cache_ttl_current_group: int = Field(default=300, ge=0)
    cache_ttl_matchday: int = Field(default=15, ge=0)
    cache_ttl_table: int = Field(default=300, ge=0)

    # ==========================================================================
    # Plugins
    # ==========================================================================
    enabled_plugins: list[str] = Field(
        default_factory=list,
        description="Allow-list of plugin ids shown to the display layer; empty means all",
    )
    default_plugin: Optional[str] = Field(
        default=None,
        description="Plugin activated when the server starts",
    )

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    api_prefix: str = "/api/v1"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
