"""
Provider clients - fetch raw JSON from the external sports APIs.

Each client extends BaseApiClient (rate limiting, retries, FetchError).
Adapters own the transformation into canonical games, so switching
providers means writing a new client and adapter; the registry stays
untouched.
"""

from .espn import ESPNClient
from .openligadb import OpenLigaDBClient, client_from_settings

__all__ = [
    "ESPNClient",
    "OpenLigaDBClient",
    "client_from_settings",
]
