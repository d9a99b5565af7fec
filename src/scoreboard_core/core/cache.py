"""In-memory caching layer with TTL support."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import hashlib


class SimpleCache:
    """In-memory cache with TTL, used by provider clients on the event loop."""

    def __init__(self, default_ttl: int = 15):
        """
        Initialize cache with default TTL.

        Args:
            default_ttl: Default time-to-live in seconds (default: 15 seconds)
        """
        self._cache: dict[str, tuple[Any, datetime]] = {}
        self.default_ttl = default_ttl
        self.hits = 0
        self.misses = 0

    def _make_key(self, *args) -> str:
        """Create an MD5 cache key from the arguments."""
        key_str = "|".join(str(arg) for arg in args)
        return hashlib.md5(key_str.encode()).hexdigest()

    def get(self, *args) -> Optional[Any]:
        """
        Get cached value if not expired.

        Args:
            *args: Arguments to create cache key from

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        key = self._make_key(*args)

        if key in self._cache:
            value, expiry = self._cache[key]
            if datetime.now(timezone.utc) < expiry:
                self.hits += 1
                return value
            del self._cache[key]

        self.misses += 1
        return None

    def set(self, value: Any, *args, ttl: Optional[int] = None) -> None:
        """
        Set cached value with TTL.

        Args:
            value: Value to cache
            *args: Arguments to create cache key from
            ttl: Time-to-live in seconds (uses default_ttl if None)
        """
        key = self._make_key(*args)
        ttl = self.default_ttl if ttl is None else ttl
        # Expired entries are dropped on every write
        self.cleanup_expired()
        self._cache[key] = (value, datetime.now(timezone.utc) + timedelta(seconds=ttl))

    def cleanup_expired(self) -> int:
        """Remove all expired entries from cache; returns how many were dropped."""
        now = datetime.now(timezone.utc)
        expired_keys = [key for key, (_, expiry) in self._cache.items() if now >= expiry]
        for key in expired_keys:
            del self._cache[key]
        return len(expired_keys)

    def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    def size(self) -> int:
        """Number of entries currently held (expired ones included)."""
        return len(self._cache)

    def get_stats(self) -> dict[str, int]:
        return {"entries": self.size(), "hits": self.hits, "misses": self.misses}
