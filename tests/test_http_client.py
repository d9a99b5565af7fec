"""
Tests for the shared HTTP client, the TTL cache and the provider clients.
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from conftest import CLIENT_KWARGS, json_transport
from scoreboard_core.core.cache import SimpleCache
from scoreboard_core.core.http import BaseApiClient, FetchError, RateLimitError, parse_retry_after
from scoreboard_core.providers import ESPNClient, OpenLigaDBClient


class DemoClient(BaseApiClient):
    BASE_URL = "https://api.example.com"


class TestBaseApiClient:
    @pytest.mark.asyncio
    async def test_get_returns_json_and_merges_params(self):
        calls: list[httpx.Request] = []
        client = DemoClient(
            params={"lang": "de"},
            transport=json_transport({"/data": {"ok": True}}, calls),
            **CLIENT_KWARGS,
        )

        async with client:
            assert await client._get("/data", params={"page": 2}) == {"ok": True}

        assert calls[0].url.params["lang"] == "de"
        assert calls[0].url.params["page"] == "2"

    @pytest.mark.asyncio
    async def test_not_found_is_not_retried(self):
        calls: list[httpx.Request] = []
        client = DemoClient(
            transport=json_transport({}, calls),
            requests_per_minute=60000,
            max_retries=3,
        )

        with pytest.raises(FetchError) as exc_info:
            await client._get("/missing")
        await client.close()

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.status_code == 404
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_retried_then_raised(self):
        calls: list[httpx.Request] = []
        client = DemoClient(
            transport=json_transport({"/flaky": httpx.Response(503, text="busy")}, calls),
            requests_per_minute=60000,
            max_retries=2,
        )

        with pytest.raises(FetchError) as exc_info:
            await client._get("/flaky")
        await client.close()

        assert exc_info.value.status_code == 503
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        client = DemoClient(
            transport=json_transport(
                {"/limited": httpx.Response(429, headers={"retry-after": "12"})}
            ),
            **CLIENT_KWARGS,
        )

        with pytest.raises(RateLimitError) as exc_info:
            await client._get("/limited")
        await client.close()

        assert exc_info.value.retry_after == 12
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_rate_limited_with_http_date(self):
        client = DemoClient(
            transport=json_transport(
                {"/limited": httpx.Response(429, headers={"retry-after": "Wed, 21 Oct 2015 07:28:00 GMT"})}
            ),
            **CLIENT_KWARGS,
        )

        with pytest.raises(RateLimitError) as exc_info:
            await client._get("/limited")
        await client.close()

        # A date in the past means retry now
        assert exc_info.value.retry_after == 0
        assert exc_info.value.code == "RATE_LIMITED"

    def test_parse_retry_after(self):
        now = datetime(2026, 10, 21, 7, 27, tzinfo=timezone.utc)

        assert parse_retry_after("120") == 120
        assert parse_retry_after("Wed, 21 Oct 2026 07:28:00 GMT", now=now) == 60
        assert parse_retry_after(None) == 60
        assert parse_retry_after("soon") == 60

    @pytest.mark.asyncio
    async def test_transport_error_becomes_fetch_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = DemoClient(transport=httpx.MockTransport(handler), **CLIENT_KWARGS)

        with pytest.raises(FetchError, match="connection refused"):
            await client._get("/data")
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = DemoClient(
            transport=json_transport({"/html": httpx.Response(200, text="<html>")}),
            **CLIENT_KWARGS,
        )

        with pytest.raises(FetchError, match="Invalid JSON"):
            await client._get("/html")
        await client.close()

    @pytest.mark.asyncio
    async def test_client_recreated_after_close(self):
        client = DemoClient(transport=json_transport({"/data": [1]}), **CLIENT_KWARGS)
        assert await client._get("/data") == [1]
        await client.close()
        assert await client._get("/data") == [1]
        await client.close()


class TestSimpleCache:
    def test_set_get_and_stats(self):
        cache = SimpleCache(default_ttl=60)
        assert cache.get("table", "bl1", 2025) is None

        cache.set({"rows": []}, "table", "bl1", 2025)

        assert cache.get("table", "bl1", 2025) == {"rows": []}
        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_zero_ttl_expires_immediately(self):
        cache = SimpleCache(default_ttl=60)
        cache.set("value", "key", ttl=0)
        assert cache.get("key") is None

    def test_set_drops_expired_entries(self):
        cache = SimpleCache(default_ttl=60)
        cache.set("stale", "/getmatchdata/70001", ttl=0)
        cache.set("stale", "/getmatchdata/70002", ttl=0)
        assert cache.size() == 1

        cache.set("fresh", "/getmatchdata/70003")

        assert cache.get_stats()["entries"] == 1
        assert cache.get("/getmatchdata/70003") == "fresh"

    def test_cleanup_expired(self):
        cache = SimpleCache(default_ttl=60)
        cache.set("kept", "a")
        cache._cache[cache._make_key("b")] = ("gone", datetime(2020, 1, 1, tzinfo=timezone.utc))

        assert cache.cleanup_expired() == 1
        assert cache.size() == 1

    def test_clear(self):
        cache = SimpleCache()
        cache.set(1, "a")
        cache.clear()
        assert cache.get("a") is None


class TestOpenLigaDBClient:
    @pytest.mark.asyncio
    async def test_matchday_responses_are_cached(self):
        calls: list[httpx.Request] = []
        client = OpenLigaDBClient(
            transport=json_transport({"/getmatchdata/bl1/2025/7": [{"matchID": 1}]}, calls),
            **CLIENT_KWARGS,
        )

        first = await client.get_matchday("bl1", 2025, 7)
        second = await client.get_matchday("bl1", 2025, 7)
        await client.close()

        assert first == second == [{"matchID": 1}]
        assert len(calls) == 1
        assert client.get_cache_stats()["hits"] == 1

    @pytest.mark.asyncio
    async def test_current_group_requires_group_order_id(self):
        client = OpenLigaDBClient(
            transport=json_transport({"/getcurrentgroup/bl1": {"groupName": "?"}}),
            **CLIENT_KWARGS,
        )
        with pytest.raises(FetchError):
            await client.get_current_group("bl1")
        await client.close()

    @pytest.mark.asyncio
    async def test_unknown_match(self):
        # OpenLigaDB answers unknown ids with an empty body, not a 404
        client = OpenLigaDBClient(
            transport=json_transport({"/getmatchdata/123": {}}),
            **CLIENT_KWARGS,
        )
        with pytest.raises(FetchError) as exc_info:
            await client.get_match("123")
        await client.close()
        assert exc_info.value.code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_table_path(self):
        calls: list[httpx.Request] = []
        client = OpenLigaDBClient(
            transport=json_transport({"/getbltable/bl1/2025": [{"teamInfoId": 40}]}, calls),
            **CLIENT_KWARGS,
        )
        assert await client.get_table("bl1", 2025) == [{"teamInfoId": 40}]
        await client.close()


class TestESPNClient:
    @pytest.mark.asyncio
    async def test_week_query(self):
        calls: list[httpx.Request] = []
        client = ESPNClient(
            base_url="https://espn.test/football/nfl",
            transport=json_transport({"/football/nfl/scoreboard": {"events": []}}, calls),
            **CLIENT_KWARGS,
        )

        assert await client.get_week(2025, 3, 2) == {"events": []}
        await client.close()

        params = calls[0].url.params
        assert (params["dates"], params["seasontype"], params["week"]) == ("2025", "3", "2")

    @pytest.mark.asyncio
    async def test_summary_query(self):
        calls: list[httpx.Request] = []
        client = ESPNClient(
            base_url="https://espn.test/football/nfl",
            transport=json_transport({"/football/nfl/summary": {"header": {}}}, calls),
            **CLIENT_KWARGS,
        )
        await client.get_summary("401547417")
        await client.close()
        assert calls[0].url.params["event"] == "401547417"
