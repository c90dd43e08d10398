"""
Tests for Riot API client.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from riot_gateway.core.exceptions import InvalidRegionError
from riot_gateway.core.riot_api.cache import ResourceKind, ResponseCache
from riot_gateway.core.riot_api.client import RIOT_TOKEN_HEADER, RiotAPIClient
from riot_gateway.core.riot_api.constants import QueueType
from riot_gateway.core.riot_api.endpoints import RouteSpec
from riot_gateway.core.riot_api.errors import (
    MalformedResponseError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    TransportError,
)
from riot_gateway.core.riot_api.models import (
    AccountDTO,
    ChampionMasteryDTO,
    LeagueEntryDTO,
    MatchDTO,
    SummonerDTO,
)
from riot_gateway.core.riot_api.rate_limiter import RateLimiter
from riot_gateway.tests.conftest import make_response

SLEEP_TARGET = "riot_gateway.core.riot_api.client.asyncio.sleep"


class TestRiotAPIClient:
    """Test cases for RiotAPIClient."""

    def test_initialization_from_settings(self, settings, transport):
        """Test collaborators are built from settings."""
        client = RiotAPIClient(settings=settings, transport=transport)

        assert client.api_key == "test_api_key"
        assert client.rate_limiter.burst.quota == 20
        assert client.rate_limiter.sustained.quota == 100
        assert client.cache.enabled is True

    def test_explicit_api_key(self, settings, transport):
        """Test that an explicit key wins over settings."""
        client = RiotAPIClient(api_key="other", settings=settings, transport=transport)

        assert client.api_key == "other"

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, settings, transport):
        """Test async context manager closes the transport."""
        async with RiotAPIClient(settings=settings, transport=transport) as client:
            assert client.transport is transport

        transport.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_token_header_sent(self, client, transport, sample_summoner_data):
        """Test that every request carries the API key header."""
        transport.fetch.return_value = make_response(200, sample_summoner_data)

        await client.get_summoner_by_puuid("test-puuid-123", "na1")

        url, headers = transport.fetch.call_args.args
        assert url == (
            "https://na1.api.riotgames.com/lol/summoner/v4/summoners/by-puuid/test-puuid-123"
        )
        assert headers == {RIOT_TOKEN_HEADER: "test_api_key"}

    @pytest.mark.asyncio
    async def test_ranked_entries_cached(self, client, transport, sample_league_entries):
        """Test that a second ranked lookup within the TTL is a cache hit."""
        transport.fetch.return_value = make_response(200, sample_league_entries)

        first = await client.get_league_entries_by_summoner("test-summoner-id", "na1")
        second = await client.get_league_entries_by_summoner("test-summoner-id", "na1")

        assert transport.fetch.await_count == 1
        assert first == second
        assert isinstance(first[0], LeagueEntryDTO)
        assert first[0].tier == "DIAMOND"
        assert first[0].win_rate == pytest.approx(120 / 220 * 100)

    @pytest.mark.asyncio
    async def test_cache_hit_does_not_consume_quota(
        self, client, transport, sample_league_entries
    ):
        """Test that only remote calls are counted by the rate limiter."""
        transport.fetch.return_value = make_response(200, sample_league_entries)

        for _ in range(3):
            await client.get_league_entries_by_summoner("test-summoner-id", "na1")

        assert client.get_rate_limit_status()["burst"]["used"] == 1

    @pytest.mark.asyncio
    async def test_cache_expires(self, client, transport, clock, sample_league_entries):
        """Test that the entry is refetched after its TTL."""
        transport.fetch.return_value = make_response(200, sample_league_entries)

        await client.get_league_entries_by_summoner("test-summoner-id", "na1")
        clock.advance(client.settings.cache_ranked_ttl + 1)
        await client.get_league_entries_by_summoner("test-summoner-id", "na1")

        assert transport.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_unranked_player_empty_list(self, client, transport):
        """Test that an empty list is a cached success."""
        transport.fetch.return_value = make_response(200, [])

        assert await client.get_league_entries_by_summoner("s", "na1") == []
        assert await client.get_league_entries_by_summoner("s", "na1") == []
        assert transport.fetch.await_count == 1
        assert "ranked_entries:na1:s" in client.cache

    @pytest.mark.asyncio
    async def test_cache_disabled(self, settings, transport, clock, sample_league_entries):
        """Test that a disabled cache sends every call to the remote."""
        client = RiotAPIClient(
            settings=settings,
            transport=transport,
            rate_limiter=RateLimiter(clock=clock),
            cache=ResponseCache(enabled=False, clock=clock),
        )
        transport.fetch.return_value = make_response(200, sample_league_entries)

        await client.get_league_entries_by_summoner("s", "na1")
        await client.get_league_entries_by_summoner("s", "na1")

        assert transport.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_zero_ttl_is_not_cached(self, transport, clock, sample_league_entries):
        """Test that a zero TTL setting disables caching for that kind."""
        from riot_gateway.core.config import Settings

        client = RiotAPIClient(
            settings=Settings(_env_file=None, riot_api_key="k", cache_ranked_ttl=0),
            transport=transport,
            rate_limiter=RateLimiter(clock=clock),
            cache=ResponseCache(clock=clock),
        )
        transport.fetch.return_value = make_response(200, sample_league_entries)

        await client.get_league_entries_by_summoner("s", "na1")
        await client.get_league_entries_by_summoner("s", "na1")

        assert transport.fetch.await_count == 2
        assert len(client.cache) == 0

    @pytest.mark.asyncio
    async def test_call_without_cache_key(self, client, transport):
        """Test a raw call with no cache key is never stored."""
        transport.fetch.return_value = make_response(200, {"ok": True})
        route = RouteSpec(ResourceKind.MATCH_DETAIL, "na1", {"match_id": "NA1_1"})

        assert await client.call(route, ttl=600) == {"ok": True}
        assert client.get_cache_stats()["size"] == 0

    @pytest.mark.asyncio
    async def test_invalid_region_no_request(self, client, transport):
        """Test that an unknown region fails before any remote call."""
        with pytest.raises(InvalidRegionError):
            await client.get_summoner_by_puuid("abc", "atlantis")

        transport.fetch.assert_not_called()
        assert client.get_rate_limit_status()["burst"]["used"] == 0

    @pytest.mark.asyncio
    async def test_not_found(self, client, transport):
        """Test 404 raises NotFoundError and is not cached."""
        transport.fetch.return_value = make_response(
            404, {"status": {"message": "Data not found", "status_code": 404}}
        )

        with pytest.raises(NotFoundError):
            await client.get_summoner_by_puuid("missing", "na1")
        with pytest.raises(NotFoundError):
            await client.get_summoner_by_puuid("missing", "na1")

        assert transport.fetch.await_count == 2
        assert len(client.cache) == 0

    @pytest.mark.asyncio
    async def test_rate_limited_sleeps_then_raises(self, client, transport):
        """Test 429 waits for Retry-After before the error surfaces."""
        transport.fetch.return_value = make_response(
            429, {}, headers={"Retry-After": "2"}, reason="Too Many Requests"
        )

        with patch(SLEEP_TARGET, new=AsyncMock()) as mock_sleep:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_summoner_by_puuid("abc", "na1")

        assert exc_info.value.retry_after_ms == 2000
        mock_sleep.assert_awaited_once_with(2.0)
        assert transport.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_rate_limited_default_wait(self, client, transport):
        """Test 429 without Retry-After waits one second."""
        transport.fetch.return_value = make_response(429, {})

        with patch(SLEEP_TARGET, new=AsyncMock()) as mock_sleep:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_match("NA1_1", "na1")

        assert exc_info.value.retry_after_ms == 1000
        mock_sleep.assert_awaited_once_with(1.0)

    @pytest.mark.asyncio
    async def test_server_unavailable(self, client, transport):
        """Test 503 surfaces without a courtesy wait."""
        transport.fetch.return_value = make_response(503, b"", reason="Service Unavailable")

        with patch(SLEEP_TARGET, new=AsyncMock()) as mock_sleep:
            with pytest.raises(ServiceUnavailableError):
                await client.get_match("NA1_1", "na1")

        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_json(self, client, transport):
        """Test a 200 with a non-JSON body."""
        transport.fetch.return_value = make_response(200, b"<html>maintenance</html>")

        with pytest.raises(MalformedResponseError):
            await client.get_summoner_by_puuid("abc", "na1")

        assert len(client.cache) == 0

    @pytest.mark.asyncio
    async def test_list_resource_with_object_body(self, client, transport):
        """Test a list resource answered with a JSON object."""
        transport.fetch.return_value = make_response(200, {"unexpected": True})

        with pytest.raises(MalformedResponseError):
            await client.get_champion_masteries_by_puuid("abc", "na1")

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, client, transport):
        """Test that connection failures surface as TransportError."""
        transport.fetch.side_effect = TransportError("Request failed: connection reset")

        with pytest.raises(TransportError):
            await client.get_match("NA1_1", "na1")

        assert client._inflight == set()

    @pytest.mark.asyncio
    async def test_get_account_by_riot_id(self, client, transport, sample_account_data):
        """Test account lookup and continent-scoped caching."""
        transport.fetch.return_value = make_response(200, sample_account_data)

        account = await client.get_account_by_riot_id("Doublelift", "NA1", "na1")
        again = await client.get_account_by_riot_id("doublelift", "na1", "br1")

        assert isinstance(account, AccountDTO)
        assert account.game_name == "Doublelift"
        assert again == account
        assert transport.fetch.await_count == 1
        assert "identity:americas:doublelift:na1" in client.cache

    @pytest.mark.asyncio
    async def test_profile_cache_is_region_scoped(
        self, client, transport, sample_summoner_data
    ):
        """Test that the same puuid on two platforms is fetched twice."""
        transport.fetch.return_value = make_response(200, sample_summoner_data)

        summoner = await client.get_summoner_by_puuid("test-puuid-123", "na1")
        await client.get_summoner_by_puuid("test-puuid-123", "euw1")

        assert isinstance(summoner, SummonerDTO)
        assert summoner.summoner_level == 412
        assert transport.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_champion_masteries(self, client, transport, sample_mastery_data):
        """Test mastery list lookup."""
        transport.fetch.return_value = make_response(200, [sample_mastery_data])

        masteries = await client.get_champion_masteries_by_puuid("test-puuid-123", "kr")

        assert len(masteries) == 1
        assert isinstance(masteries[0], ChampionMasteryDTO)
        assert masteries[0].champion_points == 523000
        assert "mastery_list:kr:test-puuid-123" in client.cache

    @pytest.mark.asyncio
    async def test_single_champion_mastery(self, client, transport, sample_mastery_data):
        """Test single champion mastery lookup."""
        transport.fetch.return_value = make_response(200, sample_mastery_data)

        mastery = await client.get_champion_mastery("test-puuid-123", 222, "na1")

        assert mastery.champion_id == 222
        url = transport.fetch.call_args.args[0]
        assert url.endswith("/by-puuid/test-puuid-123/by-champion/222")
        assert "mastery_single:na1:test-puuid-123:222" in client.cache

    @pytest.mark.asyncio
    async def test_match_ids_query_and_key(self, client, transport):
        """Test match id filters reach the query and the cache key."""
        transport.fetch.return_value = make_response(200, ["NA1_2", "NA1_1"])

        ids = await client.get_match_ids_by_puuid(
            "p", "na1", count=2, queue=QueueType.RANKED_SOLO_5X5
        )
        await client.get_match_ids_by_puuid("p", "na1", count=2)

        assert ids == ["NA1_2", "NA1_1"]
        assert transport.fetch.await_count == 2
        first_url = transport.fetch.call_args_list[0].args[0]
        assert first_url == (
            "https://americas.api.riotgames.com/lol/match/v5/matches/by-puuid/p/ids"
            "?start=0&count=2&queue=420"
        )
        assert "match_ids:americas:p:0:2:420:::" in client.cache
        assert "match_ids:americas:p:0:2:all:::" in client.cache

    @pytest.mark.asyncio
    async def test_get_match(self, client, transport, sample_match_data):
        """Test match detail lookup."""
        transport.fetch.return_value = make_response(200, sample_match_data)

        match = await client.get_match("NA1_1234567890", "na1")

        assert isinstance(match, MatchDTO)
        assert match.match_id == "NA1_1234567890"
        participant = match.participant("test-puuid-123")
        assert participant.champion_name == "Jinx"
        assert participant.kda == pytest.approx(9.0)
        assert match.participant("nobody") is None
        assert "match_detail:americas:NA1_1234567890" in client.cache

    @pytest.mark.asyncio
    async def test_clear_cache(self, client, transport, sample_league_entries):
        """Test clearing cached responses."""
        transport.fetch.return_value = make_response(200, sample_league_entries)
        await client.get_league_entries_by_summoner("s", "na1")

        client.clear_cache()
        await client.get_league_entries_by_summoner("s", "na1")

        assert transport.fetch.await_count == 2


class TestConcurrency:
    """Concurrent callers and cancellation."""

    @pytest.mark.asyncio
    async def test_concurrent_misses_are_not_deduplicated(
        self, client, transport, sample_league_entries
    ):
        """Test two concurrent misses on one key each call the remote."""
        gate = asyncio.Event()

        async def slow_fetch(url, headers):
            await gate.wait()
            return make_response(200, sample_league_entries)

        transport.fetch.side_effect = slow_fetch

        calls = asyncio.gather(
            client.get_league_entries_by_summoner("s", "na1"),
            client.get_league_entries_by_summoner("s", "na1"),
        )
        await asyncio.sleep(0)
        gate.set()
        first, second = await calls

        assert first == second
        assert transport.fetch.await_count == 2
        assert len(client.cache) == 1

    @pytest.mark.asyncio
    async def test_cancelled_caller_still_populates_cache(
        self, client, transport, sample_league_entries
    ):
        """Test that a response arriving after cancellation is still cached."""
        gate = asyncio.Event()

        async def slow_fetch(url, headers):
            await gate.wait()
            return make_response(200, sample_league_entries)

        transport.fetch.side_effect = slow_fetch

        caller = asyncio.create_task(client.get_league_entries_by_summoner("s", "na1"))
        while not transport.fetch.called:
            await asyncio.sleep(0)

        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        pending = set(client._inflight)
        assert len(pending) == 1
        gate.set()
        await asyncio.wait(pending)

        assert client.cache.get("ranked_entries:na1:s") == sample_league_entries
        assert client._inflight == set()

        entries = await client.get_league_entries_by_summoner("s", "na1")
        assert entries[0].tier == "DIAMOND"
        assert transport.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_close_waits_for_inflight_fetch(
        self, client, transport, sample_league_entries
    ):
        """Test close lets a cancelled caller's fetch finish and cache its result."""
        gate = asyncio.Event()

        async def slow_fetch(url, headers):
            await gate.wait()
            return make_response(200, sample_league_entries)

        transport.fetch.side_effect = slow_fetch

        caller = asyncio.create_task(client.get_league_entries_by_summoner("s", "na1"))
        while not transport.fetch.called:
            await asyncio.sleep(0)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        closing = asyncio.create_task(client.close())
        await asyncio.sleep(0)
        transport.close.assert_not_awaited()

        gate.set()
        await closing

        transport.close.assert_awaited_once()
        assert client._inflight == set()
        assert client.cache.get("ranked_entries:na1:s") == sample_league_entries


class TestCachedValueIsolation:
    """Returned values never alias cached entries."""

    @pytest.mark.asyncio
    async def test_mutating_result_does_not_change_cache(self, client, transport):
        """Test a caller editing a result leaves the cached value intact."""
        transport.fetch.return_value = make_response(200, ["NA1_1", "NA1_2"])
        route = RouteSpec(ResourceKind.MATCH_IDS, "na1", {"puuid": "p"})

        first = await client.call(route, "match_ids:k", 60)
        first.append("MUTATED")
        second = await client.call(route, "match_ids:k", 60)
        second.append("MUTATED AGAIN")
        third = await client.call(route, "match_ids:k", 60)

        assert third == ["NA1_1", "NA1_2"]
        assert transport.fetch.await_count == 1
