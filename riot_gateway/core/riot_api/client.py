"""Riot API HTTP client with rate limiting, response caching and error handling."""

import asyncio
from typing import Any, Dict, List, Optional, Set, Union

import structlog

from ..config import Settings, get_global_settings
from .cache import ResourceKind, ResponseCache, cache_key as build_cache_key
from .constants import QueueType, RegionDirectory, RegionEntry
from .endpoints import RiotAPIEndpoints, RouteSpec
from .errors import (
    DEFAULT_RETRY_AFTER,
    MalformedResponseError,
    RateLimitError,
    classify_error,
)
from .models import (
    AccountDTO,
    ChampionMasteryDTO,
    LeagueEntryDTO,
    MatchDTO,
    SummonerDTO,
)
from .rate_limiter import RateLimiter
from .transport import HttpxTransport, Transport

logger = structlog.get_logger(__name__)

RIOT_TOKEN_HEADER = "X-Riot-Token"


class RiotAPIClient:
    """Riot API client: cache lookup, rate limiting, one request, classification."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[Transport] = None,
        rate_limiter: Optional[RateLimiter] = None,
        cache: Optional[ResponseCache] = None,
        regions: Optional[RegionDirectory] = None,
    ):
        """
        Initialize Riot API client.

        Every collaborator is built from settings when not injected, so tests
        can hand each client its own isolated limiter and cache.

        Args:
            api_key: Riot API key (uses settings if None)
            settings: Gateway settings (uses the global settings if None)
            transport: HTTP transport
            rate_limiter: Burst and sustained rate limiter
            cache: Response cache
            regions: Region directory
        """
        self.settings = settings or get_global_settings()
        self.api_key = api_key if api_key is not None else self.settings.riot_api_key
        self.regions = regions or RegionDirectory()
        self.endpoints = RiotAPIEndpoints(self.settings, self.regions)
        self.rate_limiter = rate_limiter or RateLimiter(
            per_second=self.settings.rate_limit_per_second,
            per_window=self.settings.rate_limit_per_window,
            window_seconds=self.settings.rate_limit_window_seconds,
        )
        self.cache = cache or ResponseCache(enabled=self.settings.cache_enabled)
        self.transport = transport or HttpxTransport(
            timeout=self.settings.request_timeout
        )

        # Fetches keep running when their caller is cancelled
        self._inflight: Set["asyncio.Task[Any]"] = set()

    async def __aenter__(self) -> "RiotAPIClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Let in-flight fetches finish, then close the underlying transport."""
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)
        await self.transport.close()
        logger.info("Riot API client closed")

    async def call(
        self,
        route: RouteSpec,
        cache_key: Optional[str] = None,
        ttl: Optional[float] = None,
    ) -> Any:
        """
        Perform one logical API call.

        Args:
            route: Resource kind, region and parameters of the call
            cache_key: Key to read and store the decoded body under
            ttl: Seconds to keep the body cached (None disables storing)

        Returns:
            Decoded JSON body

        Raises:
            InvalidRegionError: If the route's region is unknown (no request made)
            RiotAPIError: Typed failure for every non-2xx outcome
        """
        url = self.endpoints.build_url(route)

        if cache_key is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        await self.rate_limiter.wait_if_needed()

        task = asyncio.ensure_future(self._fetch(url, route, cache_key, ttl))
        self._inflight.add(task)
        task.add_done_callback(self._forget_task)

        try:
            return await asyncio.shield(task)
        except RateLimitError as e:
            wait_time = e.retry_after if e.retry_after is not None else DEFAULT_RETRY_AFTER
            logger.warning(
                "Rate limited by Riot API, waiting",
                wait_time=wait_time,
                kind=route.kind.value,
                region=route.region,
            )
            await asyncio.sleep(wait_time)
            raise

    async def _fetch(
        self,
        url: str,
        route: RouteSpec,
        cache_key: Optional[str],
        ttl: Optional[float],
    ) -> Any:
        """Issue the request, classify failures and store successful bodies."""
        response = await self.transport.fetch(url, {RIOT_TOKEN_HEADER: self.api_key})

        if not response.ok:
            error = classify_error(
                response.status_code,
                response.headers,
                response.content,
                response.reason_phrase,
            )
            logger.warning(
                "Riot API request failed",
                error_type=error.__class__.__name__,
                status_code=response.status_code,
                kind=route.kind.value,
                region=route.region,
            )
            raise error

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Response body is not valid JSON", status_code=response.status_code
            ) from e

        if cache_key is not None and ttl:
            self.cache.set(cache_key, data, ttl)
        return data

    def _forget_task(self, task: "asyncio.Task[Any]") -> None:
        self._inflight.discard(task)
        if not task.cancelled():
            # Mark the outcome as retrieved when the caller already gave up
            task.exception()

    def _region(self, region: str) -> RegionEntry:
        return self.regions.resolve(region)

    # Account endpoints (continental)
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: str
    ) -> AccountDTO:
        """Get account by Riot ID (gameName#tagLine)."""
        entry = self._region(region)
        route = RouteSpec(
            ResourceKind.IDENTITY,
            entry.code,
            {"game_name": game_name, "tag_line": tag_line},
        )
        key = build_cache_key(
            ResourceKind.IDENTITY,
            entry.continent.value,
            game_name.lower(),
            tag_line.lower(),
        )
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return AccountDTO(**response)

    # Summoner endpoints (platform)
    async def get_summoner_by_puuid(self, puuid: str, region: str) -> SummonerDTO:
        """Get summoner by PUUID."""
        entry = self._region(region)
        route = RouteSpec(ResourceKind.PROFILE, entry.code, {"puuid": puuid})
        key = build_cache_key(ResourceKind.PROFILE, entry.code, puuid)
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return SummonerDTO(**response)

    # League endpoints (platform)
    async def get_league_entries_by_summoner(
        self, summoner_id: str, region: str
    ) -> List[LeagueEntryDTO]:
        """Get ranked league entries; an unranked player yields an empty list."""
        entry = self._region(region)
        route = RouteSpec(
            ResourceKind.RANKED_ENTRIES, entry.code, {"summoner_id": summoner_id}
        )
        key = build_cache_key(ResourceKind.RANKED_ENTRIES, entry.code, summoner_id)
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return [LeagueEntryDTO(**item) for item in self._expect_list(response, route)]

    # Champion mastery endpoints (platform)
    async def get_champion_masteries_by_puuid(
        self, puuid: str, region: str
    ) -> List[ChampionMasteryDTO]:
        """Get all champion masteries of a player."""
        entry = self._region(region)
        route = RouteSpec(ResourceKind.MASTERY_LIST, entry.code, {"puuid": puuid})
        key = build_cache_key(ResourceKind.MASTERY_LIST, entry.code, puuid)
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return [
            ChampionMasteryDTO(**item) for item in self._expect_list(response, route)
        ]

    async def get_champion_mastery(
        self, puuid: str, champion_id: int, region: str
    ) -> ChampionMasteryDTO:
        """Get champion mastery for a specific champion."""
        entry = self._region(region)
        route = RouteSpec(
            ResourceKind.MASTERY_SINGLE,
            entry.code,
            {"puuid": puuid, "champion_id": champion_id},
        )
        key = build_cache_key(
            ResourceKind.MASTERY_SINGLE, entry.code, puuid, champion_id
        )
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return ChampionMasteryDTO(**response)

    # Match endpoints (continental)
    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        region: str,
        start: int = 0,
        count: int = 20,
        queue: Optional[Union[int, QueueType]] = None,
        type: Optional[str] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> List[str]:
        """Get match IDs by PUUID, most recent first."""
        entry = self._region(region)
        queue_id = int(queue) if queue is not None else None
        route = RouteSpec(
            ResourceKind.MATCH_IDS,
            entry.code,
            {"puuid": puuid},
            {
                "start": start,
                "count": count,
                "queue": queue_id,
                "type": type,
                "startTime": start_time,
                "endTime": end_time,
            },
        )
        key = build_cache_key(
            ResourceKind.MATCH_IDS,
            entry.continent.value,
            puuid,
            start,
            count,
            queue_id if queue_id is not None else "all",
            type,
            start_time,
            end_time,
        )
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return [str(match_id) for match_id in self._expect_list(response, route)]

    async def get_match(self, match_id: str, region: str) -> MatchDTO:
        """Get match details by match ID."""
        entry = self._region(region)
        route = RouteSpec(ResourceKind.MATCH_DETAIL, entry.code, {"match_id": match_id})
        key = build_cache_key(ResourceKind.MATCH_DETAIL, entry.continent.value, match_id)
        response = await self.call(route, key, self.endpoints.ttl_for(route.kind))
        return MatchDTO(**response)

    # Utility methods

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self.cache.clear()

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache size and keys."""
        return self.cache.stats()

    def get_rate_limit_status(self) -> Dict[str, Dict[str, float]]:
        """Get current rate limit window usage."""
        return self.rate_limiter.get_status()

    @staticmethod
    def _expect_list(response: Any, route: RouteSpec) -> List[Any]:
        """API returns a JSON array for list resources."""
        if not isinstance(response, list):
            raise MalformedResponseError(
                f"Expected list response for {route.kind.value}, got {type(response).__name__}"
            )
        return response
