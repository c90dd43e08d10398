"""Shared fixtures for gateway tests."""

import json
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import pytest

from riot_gateway.core.config import Settings
from riot_gateway.core.riot_api.cache import ResponseCache
from riot_gateway.core.riot_api.client import RiotAPIClient
from riot_gateway.core.riot_api.rate_limiter import RateLimiter
from riot_gateway.core.riot_api.transport import TransportResponse


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    reason: str = "OK",
) -> TransportResponse:
    """Build a transport response with a JSON body."""
    if isinstance(body, (bytes, str)):
        content = body.encode() if isinstance(body, str) else body
    else:
        content = json.dumps(body).encode()
    return TransportResponse(
        status_code=status_code,
        headers=headers or {},
        content=content,
        reason_phrase=reason,
    )


@pytest.fixture
def clock():
    """Fake clock shared by limiter and cache."""
    return FakeClock()


@pytest.fixture
def settings():
    """Settings isolated from the environment's .env file."""
    return Settings(
        _env_file=None,
        riot_api_key="test_api_key",
        rate_limit_per_second=20,
        rate_limit_per_window=100,
        cache_enabled=True,
    )


@pytest.fixture
def transport():
    """Transport double recording every fetch."""
    fake = AsyncMock()
    fake.fetch = AsyncMock()
    fake.close = AsyncMock()
    return fake


@pytest.fixture
def client(settings, transport, clock):
    """Client with isolated limiter, cache and transport."""
    return RiotAPIClient(
        settings=settings,
        transport=transport,
        rate_limiter=RateLimiter(
            per_second=settings.rate_limit_per_second,
            per_window=settings.rate_limit_per_window,
            window_seconds=settings.rate_limit_window_seconds,
            clock=clock,
        ),
        cache=ResponseCache(enabled=settings.cache_enabled, clock=clock),
    )


@pytest.fixture
def sample_account_data():
    """Sample account data for testing."""
    return {"puuid": "test-puuid-123", "gameName": "Doublelift", "tagLine": "NA1"}


@pytest.fixture
def sample_summoner_data():
    """Sample summoner data for testing."""
    return {
        "id": "test-summoner-id",
        "accountId": "test-account-id",
        "puuid": "test-puuid-123",
        "profileIconId": 1234,
        "revisionDate": 1710000000000,
        "summonerLevel": 412,
    }


@pytest.fixture
def sample_league_entries():
    """Sample ranked entries for testing."""
    return [
        {
            "leagueId": "league-1",
            "summonerId": "test-summoner-id",
            "queueType": "RANKED_SOLO_5x5",
            "tier": "DIAMOND",
            "rank": "II",
            "leaguePoints": 75,
            "wins": 120,
            "losses": 100,
            "hotStreak": True,
            "veteran": False,
            "freshBlood": False,
            "inactive": False,
        }
    ]


@pytest.fixture
def sample_mastery_data():
    """Sample champion mastery entry for testing."""
    return {
        "puuid": "test-puuid-123",
        "championId": 222,
        "championLevel": 7,
        "championPoints": 523000,
        "lastPlayTime": 1710000000000,
        "championPointsSinceLastLevel": 501400,
        "championPointsUntilNextLevel": 0,
        "markRequiredForNextLevel": 2,
        "tokensEarned": 0,
        "championSeasonMilestone": 3,
        "milestoneGrades": ["S-", "A+"],
    }


@pytest.fixture
def sample_match_data():
    """Sample match data for testing."""
    return {
        "metadata": {
            "matchId": "NA1_1234567890",
            "dataVersion": "2",
            "participants": ["test-puuid-123", "puuid2"],
        },
        "info": {
            "gameCreation": 1710000000000,
            "gameDuration": 1800,
            "gameEndTimestamp": 1710001800000,
            "queueId": 420,
            "mapId": 11,
            "gameVersion": "14.20.555.5555",
            "gameMode": "CLASSIC",
            "gameType": "MATCHED_GAME",
            "participants": [
                {
                    "puuid": "test-puuid-123",
                    "participantId": 1,
                    "riotIdGameName": "Doublelift",
                    "riotIdTagline": "NA1",
                    "teamId": 100,
                    "win": True,
                    "championId": 222,
                    "championName": "Jinx",
                    "kills": 12,
                    "deaths": 2,
                    "assists": 6,
                    "champLevel": 18,
                    "visionScore": 25.0,
                    "goldEarned": 15000,
                    "totalMinionsKilled": 250,
                    "neutralMinionsKilled": 10,
                    "teamPosition": "BOTTOM",
                    "perks": {"styles": []},
                },
                {
                    "puuid": "puuid2",
                    "participantId": 6,
                    "teamId": 200,
                    "win": False,
                    "championId": 51,
                    "championName": "Caitlyn",
                    "kills": 2,
                    "deaths": 0,
                    "assists": 3,
                },
            ],
            "teams": [
                {"teamId": 100, "win": True, "bans": [{"championId": 1, "pickTurn": 1}]},
                {"teamId": 200, "win": False, "bans": []},
            ],
            "platformId": "NA1",
        },
    }
