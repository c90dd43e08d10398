"""
Riot API client package for League of Legends API integration.

This package provides the API access layer: region routing, client-side rate
limiting, the TTL response cache, typed errors and the HTTP client itself.
"""

from .client import RiotAPIClient
from .cache import ResourceKind, ResponseCache, CacheEntry, cache_key
from .constants import (
    Continent,
    Platform,
    QueueType,
    RegionEntry,
    RegionDirectory,
    REGIONS,
    DEFAULT_TAG_LINES,
)
from .endpoints import RiotAPIEndpoints, RouteSpec, RoutingClass, RESOURCES
from .errors import (
    RiotAPIError,
    BadRequestError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    UnsupportedMediaTypeError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    UnexpectedStatusError,
    TransportError,
    MalformedResponseError,
    classify_error,
)
from .models import (
    AccountDTO,
    SummonerDTO,
    LeagueEntryDTO,
    ChampionMasteryDTO,
    MatchDTO,
)
from .rate_limiter import RateLimiter, RateWindow
from .transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "RiotAPIClient",
    "ResourceKind",
    "ResponseCache",
    "CacheEntry",
    "cache_key",
    "Continent",
    "Platform",
    "QueueType",
    "RegionEntry",
    "RegionDirectory",
    "REGIONS",
    "DEFAULT_TAG_LINES",
    "RiotAPIEndpoints",
    "RouteSpec",
    "RoutingClass",
    "RESOURCES",
    "RiotAPIError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "UnsupportedMediaTypeError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "UnexpectedStatusError",
    "TransportError",
    "MalformedResponseError",
    "classify_error",
    "AccountDTO",
    "SummonerDTO",
    "LeagueEntryDTO",
    "ChampionMasteryDTO",
    "MatchDTO",
    "RateLimiter",
    "RateWindow",
    "HttpxTransport",
    "Transport",
    "TransportResponse",
]
