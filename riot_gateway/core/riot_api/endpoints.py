"""Riot API endpoint definitions and routing information."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote, urlencode

from ..config import Settings
from .cache import ResourceKind
from .constants import RegionDirectory, RegionEntry


class RoutingClass(str, Enum):
    """Which host family serves a resource."""

    PLATFORM = "platform"
    CONTINENTAL = "continental"


@dataclass(frozen=True)
class ResourceDescriptor:
    """Path template, routing class and TTL setting of one resource kind."""

    path: str
    routing: RoutingClass
    ttl_setting: str


RESOURCES: Dict[ResourceKind, ResourceDescriptor] = {
    ResourceKind.IDENTITY: ResourceDescriptor(
        "/riot/account/v1/accounts/by-riot-id/{game_name}/{tag_line}",
        RoutingClass.CONTINENTAL,
        "cache_summoner_ttl",
    ),
    ResourceKind.PROFILE: ResourceDescriptor(
        "/lol/summoner/v4/summoners/by-puuid/{puuid}",
        RoutingClass.PLATFORM,
        "cache_summoner_ttl",
    ),
    ResourceKind.RANKED_ENTRIES: ResourceDescriptor(
        "/lol/league/v4/entries/by-summoner/{summoner_id}",
        RoutingClass.PLATFORM,
        "cache_ranked_ttl",
    ),
    ResourceKind.MASTERY_LIST: ResourceDescriptor(
        "/lol/champion-mastery/v4/champion-masteries/by-puuid/{puuid}",
        RoutingClass.PLATFORM,
        "cache_mastery_ttl",
    ),
    ResourceKind.MASTERY_SINGLE: ResourceDescriptor(
        "/lol/champion-mastery/v4/champion-masteries/by-puuid/{puuid}/by-champion/{champion_id}",
        RoutingClass.PLATFORM,
        "cache_mastery_ttl",
    ),
    ResourceKind.MATCH_IDS: ResourceDescriptor(
        "/lol/match/v5/matches/by-puuid/{puuid}/ids",
        RoutingClass.CONTINENTAL,
        "cache_matches_ttl",
    ),
    ResourceKind.MATCH_DETAIL: ResourceDescriptor(
        "/lol/match/v5/matches/{match_id}",
        RoutingClass.CONTINENTAL,
        "cache_matches_ttl",
    ),
}


@dataclass(frozen=True)
class RouteSpec:
    """One logical remote call: resource kind, region, path and query values."""

    kind: ResourceKind
    region: str
    path_params: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)

    @property
    def descriptor(self) -> ResourceDescriptor:
        return RESOURCES[self.kind]


class RiotAPIEndpoints:
    """Builds request URLs from route specs."""

    def __init__(self, settings: Settings, regions: Optional[RegionDirectory] = None):
        """
        Initialize endpoint configuration.

        Args:
            settings: Settings carrying the continental and platform base URLs
            regions: Region directory used to route region codes
        """
        self.settings = settings
        self.regions = regions or RegionDirectory()

    def get_base_url(self, entry: RegionEntry, routing: RoutingClass) -> str:
        """Get base URL for a region entry under the given routing class."""
        if routing is RoutingClass.CONTINENTAL:
            return self.settings.continental_base_url(entry.continent.value)
        return self.settings.platform_base_url(entry.platform.value)

    def build_url(self, route: RouteSpec) -> str:
        """
        Build the full request URL for a route.

        Path parameters are percent-encoded; query parameters with a None value
        are left out.

        Raises:
            InvalidRegionError: If the route's region is not supported
        """
        entry = self.regions.resolve(route.region)
        descriptor = route.descriptor
        encoded = {
            name: quote(str(value), safe="") for name, value in route.path_params.items()
        }
        url = self.get_base_url(entry, descriptor.routing) + descriptor.path.format(
            **encoded
        )

        params = [
            (name, self._query_value(value))
            for name, value in route.query.items()
            if value is not None
        ]
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def ttl_for(self, kind: ResourceKind) -> float:
        """Configured cache TTL in seconds for a resource kind."""
        return float(getattr(self.settings, RESOURCES[kind].ttl_setting))

    @staticmethod
    def _query_value(value: Any) -> Any:
        """Enums go on the wire by value."""
        return value.value if isinstance(value, Enum) else value
