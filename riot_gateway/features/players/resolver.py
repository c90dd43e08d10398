"""
Player identity resolution on top of the Riot API client.

A handle is either a Riot ID (``gameName#tagLine``) or a bare legacy name.
Riot IDs resolve through account-v1 (continental) then summoner-v4
(platform). Bare names are retried against a fixed list of popular tag lines
for the region's continental group, which can miss players with other tags.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import structlog

from riot_gateway.core.exceptions import (
    IdentityNotResolvedError,
    InvalidIdentityFormatError,
)
from riot_gateway.core.riot_api.constants import DEFAULT_TAG_LINES, RegionDirectory
from riot_gateway.core.riot_api.errors import NotFoundError

from .models import PlayerIdentity, PlayerProfile

if TYPE_CHECKING:
    from riot_gateway.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)

RIOT_ID_SEPARATOR = "#"
GAME_NAME_LENGTH = (3, 16)
TAG_LINE_LENGTH = (2, 5)


def parse_riot_id(handle: str) -> Optional[Tuple[str, str]]:
    """
    Split a player handle into ``(game_name, tag_line)``.

    :param handle: ``gameName#tagLine`` or a bare legacy name
    :returns: The pair, or None for a bare name
    :raises InvalidIdentityFormatError: If the handle is malformed
    """
    text = (handle or "").strip()
    if not text:
        raise InvalidIdentityFormatError(handle, "handle is empty")

    if RIOT_ID_SEPARATOR not in text:
        _check_length(handle, text, "name", GAME_NAME_LENGTH)
        return None

    parts = text.split(RIOT_ID_SEPARATOR)
    if len(parts) != 2:
        raise InvalidIdentityFormatError(
            handle, "expected exactly one '#' between game name and tag line"
        )

    game_name, tag_line = parts[0].strip(), parts[1].strip()
    _check_length(handle, game_name, "game name", GAME_NAME_LENGTH)
    _check_length(handle, tag_line, "tag line", TAG_LINE_LENGTH)
    return game_name, tag_line


def _check_length(handle: str, value: str, label: str, bounds: Tuple[int, int]) -> None:
    low, high = bounds
    if not low <= len(value) <= high:
        raise InvalidIdentityFormatError(
            handle, f"{label} must be {low}-{high} characters"
        )


class IdentityResolver:
    """Resolves player handles to platform-scoped profiles."""

    def __init__(
        self,
        riot_api_client: "RiotAPIClient",
        regions: Optional[RegionDirectory] = None,
    ):
        """
        Initialize resolver with Riot API client.

        :param riot_api_client: Client used for the account and summoner calls
        :param regions: Region directory (defaults to the client's)
        """
        self._client = riot_api_client
        self._regions = regions or riot_api_client.regions

    def candidate_tag_lines(self, region: str) -> List[str]:
        """Tag lines tried, in order, for a bare name in this region."""
        entry = self._regions.resolve(region)
        return list(DEFAULT_TAG_LINES.get(entry.continent, ["0000"]))

    async def resolve(self, handle: str, region: str) -> PlayerProfile:
        """
        Resolve a handle to the player's profile in a region.

        Region and handle are validated before any request is made.

        :param handle: ``gameName#tagLine`` or a bare legacy name
        :param region: Region code such as ``na1``
        :returns: Profile of the resolved player
        :raises InvalidRegionError: If the region is unknown
        :raises InvalidIdentityFormatError: If the handle is malformed
        :raises NotFoundError: If an explicit Riot ID does not exist
        :raises IdentityNotResolvedError: If no candidate tag line matched
        :raises RiotAPIError: Any other remote failure, unchanged
        """
        entry = self._regions.resolve(region)
        riot_id = parse_riot_id(handle)

        if riot_id is not None:
            game_name, tag_line = riot_id
            return await self.resolve_riot_id(game_name, tag_line, entry.code)

        name = handle.strip()
        tried: List[str] = []
        for tag_line in self.candidate_tag_lines(entry.code):
            tried.append(tag_line)
            try:
                return await self.resolve_riot_id(name, tag_line, entry.code)
            except NotFoundError:
                logger.debug(
                    "Candidate tag line not found, trying next",
                    game_name=name,
                    tag_line=tag_line,
                    region=entry.code,
                )

        logger.info(
            "Player handle not resolved", handle=handle, region=entry.code, tried=tried
        )
        raise IdentityNotResolvedError(handle, entry.code, tried)

    async def resolve_riot_id(
        self, game_name: str, tag_line: str, region: str
    ) -> PlayerProfile:
        """
        Resolve an explicit Riot ID through account then summoner lookup.

        :raises NotFoundError: If either lookup finds nothing
        """
        account = await self._client.get_account_by_riot_id(game_name, tag_line, region)
        identity = PlayerIdentity(
            puuid=account.puuid,
            game_name=account.game_name,
            tag_line=account.tag_line,
        )

        summoner = await self._client.get_summoner_by_puuid(identity.puuid, region)

        logger.debug(
            "Player resolved",
            riot_id=identity.riot_id,
            region=region,
            level=summoner.summoner_level,
        )
        return PlayerProfile(
            puuid=identity.puuid,
            display_name=identity.riot_id,
            level=summoner.summoner_level,
            internal_id=summoner.id,
            last_updated=summoner.revision_datetime,
            region=self._regions.resolve(region).code,
            profile_icon_id=summoner.profile_icon_id,
            identity=identity,
        )
