#!/usr/bin/env python3
"""
Riot API smoke test.

Checks the API key and the gateway against the live Riot API without running
any bot.

Usage:
    # Resolve a few well-known players
    python scripts/check_riot_api.py

    # Resolve one player (region defaults to na1)
    python scripts/check_riot_api.py "Doublelift#NA1" na1

    # Also fetch ranked, mastery and match data
    python scripts/check_riot_api.py "Doublelift" na1 full
"""

import asyncio
import sys
from typing import List, Tuple

from riot_gateway.core import (
    ServiceException,
    get_global_settings,
    get_logger,
    setup_logging,
)
from riot_gateway.core.riot_api import RiotAPIClient, RiotAPIError
from riot_gateway.features.players import IdentityResolver, PlayerProfile

logger = get_logger(__name__)

QUICK_TEST_PLAYERS: List[Tuple[str, str]] = [
    ("Faker#KR1", "kr"),
    ("Doublelift#NA1", "na1"),
    ("Caps#EUW", "euw1"),
]


async def check_player(resolver: IdentityResolver, handle: str, region: str) -> PlayerProfile:
    """Resolve one handle and print the profile."""
    profile = await resolver.resolve(handle, region)
    print(f"Found {profile.display_name} on {profile.region}")
    print(f"   Level: {profile.level}")
    print(f"   PUUID: {profile.puuid[:8]}...")
    return profile


async def check_full(
    client: RiotAPIClient, resolver: IdentityResolver, handle: str, region: str
) -> None:
    """Resolve a player and fetch every resource kind once."""
    profile = await check_player(resolver, handle, region)

    if profile.internal_id:
        entries = await client.get_league_entries_by_summoner(profile.internal_id, region)
        if not entries:
            print("Ranked: unranked")
        for entry in entries:
            print(
                f"Ranked {entry.queue_type}: {entry.tier} {entry.rank} "
                f"{entry.league_points} LP | {entry.wins}W {entry.losses}L"
            )
    else:
        print("Ranked: skipped (no summoner id in profile)")

    masteries = await client.get_champion_masteries_by_puuid(profile.puuid, region)
    print(f"Masteries: {len(masteries)} champions")
    for index, mastery in enumerate(masteries[:5], start=1):
        print(
            f"   {index}. Champion {mastery.champion_id}: level "
            f"{mastery.champion_level} ({mastery.champion_points} points)"
        )

    match_ids = await client.get_match_ids_by_puuid(profile.puuid, region, count=5)
    print(f"Recent matches: {len(match_ids)}")
    if match_ids:
        match = await client.get_match(match_ids[0], region)
        participant = match.participant(profile.puuid)
        if participant is not None:
            result = "Victory" if participant.win else "Defeat"
            print(
                f"   Most recent: {participant.champion_name} | "
                f"{participant.kills}/{participant.deaths}/{participant.assists} | "
                f"{result} | {match.info.game_mode}"
            )

    stats = client.get_cache_stats()
    print(f"Cache: {stats['size']} entries cached")


def print_usage() -> None:
    """Print usage information."""
    print("Usage:")
    print("  python scripts/check_riot_api.py                         - Quick test")
    print("  python scripts/check_riot_api.py <handle> [region]       - Resolve a player")
    print("  python scripts/check_riot_api.py <handle> <region> full  - Full check")


async def main() -> None:
    """
    Main entry point.

    :raises SystemExit: On invalid arguments or a failed check
    """
    settings = get_global_settings()
    setup_logging(settings.log_level, json_output=False)

    if not settings.riot_api_key:
        print("Error: RIOT_API_KEY is not set")
        print("Get a key from https://developer.riotgames.com/ and export RIOT_API_KEY")
        sys.exit(1)

    args = sys.argv[1:]
    if len(args) > 3 or (len(args) == 3 and args[2].lower() != "full"):
        print_usage()
        sys.exit(1)

    async with RiotAPIClient(settings=settings) as client:
        resolver = IdentityResolver(client)
        try:
            if not args:
                for handle, region in QUICK_TEST_PLAYERS:
                    await check_player(resolver, handle, region)
            elif len(args) == 3:
                await check_full(client, resolver, args[0], args[1])
            else:
                region = args[1] if len(args) == 2 else settings.riot_default_region
                await check_player(resolver, args[0], region)
        except ServiceException as e:
            logger.error("Riot API check failed", error=str(e), argv=args)
            print(f"Error: {e}")
            sys.exit(1)
        except RiotAPIError as e:
            logger.error(
                "Riot API check failed", error=str(e), status_code=e.status_code, argv=args
            )
            print(f"Error: {e}")
            if e.is_auth_error():
                print("Check that RIOT_API_KEY is valid and not expired")
            sys.exit(1)

    print("\nAll checks completed successfully!")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user")
        sys.exit(1)
