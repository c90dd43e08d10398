"""Resilient asyncio client for the Riot Games player-statistics API."""

__version__ = "1.0.0"
