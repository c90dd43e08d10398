"""Domain models for resolved players."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PlayerIdentity(BaseModel):
    """Canonical, region-independent player identity."""

    puuid: str
    game_name: str
    tag_line: str

    @property
    def riot_id(self) -> str:
        """Riot ID in ``gameName#tagLine`` form."""
        return f"{self.game_name}#{self.tag_line}"

    model_config = ConfigDict(frozen=True)


class PlayerProfile(BaseModel):
    """Player profile on one platform."""

    puuid: str
    display_name: str
    level: int
    internal_id: Optional[str] = None
    last_updated: Optional[datetime] = None
    region: str
    profile_icon_id: int = 0
    identity: Optional[PlayerIdentity] = None

    model_config = ConfigDict(frozen=True)
