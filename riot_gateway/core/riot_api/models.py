"""Pydantic models for Riot API response data."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)


class SummonerDTO(BaseModel):
    """League of Legends Summoner information."""

    id: Optional[str] = None
    account_id: Optional[str] = Field(None, alias="accountId")
    puuid: str
    name: Optional[str] = None
    profile_icon_id: int = Field(0, alias="profileIconId")
    revision_date: Optional[int] = Field(None, alias="revisionDate")
    summoner_level: int = Field(..., alias="summonerLevel")

    @property
    def revision_datetime(self) -> Optional[datetime]:
        """Revision date (epoch milliseconds) as an aware datetime."""
        if self.revision_date is None:
            return None
        return datetime.fromtimestamp(self.revision_date / 1000, tz=timezone.utc)

    model_config = ConfigDict(populate_by_name=True)


class MiniSeriesDTO(BaseModel):
    """Promotion series progress."""

    target: int
    wins: int
    losses: int
    progress: str


class LeagueEntryDTO(BaseModel):
    """League entry information."""

    league_id: Optional[str] = Field(None, alias="leagueId")
    summoner_id: Optional[str] = Field(None, alias="summonerId")
    puuid: Optional[str] = None
    queue_type: str = Field(..., alias="queueType")
    tier: str
    rank: str
    league_points: int = Field(..., alias="leaguePoints")
    wins: int
    losses: int
    veteran: bool = False
    inactive: bool = False
    fresh_blood: bool = Field(False, alias="freshBlood")
    hot_streak: bool = Field(False, alias="hotStreak")
    mini_series: Optional[MiniSeriesDTO] = Field(None, alias="miniSeries")

    @property
    def win_rate(self) -> float:
        """Calculate win rate."""
        total_games = self.wins + self.losses
        if total_games == 0:
            return 0
        return (self.wins / total_games) * 100

    model_config = ConfigDict(populate_by_name=True)


class ChampionMasteryDTO(BaseModel):
    """Champion mastery of one player on one champion."""

    puuid: str
    champion_id: int = Field(..., alias="championId")
    champion_level: int = Field(..., alias="championLevel")
    champion_points: int = Field(..., alias="championPoints")
    last_play_time: int = Field(..., alias="lastPlayTime")
    champion_points_since_last_level: int = Field(
        0, alias="championPointsSinceLastLevel"
    )
    champion_points_until_next_level: int = Field(
        0, alias="championPointsUntilNextLevel"
    )
    mark_required_for_next_level: Optional[int] = Field(
        None, alias="markRequiredForNextLevel"
    )
    tokens_earned: int = Field(0, alias="tokensEarned")
    champion_season_milestone: Optional[int] = Field(
        None, alias="championSeasonMilestone"
    )
    milestone_grades: List[str] = Field(default_factory=list, alias="milestoneGrades")

    model_config = ConfigDict(populate_by_name=True)


class ParticipantDTO(BaseModel):
    """Match participant information."""

    puuid: str
    participant_id: Optional[int] = Field(None, alias="participantId")
    summoner_name: Optional[str] = Field(None, alias="summonerName")
    summoner_id: Optional[str] = Field(None, alias="summonerId")
    summoner_level: Optional[int] = Field(None, alias="summonerLevel")

    # Riot ID fields (newer API format)
    riot_id_game_name: Optional[str] = Field(None, alias="riotIdGameName")
    riot_id_tagline: Optional[str] = Field(None, alias="riotIdTagline")

    team_id: int = Field(..., alias="teamId")
    win: bool
    champion_id: int = Field(..., alias="championId")
    champion_name: str = Field(..., alias="championName")
    kills: int
    deaths: int
    assists: int
    champ_level: Optional[int] = Field(None, alias="champLevel")
    vision_score: Optional[float] = Field(None, alias="visionScore")
    gold_earned: Optional[int] = Field(None, alias="goldEarned")
    total_minions_killed: Optional[int] = Field(None, alias="totalMinionsKilled")
    neutral_minions_killed: Optional[int] = Field(None, alias="neutralMinionsKilled")
    total_damage_dealt_to_champions: Optional[int] = Field(
        None, alias="totalDamageDealtToChampions"
    )
    role: Optional[str] = None
    lane: Optional[str] = None
    individual_position: Optional[str] = Field(None, alias="individualPosition")
    team_position: Optional[str] = Field(None, alias="teamPosition")

    @property
    def kda(self) -> float:
        """Calculate KDA (kills + assists) / deaths."""
        if self.deaths == 0:
            return self.kills + self.assists
        return (self.kills + self.assists) / self.deaths

    model_config = ConfigDict(populate_by_name=True)


class BanDTO(BaseModel):
    """Champion ban."""

    champion_id: int = Field(..., alias="championId")
    pick_turn: int = Field(..., alias="pickTurn")

    model_config = ConfigDict(populate_by_name=True)


class TeamDTO(BaseModel):
    """Team summary of a match."""

    team_id: int = Field(..., alias="teamId")
    win: bool
    bans: List[BanDTO] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class MatchInfoDTO(BaseModel):
    """Match information."""

    game_creation: int = Field(..., alias="gameCreation")
    game_duration: int = Field(..., alias="gameDuration")
    game_end_timestamp: Optional[int] = Field(None, alias="gameEndTimestamp")
    queue_id: int = Field(..., alias="queueId")
    map_id: int = Field(..., alias="mapId")
    game_version: str = Field(..., alias="gameVersion")
    game_mode: str = Field(..., alias="gameMode")
    game_type: str = Field(..., alias="gameType")
    participants: List[ParticipantDTO]
    teams: List[TeamDTO] = Field(default_factory=list)
    platform_id: str = Field(..., alias="platformId")

    model_config = ConfigDict(populate_by_name=True)


class MatchMetadataDTO(BaseModel):
    """Match metadata."""

    data_version: Optional[str] = Field(None, alias="dataVersion")
    match_id: str = Field(..., alias="matchId")
    participants: List[str]

    model_config = ConfigDict(populate_by_name=True)


class MatchDTO(BaseModel):
    """Complete match data."""

    metadata: MatchMetadataDTO
    info: MatchInfoDTO

    @property
    def match_id(self) -> str:
        """Get match ID from metadata."""
        return self.metadata.match_id

    def participant(self, puuid: str) -> Optional[ParticipantDTO]:
        """Find a participant by PUUID."""
        for participant in self.info.participants:
            if participant.puuid == puuid:
                return participant
        return None

    model_config = ConfigDict(populate_by_name=True)
