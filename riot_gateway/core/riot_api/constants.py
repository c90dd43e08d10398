"""Riot API constants, enum definitions and the region directory."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from ..exceptions import InvalidRegionError


class Continent(str, Enum):
    """Riot API continental routing groups."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"


class QueueType(int, Enum):
    """Riot API queue ids for match filtering."""

    # Ranked queues
    RANKED_SOLO_5X5 = 420
    RANKED_FLEX_SR = 440

    # Normal queues
    NORMAL_DRAFT_5X5 = 400
    NORMAL_BLIND_PICK_5X5 = 430
    QUICKPLAY = 490
    ARAM = 450

    # Other queues
    CLASH = 700
    URF = 900
    ARENA = 1700


@dataclass(frozen=True)
class RegionEntry:
    """A user-facing region code and how to route calls for it."""

    code: str
    platform: Platform
    continent: Continent


REGIONS: Dict[str, RegionEntry] = {
    entry.code: entry
    for entry in (
        RegionEntry("na1", Platform.NA1, Continent.AMERICAS),
        RegionEntry("br1", Platform.BR1, Continent.AMERICAS),
        RegionEntry("la1", Platform.LA1, Continent.AMERICAS),
        RegionEntry("la2", Platform.LA2, Continent.AMERICAS),
        RegionEntry("euw1", Platform.EUW1, Continent.EUROPE),
        RegionEntry("eune1", Platform.EUN1, Continent.EUROPE),
        RegionEntry("tr1", Platform.TR1, Continent.EUROPE),
        RegionEntry("ru", Platform.RU, Continent.EUROPE),
        RegionEntry("kr", Platform.KR, Continent.ASIA),
        RegionEntry("jp1", Platform.JP1, Continent.ASIA),
        RegionEntry("oc1", Platform.OC1, Continent.SEA),
        RegionEntry("ph2", Platform.PH2, Continent.SEA),
        RegionEntry("sg2", Platform.SG2, Continent.SEA),
        RegionEntry("th2", Platform.TH2, Continent.SEA),
        RegionEntry("tw2", Platform.TW2, Continent.SEA),
        RegionEntry("vn2", Platform.VN2, Continent.SEA),
    )
}

# Popular tag lines per continental group, tried in order for bare names
DEFAULT_TAG_LINES: Dict[Continent, List[str]] = {
    Continent.AMERICAS: ["NA1", "BR1", "LAN", "LAS", "0000"],
    Continent.EUROPE: ["EUW", "EUNE", "TR1", "RU", "0000"],
    Continent.ASIA: ["KR1", "JP1", "0000"],
    Continent.SEA: ["OCE", "PH2", "SG2", "TH2", "TW2", "VN2", "0000"],
}


class RegionDirectory:
    """Read-only lookup from region code to its routing values."""

    def __init__(self, entries: Optional[Iterable[RegionEntry]] = None):
        """
        Initialize the directory.

        Args:
            entries: Region entries to serve (defaults to the built-in table)
        """
        table = REGIONS.values() if entries is None else entries
        self._entries: Dict[str, RegionEntry] = {}
        for entry in table:
            code = entry.code.lower()
            if code in self._entries:
                raise ValueError(f"Duplicate region code: {code}")
            self._entries[code] = entry

    def resolve(self, code: str) -> RegionEntry:
        """
        Get the routing entry for a region code (case-insensitive).

        Raises:
            InvalidRegionError: If the code is not supported
        """
        entry = self._entries.get((code or "").strip().lower())
        if entry is None:
            raise InvalidRegionError(code, self._entries.keys())
        return entry

    def is_supported(self, code: str) -> bool:
        """Check if a region code is supported."""
        return (code or "").strip().lower() in self._entries

    def supported_codes(self) -> Set[str]:
        """Get all supported region codes."""
        return set(self._entries)
