"""Player identity resolution feature."""

from .models import PlayerIdentity, PlayerProfile
from .resolver import IdentityResolver, parse_riot_id

__all__ = [
    "IdentityResolver",
    "PlayerIdentity",
    "PlayerProfile",
    "parse_riot_id",
]
