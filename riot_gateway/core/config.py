"""Configuration settings for the Riot API gateway."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: str = Field(default="", description="X-Riot-Token credential")
    riot_default_region: str = Field(default="na1")

    # Continental routing base URLs
    riot_americas_url: str = Field(default="https://americas.api.riotgames.com")
    riot_asia_url: str = Field(default="https://asia.api.riotgames.com")
    riot_europe_url: str = Field(default="https://europe.api.riotgames.com")
    riot_sea_url: str = Field(default="https://sea.api.riotgames.com")
    riot_platform_url_template: str = Field(
        default="https://{platform}.api.riotgames.com"
    )

    # Rate limits (personal key defaults: 20 req/1s, 100 req/2min)
    rate_limit_per_second: int = Field(default=20, gt=0)
    rate_limit_per_window: int = Field(default=100, gt=0)
    rate_limit_window_seconds: float = Field(default=120.0, gt=0)

    # Response cache, TTLs in seconds
    cache_enabled: bool = Field(default=True)
    cache_summoner_ttl: float = Field(default=3600.0, ge=0)
    cache_ranked_ttl: float = Field(default=300.0, ge=0)
    cache_mastery_ttl: float = Field(default=1800.0, ge=0)
    cache_matches_ttl: float = Field(default=600.0, ge=0)

    # HTTP transport
    request_timeout: float = Field(default=30.0, gt=0)

    # Application Configuration
    log_level: str = Field(default="INFO")

    @field_validator("riot_default_region")
    @classmethod
    def normalize_region(cls, v: str) -> str:
        """Region codes are stored lower-cased."""
        return v.strip().lower()

    def continental_base_url(self, continent: str) -> str:
        """Get base URL for a continental routing group."""
        urls = {
            "americas": self.riot_americas_url,
            "asia": self.riot_asia_url,
            "europe": self.riot_europe_url,
            "sea": self.riot_sea_url,
        }
        key = getattr(continent, "value", continent)
        if key not in urls:
            raise ValueError(f"Unknown continental routing group: {key}")
        return urls[key].rstrip("/")

    def platform_base_url(self, platform: str) -> str:
        """Get base URL for a platform routing value."""
        value = getattr(platform, "value", platform)
        return self.riot_platform_url_template.format(platform=value).rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
        frozen=True,
    )


def get_settings() -> Settings:
    """Get settings instance."""
    # Pydantic v2 will automatically load from environment variables
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
