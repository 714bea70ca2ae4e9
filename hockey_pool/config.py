"""
Configuration settings for the Hockey Pool Injury API.
"""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = {
        "env_file": [".env", "hockey_pool/.env"],
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    # Application Environment
    environment: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3002, description="API port")

    # CORS Configuration
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:3001,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # ESPN Injury Page Configuration
    ESPN_INJURIES_URL: str = Field(default="https://www.espn.com/nhl/injuries", description="Primary ESPN NHL injuries page")
    ESPN_INJURIES_URL_ALT: str = Field(default="https://www.espn.in/nhl/injuries", description="Fallback host used when the primary page returns 404")
    ESPN_BASE_URL: str = Field(default="https://www.espn.in", description="Base URL for resolving relative player links")
    INJURY_REQUEST_TIMEOUT: float = Field(default=15.0, description="Injury page request timeout in seconds")
    INJURY_MIN_HTML_LENGTH: int = Field(default=100, description="Responses shorter than this are treated as empty pages")

    # Injury Cache Configuration
    INJURY_CACHE_TTL: int = Field(default=3600, description="Cache TTL for scraped injuries in seconds (1 hour)")
    INJURY_CACHE_CONTROL: str = Field(
        default="public, s-maxage=3600, stale-while-revalidate=1800",
        description="Cache-Control header sent with injury responses"
    )

    # Background Warmup Configuration
    INJURY_WARMUP_ENABLED: bool = Field(default=False, description="Refresh the injury cache on a schedule")
    INJURY_WARMUP_CRON: str = Field(default="*/30 * * * *", description="Crontab expression for the warmup job")

    # Roster Dataset
    ROSTER_DATA_PATH: Optional[str] = Field(default=None, description="Path to the pool roster JSON used for owner matching")

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert comma-separated CORS origins to list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
