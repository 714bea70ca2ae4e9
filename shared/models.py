"""
Pydantic models shared by the injury scraper, the API and the roster matcher.
"""

from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


# ===== Injury Models =====

class InjuryRecord(BaseModel):
    """A single player injury scraped from the injuries page."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    team: str = Field(..., description="NHL team the player belongs to")
    name: str = Field(..., description="Player display name")
    position: str = Field(..., description="Short position code (C, LW, RW, D, G)")
    est_return: str = Field("", alias="estReturn", description="Estimated return date")
    date: str = Field("", description="Date of the injury update")
    status: str = Field("", description="Injury status (Out, Day-To-Day, ...)")
    comment: str = Field("", description="Free-text injury comment")
    player_url: Optional[str] = Field(None, alias="playerUrl", description="Absolute link to the player page")


class ScrapeResult(BaseModel):
    """One complete scrape of the injuries page."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    scraped_at: str = Field(..., alias="scrapedAt", description="ISO timestamp of the scrape")
    count: int = Field(..., description="Number of injury records")
    items: Tuple[InjuryRecord, ...] = Field(default_factory=tuple, description="Injury records in page order")

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict using the public camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ===== Roster Models =====

class PoolPlayer(BaseModel):
    """Player on a pool team roster."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Player display name, 'First Last' or 'Last, First'")
    nhl_team: str = Field("", alias="nhlTeam", description="NHL team abbreviation or name")
    positions: List[str] = Field(default_factory=list, description="Eligible positions, e.g. ['C', 'LW']")


class TeamRoster(BaseModel):
    """Pool team owned by one pooler."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    team_name: str = Field(..., alias="teamName", description="Pool team name")
    owner: str = Field(..., description="Owner display name")
    players: List[PoolPlayer] = Field(default_factory=list, description="Players on the roster")


class PoolData(BaseModel):
    """Roster dataset supplied by the spreadsheet ingestion side."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    teams: List[TeamRoster] = Field(default_factory=list, description="All pool teams")
    current_season_year: Optional[int] = Field(None, alias="currentSeasonYear", description="Current season start year")
