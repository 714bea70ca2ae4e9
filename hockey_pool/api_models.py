"""
FastAPI request/response models for the Hockey Pool Injury API.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Additional error details")


class InjuriesErrorResponse(BaseModel):
    """Envelope returned when scraping fails and no cached injuries exist."""

    error: str = Field(..., description="Error summary")
    message: str = Field(..., description="Underlying failure message")
    scrapedAt: str = Field(..., description="ISO timestamp of the failed attempt")
    count: int = Field(0, description="Always 0")
    items: List[Dict[str, Any]] = Field(default_factory=list, description="Always empty")


class TeamInjuryCount(BaseModel):
    """Injury count for one NHL team."""

    team: str = Field(..., description="NHL team name")
    count: int = Field(..., description="Number of injured players")


class TeamInjuryListResponse(BaseModel):
    """Response model for the injured teams endpoint."""

    teams: List[TeamInjuryCount] = Field(..., description="Teams in page order")
    total_count: int = Field(..., description="Total injuries across teams")
    scraped_at: Optional[str] = Field(None, description="ISO timestamp of the underlying scrape")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    cache_state: str = Field(..., description="Injury cache state (EMPTY, FRESH, STALE)")
    cached_count: int = Field(..., description="Injuries in the cache")
    roster_loaded: bool = Field(..., description="Whether a roster dataset is available")
    timestamp: str = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")


class OwnerInjuryCount(BaseModel):
    """Injury count for one pool owner."""

    owner: str = Field(..., description="Pool team owner")
    count: int = Field(..., description="Injured players on the owner's roster")


class OwnerInjuryListResponse(BaseModel):
    """Response model for the owners-with-injuries endpoint."""

    owners: List[OwnerInjuryCount] = Field(..., description="Owners with at least one injury, sorted by name")
    scraped_at: Optional[str] = Field(None, description="ISO timestamp of the underlying scrape")
