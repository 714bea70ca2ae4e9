"""
FastAPI application for the Hockey Pool Injury API.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Query, Path
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hockey_pool.config import settings
from hockey_pool.dependencies import get_injury_service, get_roster_matcher
from hockey_pool.api_models import (
    ErrorResponse, HealthResponse, InjuriesErrorResponse, OwnerInjuryCount, OwnerInjuryListResponse,
    TeamInjuryCount, TeamInjuryListResponse
)
from hockey_pool.scheduler import start_scheduler, stop_scheduler
from hockey_pool.services.injury_service import InjuryLookup, InjuryService, filter_by_team, group_by_team
from hockey_pool.services.roster_matcher import RosterMatcher

API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""

    # Startup
    logger.info("🏒 Starting Hockey Pool Injury API")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Injuries source: {settings.ESPN_INJURIES_URL} (fallback {settings.ESPN_INJURIES_URL_ALT})")
    logger.info(f"Injury cache TTL: {settings.INJURY_CACHE_TTL}s")

    if settings.ROSTER_DATA_PATH:
        if get_roster_matcher() is None:
            logger.warning("Roster dataset unavailable - owner matching disabled")
    else:
        logger.info("No roster dataset configured - owner matching disabled")

    start_scheduler()

    yield

    # Shutdown
    logger.info("Shutting down Hockey Pool Injury API")
    stop_scheduler()


# Create FastAPI application
app = FastAPI(
    title="Hockey Pool Injury API",
    description="NHL injury reports scraped from ESPN for the hockey pool",
    version=API_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _cache_headers(lookup: InjuryLookup) -> Dict[str, str]:
    if lookup.cache_status is None:
        return {}
    return {
        "Cache-Control": settings.INJURY_CACHE_CONTROL,
        "X-Cache": lookup.cache_status,
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Hockey Pool Injury API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "injuries": "/injuries"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    injury_service: InjuryService = Depends(get_injury_service),
    roster_matcher: Optional[RosterMatcher] = Depends(get_roster_matcher)
):
    """Health check endpoint."""

    cache_stats = injury_service.cache.get_cache_stats()

    return HealthResponse(
        status="healthy",
        cache_state=cache_stats["state"],
        cached_count=cache_stats["count"],
        roster_loaded=roster_matcher is not None,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=API_VERSION
    )


# Injury Endpoints

@app.get(
    "/injuries",
    tags=["Injuries"],
    responses={500: {"model": InjuriesErrorResponse}}
)
@app.get("/api/nhl/injuries", tags=["Injuries"], include_in_schema=False)
async def get_injuries(
    refresh: bool = Query(False, description="Scrape even if the cache is fresh"),
    team: Optional[str] = Query(None, description="Only return injuries for this NHL team"),
    injury_service: InjuryService = Depends(get_injury_service)
):
    """
    Get NHL injuries.

    Returns cached data if fresh, otherwise scrapes ESPN inline. When scraping
    fails the previous result is served as STALE; with no previous result an
    error envelope is returned with status 500.
    """
    lookup = await injury_service.get_injuries(force_refresh=refresh)

    payload = lookup.payload
    if team and not lookup.is_error:
        payload = filter_by_team(payload, team)

    return JSONResponse(content=payload, status_code=lookup.status_code, headers=_cache_headers(lookup))


@app.get(
    "/injuries/teams",
    response_model=TeamInjuryListResponse,
    tags=["Injuries"],
    responses={500: {"model": InjuriesErrorResponse}}
)
async def get_injured_teams(injury_service: InjuryService = Depends(get_injury_service)):
    """List NHL teams with their injury counts."""
    lookup = await injury_service.get_injuries()

    if lookup.is_error:
        return JSONResponse(content=lookup.payload, status_code=lookup.status_code)

    teams = [TeamInjuryCount(**entry) for entry in group_by_team(lookup.payload)]
    return TeamInjuryListResponse(
        teams=teams,
        total_count=lookup.payload.get("count", 0),
        scraped_at=lookup.payload.get("scrapedAt")
    )


@app.get(
    "/injuries/owners",
    response_model=OwnerInjuryListResponse,
    tags=["Injuries", "Roster"],
    responses={500: {"model": InjuriesErrorResponse}, 503: {"model": ErrorResponse}}
)
async def get_injured_owners(
    injury_service: InjuryService = Depends(get_injury_service),
    roster_matcher: Optional[RosterMatcher] = Depends(get_roster_matcher)
):
    """Pool owners with injured players and their injury counts."""
    if roster_matcher is None:
        raise HTTPException(
            status_code=503,
            detail="Roster dataset not configured"
        )

    lookup = await injury_service.get_injuries()
    if lookup.is_error:
        return JSONResponse(content=lookup.payload, status_code=lookup.status_code)

    owners = [OwnerInjuryCount(**entry) for entry in roster_matcher.owner_injury_counts(lookup.payload.get("items", []))]
    return OwnerInjuryListResponse(
        owners=owners,
        scraped_at=lookup.payload.get("scrapedAt")
    )


@app.get(
    "/injuries/owners/{owner}",
    tags=["Injuries", "Roster"],
    responses={404: {"model": ErrorResponse}, 500: {"model": InjuriesErrorResponse}, 503: {"model": ErrorResponse}}
)
async def get_owner_injuries(
    owner: str = Path(..., description="Pool team owner"),
    refresh: bool = Query(False, description="Scrape even if the cache is fresh"),
    injury_service: InjuryService = Depends(get_injury_service),
    roster_matcher: Optional[RosterMatcher] = Depends(get_roster_matcher)
):
    """Injuries for players on one owner's pool team."""
    if roster_matcher is None:
        raise HTTPException(
            status_code=503,
            detail="Roster dataset not configured"
        )

    if not roster_matcher.has_owner(owner):
        raise HTTPException(
            status_code=404,
            detail=f"Owner '{owner}' not found"
        )

    lookup = await injury_service.get_injuries(force_refresh=refresh)
    if lookup.is_error:
        return JSONResponse(content=lookup.payload, status_code=lookup.status_code)

    items = roster_matcher.injuries_for_owner(lookup.payload.get("items", []), owner)
    logger.info(f"Found {len(items)} injuries for owner {owner}")

    payload = {**lookup.payload, "count": len(items), "items": items}
    return JSONResponse(content=payload, headers=_cache_headers(lookup))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hockey_pool.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower()
    )
