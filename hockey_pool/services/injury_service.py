"""
NHL Injury Service - serves ESPN NHL injury reports from an in-memory cache,
scraping the page inline when the cache is empty, expired or a refresh is forced.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from hockey_pool.config import settings
from hockey_pool.scraping.scraper import UNKNOWN_TEAM, build_scrape_result, extract_injuries, utc_timestamp
from hockey_pool.services.errors import InjuryServiceError
from hockey_pool.services.injury_cache import InjuryCache
from hockey_pool.services.injury_fetcher import InjuryPageFetcher
from shared.models import ScrapeResult

logger = logging.getLogger(__name__)

CACHE_HIT = "HIT"
CACHE_MISS = "MISS"
CACHE_STALE = "STALE"

ERROR_TITLE = "Failed to fetch injuries data"


@dataclass(frozen=True)
class InjuryLookup:
    """Outcome of an injuries request: JSON payload, X-Cache value (None for errors) and HTTP status."""

    payload: Dict[str, Any]
    cache_status: Optional[str]
    status_code: int = 200

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


def error_envelope(error: Exception) -> Dict[str, Any]:
    """Error body returned when scraping fails and nothing is cached."""
    return {
        "error": ERROR_TITLE,
        "message": str(error) or "Unknown error",
        "scrapedAt": utc_timestamp(),
        "count": 0,
        "items": [],
    }


class InjuryService:
    """Service for scraping ESPN NHL injuries with a stale-on-error cache."""

    def __init__(
        self,
        fetcher: Optional[InjuryPageFetcher] = None,
        cache: Optional[InjuryCache] = None,
        base_url: Optional[str] = None,
    ):
        self.fetcher = fetcher or InjuryPageFetcher()
        self.cache = cache or InjuryCache(ttl_seconds=settings.INJURY_CACHE_TTL)
        self.base_url = base_url or settings.ESPN_BASE_URL

    async def scrape(self) -> ScrapeResult:
        """
        Fetch and parse the injuries page once.

        Raises:
            FetchError: The page could not be fetched (FetchTimeoutError on timeout)
        """
        html = await self.fetcher.fetch()
        injuries = extract_injuries(html, self.base_url)
        return build_scrape_result(injuries)

    async def refresh(self) -> ScrapeResult:
        """Scrape and replace the cached result."""
        result = await self.scrape()
        self.cache.replace(result)
        return result

    async def get_injuries(self, force_refresh: bool = False) -> InjuryLookup:
        """
        Get current injuries, serving the cache when it is fresh.

        Args:
            force_refresh: Scrape even if the cache is fresh

        Returns:
            InjuryLookup: HIT for fresh cache, MISS after a successful scrape,
            STALE when the scrape failed but a previous result exists, or a 500
            error envelope when there is nothing to fall back to
        """
        entry = self.cache.read()
        if entry is not None and not force_refresh and self.cache.is_fresh(entry):
            logger.debug("Cache hit for injury reports")
            return InjuryLookup(payload=entry.result.to_payload(), cache_status=CACHE_HIT)

        try:
            result = await self.refresh()
            return InjuryLookup(payload=result.to_payload(), cache_status=CACHE_MISS)
        except InjuryServiceError as e:
            logger.error(f"Error scraping NHL injuries: {e}")
            return self._fallback(e)
        except Exception as e:
            logger.exception(f"Unexpected error scraping NHL injuries: {e}")
            return self._fallback(e)

    def _fallback(self, error: Exception) -> InjuryLookup:
        self.cache.mark_failed(str(error))
        entry = self.cache.read()
        if entry is not None:
            logger.warning(f"Serving stale injury cache (version {entry.version}, {entry.result.count} injuries)")
            return InjuryLookup(payload=entry.result.to_payload(), cache_status=CACHE_STALE)
        return InjuryLookup(payload=error_envelope(error), cache_status=None, status_code=500)


def filter_by_team(payload: Dict[str, Any], team: str) -> Dict[str, Any]:
    """Copy of an injuries payload restricted to one NHL team (case-insensitive)."""
    wanted = team.strip().lower()
    items = [item for item in payload.get("items", []) if item.get("team", "").strip().lower() == wanted]
    return {**payload, "count": len(items), "items": items}


def group_by_team(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Team names with their injury counts, alphabetical with the placeholder team last."""
    counts: Dict[str, int] = {}
    for item in payload.get("items", []):
        team = item.get("team", "").strip() or UNKNOWN_TEAM
        counts[team] = counts.get(team, 0) + 1
    ordered = sorted(counts, key=lambda team: (team == UNKNOWN_TEAM, team.casefold()))
    return [{"team": team, "count": counts[team]} for team in ordered]
