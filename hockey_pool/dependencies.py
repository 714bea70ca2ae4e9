"""
Shared dependency injection functions for FastAPI.
"""

from typing import Optional
import logging

from hockey_pool.config import settings
from hockey_pool.services.injury_service import InjuryService
from hockey_pool.services.roster_matcher import RosterMatcher, load_pool_data

logger = logging.getLogger(__name__)

# Global service instances
_injury_service = None
_roster_matcher = None
_roster_load_failed = False


def get_injury_service() -> InjuryService:
    """
    Dependency to get the injury service.

    Returns:
        InjuryService: Singleton service owning the process-wide injury cache
    """
    global _injury_service

    if _injury_service is None:
        _injury_service = InjuryService()
        logger.info("Injury service created")

    return _injury_service


def get_roster_matcher() -> Optional[RosterMatcher]:
    """
    Dependency to get the roster matcher.

    Returns:
        RosterMatcher: Matcher over the configured roster dataset, or None if
        no dataset is configured or it cannot be loaded
    """
    global _roster_matcher, _roster_load_failed

    if _roster_matcher is None:
        if not settings.ROSTER_DATA_PATH or _roster_load_failed:
            return None
        try:
            _roster_matcher = RosterMatcher(load_pool_data(settings.ROSTER_DATA_PATH))
        except (OSError, ValueError) as e:
            # Not retried until restart
            _roster_load_failed = True
            logger.error(f"Failed to load roster dataset from {settings.ROSTER_DATA_PATH}: {e}")
            return None

    return _roster_matcher
