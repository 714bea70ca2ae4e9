"""
APScheduler job that keeps the injury cache warm between requests.
"""

import logging
import traceback

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from hockey_pool.config import settings
from hockey_pool.dependencies import get_injury_service
from hockey_pool.services.errors import InjuryServiceError

logger = logging.getLogger(__name__)

# Initialize scheduler
scheduler = AsyncIOScheduler()


async def warmup_injury_cache_job():
    """Background job that refreshes the injury cache on a schedule."""
    try:
        logger.info("🔄 [CRON] Refreshing injury cache...")
        result = await get_injury_service().refresh()
        logger.info(f"✅ [CRON] Injury cache refreshed: {result.count} injuries")
    except InjuryServiceError as e:
        # The cache keeps its previous entry; requests will serve it as stale
        get_injury_service().cache.mark_failed(str(e))
        logger.error(f"❌ [CRON] Injury cache refresh failed: {e}")
    except Exception as e:
        get_injury_service().cache.mark_failed(str(e))
        logger.error(f"❌ [CRON] Injury cache warmup job failed: {e}")
        logger.error(f"[CRON] Traceback: {traceback.format_exc()}")


def start_scheduler() -> bool:
    """
    Start the warmup job if enabled in settings.

    Returns:
        bool: True when the scheduler was started
    """
    if not settings.INJURY_WARMUP_ENABLED:
        logger.info("Injury cache warmup disabled")
        return False

    scheduler.add_job(
        warmup_injury_cache_job,
        CronTrigger.from_crontab(settings.INJURY_WARMUP_CRON),
        id="injury_cache_warmup",
        name="Injury Cache Warmup Job",
        replace_existing=True,
        max_instances=1  # Prevent overlapping runs
    )
    scheduler.start()
    logger.info(f"🚀 Background scheduler started - injury cache warmup '{settings.INJURY_WARMUP_CRON}'")
    return True


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")
