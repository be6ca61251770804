import asyncio
import logging
import os
from datetime import datetime
from typing import Optional

import httpx
from dotenv import load_dotenv

from lunch_menus.config import Settings, format_error_report, load_settings
from lunch_menus.exceptions import ConfigurationError, FetchFailure
from lunch_menus.models import Location, Today
from lunch_menus.services import MenuFetcher, NotificationPoster
from lunch_menus.utils.dates import compute_today
from lunch_menus.utils.logger import configure_logging

logger = logging.getLogger(__name__)


async def process_location(location: Location, today: Today,
                           fetcher: MenuFetcher, poster: NotificationPoster) -> bool:
    """Fetch, validate and post one location's menu. Returns True if the post went out."""
    try:
        today_menu = await fetcher.fetch(location, today)
    except FetchFailure as e:
        logger.error(str(e))
        return False

    success, _ = await poster.post(location, today_menu)
    return success


async def run(settings: Settings, now: Optional[datetime] = None,
              client: Optional[httpx.AsyncClient] = None) -> int:
    """One pass over every configured location. Returns the number of successful posts."""
    today = compute_today(now)

    # Skip weekends
    if today.is_weekend:
        logger.info("Weekend (%s), nothing to post", today.iso_date)
        return 0

    logger.info("Posting menus for %s (week %d) to %d location(s)",
                today.iso_date, today.week_number, len(settings.locations))

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.http_timeout)

    try:
        fetcher = MenuFetcher(settings, client)
        poster = NotificationPoster(settings, client)
        results = await asyncio.gather(
            *(process_location(location, today, fetcher, poster) for location in settings.locations),
            return_exceptions=True
        )
    finally:
        if owns_client:
            await client.aclose()

    posted = 0
    for location, result in zip(settings.locations, results):
        if isinstance(result, BaseException):
            logger.error("Unexpected error for location %s", location.name, exc_info=result)
        elif result:
            posted += 1

    logger.info("Done: %d of %d location(s) posted", posted, len(settings.locations))
    return posted


def main() -> int:
    """Process entry point"""
    load_dotenv()
    configure_logging(os.getenv('LOG_LEVEL', 'INFO'), os.getenv('LOG_FILE'))

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(format_error_report(e.errors))
        raise

    if settings.testing:
        logger.warning("TESTING enabled, posting only to %s", settings.locations[0].name)

    asyncio.run(run(settings))
    return 0
