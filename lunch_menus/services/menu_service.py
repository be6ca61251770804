import logging

import httpx

from lunch_menus.config import Settings
from lunch_menus.exceptions import MenuFetchError, NoDataForDate, WeekMismatch
from lunch_menus.models import Location, Today, TodayMenu, WeeklyMenu
from lunch_menus.utils.debug import debug_log

logger = logging.getLogger(__name__)

LANGUAGE_CODE = 'en-GB'


class MenuFetcher:
    """Fetches a location's weekly menu and picks out today's entry"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    def build_params(self, location: Location, today: Today) -> dict:
        return {
            'restaurantId': str(location.restaurant_id),
            'languageCode': LANGUAGE_CODE,
            'date': today.iso_date,
        }

    @debug_log("Fetch Weekly Menu", timing=True)
    async def fetch_week(self, location: Location, today: Today) -> WeeklyMenu:
        """Single GET against the menu API, decoded into a WeeklyMenu"""
        try:
            response = await self.client.get(
                self.settings.menu_api_url,
                params=self.build_params(location, today)
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise MenuFetchError(
                location, f"{e.response.status_code}: {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise MenuFetchError(location, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise MenuFetchError(location, f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MenuFetchError(location, f"Unexpected response body of type {type(data).__name__}")

        try:
            return WeeklyMenu.from_dict(data)
        except (AttributeError, TypeError) as e:
            raise MenuFetchError(location, f"Unexpected response shape: {e}") from e

    async def fetch(self, location: Location, today: Today) -> TodayMenu:
        """Return today's menu for a location

        Raises:
            NoDataForDate: the week has no entry for today's weekday
            WeekMismatch: the API answered with a different week than ours
            MenuFetchError: the request or JSON decoding failed
        """
        week = await self.fetch_week(location, today)

        day = week.day(today.weekday_index)
        if day is None:
            raise NoDataForDate(location, today.iso_date)

        if week.week_number != today.week_number:
            raise WeekMismatch(location, week.week_number, today.week_number)

        if not day.date:
            day.date = today.iso_date

        logger.debug("Found %d menu items for %s on %s", len(day.menus), location.name, today.iso_date)
        return day
