import json
from datetime import datetime

import httpx
import pytest

from lunch_menus.config import Settings
from lunch_menus.models import Location, MenuItem, TodayMenu

WEBHOOK_URL = 'https://hooks.example.com/menu'
MENU_API_URL = 'https://shop.foodandco.dk/api/WeeklyMenu'

# Monday 12 October 2026, ISO week 42
MONDAY = datetime(2026, 10, 12, 9, 0)
WEEK = 42


def weekly_response(week_number=WEEK, days=None):
    """Body the menu API returns for the week of MONDAY"""
    if days is None:
        days = [
            {
                'date': f'2026-10-{12 + i}T00:00:00',
                'menus': [
                    {'type': 'Soup', 'menu': f'Soup of day {i}'},
                    {'type': 'Hot dish', 'menu': f'Hot dish of day {i}'},
                ],
            }
            for i in range(7)
        ]
    return {'weekNumber': week_number, 'days': days}


class FakeServer:
    """httpx.MockTransport handler standing in for both the menu API and the webhook"""

    def __init__(self, menus=None, webhook_status=200):
        # restaurantId -> response body (dict), or an exception to raise
        self.menus = menus or {}
        self.webhook_status = webhook_status
        self.requests = []
        self.posts = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == 'GET':
            body = self.menus.get(request.url.params['restaurantId'], weekly_response())
            if isinstance(body, Exception):
                raise body
            if isinstance(body, httpx.Response):
                return body
            return httpx.Response(200, json=body)

        payload = json.loads(request.content)
        self.posts.append(payload)
        status = self.webhook_status
        if isinstance(status, dict):
            status = status.get(payload['attachments'][0]['channel_id'], 200)
        return httpx.Response(status)

    @property
    def gets(self):
        return [r for r in self.requests if r.method == 'GET']

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def location():
    return Location(name='Campus', restaurant_id='1235', other_id='campus', channel_id='channel-campus')


@pytest.fixture
def other_location():
    return Location(name='Midtown', restaurant_id='1236', other_id='midtown', channel_id='channel-midtown')


@pytest.fixture
def settings(location, other_location):
    return Settings(
        webhook_url=WEBHOOK_URL,
        locations=(location, other_location),
        menu_api_url=MENU_API_URL
    )


@pytest.fixture
def today_menu():
    return TodayMenu(
        date='2026-10-16T00:00:00',
        menus=[
            MenuItem(type='Soup', menu='Tomato soup'),
            MenuItem(type='Vegetarian', menu=None),
            MenuItem(type=None, menu='Orphan dish'),
            MenuItem(type='Hot dish', menu='Roast pork with potatoes'),
        ]
    )


@pytest.fixture
def env(tmp_path):
    """A complete environment plus a locations file"""
    locations_file = tmp_path / 'locations.yaml'
    locations_file.write_text(
        "locations:\n"
        "  - {name: Østergade, restaurant_id: 1234, other_id: oestergade, channel_env: OESTERGADE_CHANNEL_ID}\n"
        "  - {name: Campus, restaurant_id: 1235, other_id: campus, channel_env: CAMPUS_CHANNEL_ID}\n"
        "  - {name: Midtown, restaurant_id: 1236, other_id: midtown, channel_env: MIDTOWN_CHANNEL_ID}\n"
        "  - {name: Løvstræde, restaurant_id: 1237, other_id: lovstraede, channel_env: LOVSTRAEDE_ID}\n",
        encoding='utf-8'
    )
    return {
        'WEBHOOK_URL': WEBHOOK_URL,
        'OESTERGADE_CHANNEL_ID': 'channel-oestergade',
        'CAMPUS_CHANNEL_ID': 'channel-campus',
        'MIDTOWN_CHANNEL_ID': 'channel-midtown',
        'LOVSTRAEDE_ID': 'channel-lovstraede',
        'LOCATIONS_FILE': str(locations_file),
    }
