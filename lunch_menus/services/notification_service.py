import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from lunch_menus.config import Settings
from lunch_menus.models import Location, TodayMenu
from lunch_menus.utils.dates import format_heading_date
from lunch_menus.utils.debug import debug_log

logger = logging.getLogger(__name__)

CARD_SCHEMA = 'https://adaptivecards.io/schemas/adaptive-card.json'
CARD_VERSION = '1.5'
CARD_CONTENT_TYPE = 'application/vnd.microsoft.card.adaptive'


class NotificationPoster:
    """Renders a day's menu as an adaptive card and posts it to the webhook"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    def build_card(self, location: Location, today_menu: TodayMenu) -> Dict[str, Any]:
        facts = [
            {'title': item.type, 'value': item.menu}
            for item in today_menu.menus
            if item.is_renderable
        ]

        return {
            'type': 'AdaptiveCard',
            '$schema': CARD_SCHEMA,
            'version': CARD_VERSION,
            'body': [
                {
                    'type': 'Container',
                    'items': [
                        {
                            'type': 'TextBlock',
                            'text': format_heading_date(today_menu.date),
                            'wrap': True,
                            'style': 'heading',
                            'weight': 'Bolder',
                        },
                        {
                            'type': 'FactSet',
                            'facts': facts,
                            'separator': True,
                        },
                    ],
                    'selectAction': {
                        'type': 'Action.OpenUrl',
                        'title': 'Go to menu',
                        'url': location.menu_url,
                    },
                },
            ],
        }

    def build_payload(self, location: Location, today_menu: TodayMenu) -> Dict[str, Any]:
        """Wrap the card in the message envelope the webhook integration routes on"""
        return {
            'type': 'message',
            'attachments': [
                {
                    'contentType': CARD_CONTENT_TYPE,
                    'content': self.build_card(location, today_menu),
                    'channel_id': location.channel_id,
                    'test': self.settings.testing,
                    'location': location.name,
                },
            ],
        }

    @staticmethod
    def encode_payload(payload: Dict[str, Any]) -> bytes:
        return json.dumps(payload, ensure_ascii=False).encode('utf-8')

    @debug_log("Post Notification", timing=True)
    async def post(self, location: Location, today_menu: TodayMenu) -> Tuple[bool, Optional[str]]:
        """Deliver the card; failures are logged and reported, never raised"""
        body = self.encode_payload(self.build_payload(location, today_menu))

        try:
            response = await self.client.post(
                self.settings.webhook_url,
                content=body,
                headers={'Content-Type': 'application/json'}
            )
        except httpx.HTTPError as e:
            error = f"{type(e).__name__}: {e}"
            logger.error("post_to_webhook, error, %s (location: %s)", error, location.name)
            return False, error

        if not response.is_success:
            error = f"{response.status_code}: {response.reason_phrase}"
            logger.error("post_to_webhook, !ok, %s (location: %s)", error, location.name)
            return False, error

        logger.info("Posted menu for %s to channel %s", location.name, location.channel_id)
        return True, None
