from lunch_menus.services.menu_service import MenuFetcher
from lunch_menus.services.notification_service import NotificationPoster

__all__ = ['MenuFetcher', 'NotificationPoster']
