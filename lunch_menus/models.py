from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

MENU_BASE_URL = 'https://shop.foodandco.dk'


@dataclass(frozen=True)
class Location:
    """A canteen with its own menu feed and chat channel"""
    name: str
    restaurant_id: str
    other_id: str
    channel_id: str
    base_url: str = MENU_BASE_URL

    @property
    def menu_url(self) -> str:
        return f"{self.base_url}/{self.other_id}/weeklymenulist-en"


@dataclass
class MenuItem:
    type: Optional[str] = None
    menu: Optional[str] = None

    @property
    def is_renderable(self) -> bool:
        # Both halves are needed, a fact is never rendered half empty
        return self.type is not None and self.menu is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MenuItem':
        return cls(type=data.get('type'), menu=data.get('menu'))


@dataclass
class TodayMenu:
    """One day's slice of a weekly menu response"""
    date: str
    menus: List[MenuItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TodayMenu':
        return cls(
            date=data.get('date'),
            menus=[MenuItem.from_dict(m) for m in data.get('menus') or [] if m is not None]
        )


@dataclass
class WeeklyMenu:
    week_number: Optional[int]
    days: List[Optional[TodayMenu]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeeklyMenu':
        """Parse the menu API body, only checking that keys are present"""
        days = [
            TodayMenu.from_dict(day) if day else None
            for day in data.get('days') or []
        ]
        return cls(week_number=data.get('weekNumber'), days=days)

    def day(self, index: int) -> Optional[TodayMenu]:
        if 0 <= index < len(self.days):
            return self.days[index]
        return None


@dataclass(frozen=True)
class Today:
    date: date
    weekday_index: int  # Monday = 0
    week_number: int

    @property
    def iso_date(self) -> str:
        return self.date.strftime('%Y-%m-%d')

    @property
    def is_weekend(self) -> bool:
        return self.weekday_index > 4
