from datetime import date, datetime
from typing import Optional, Union

from lunch_menus.models import Today

# Fixed English names so the heading never depends on the process locale
WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
MONTHS = ('January', 'February', 'March', 'April', 'May', 'June', 'July',
          'August', 'September', 'October', 'November', 'December')


def compute_today(now: Optional[datetime] = None) -> Today:
    """Work out date, weekday index and ISO week number for the current run"""
    current = (now or datetime.now()).date()
    return Today(
        date=current,
        weekday_index=current.weekday(),
        week_number=current.isocalendar()[1]
    )


def ordinal(day: int) -> str:
    """1 -> 1st, 2 -> 2nd, 11 -> 11th, 23 -> 23rd"""
    if 11 <= day % 100 <= 13:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(day % 10, 'th')
    return f"{day}{suffix}"


def parse_menu_date(value: Union[str, date]) -> date:
    """Menu API dates come as 'YYYY-MM-DD' or a full ISO timestamp"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value[:10], '%Y-%m-%d').date()


def format_heading_date(value: Union[str, date]) -> str:
    """e.g. 'Friday, 17th of October 2026'

    Unparseable dates are shown as given rather than failing the post.
    """
    try:
        d = parse_menu_date(value)
    except (ValueError, TypeError):
        return str(value)
    return f"{WEEKDAYS[d.weekday()]}, {ordinal(d.day)} of {MONTHS[d.month - 1]} {d.year}"
