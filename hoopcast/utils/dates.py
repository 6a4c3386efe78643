"""Eastern-time calendar helpers.

Every past/today/future classification in the engine is made against the
America/New_York calendar date, never the UTC date.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple

import pytz

EASTERN = pytz.timezone("America/New_York")


def eastern_now(now: Optional[datetime] = None) -> datetime:
    """Return the current wall-clock time in America/New_York.

    Args:
        now: Optional aware datetime to convert (defaults to the current UTC time)
    """
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(EASTERN)


def eastern_today(now: Optional[datetime] = None) -> str:
    """Return today's Eastern calendar date as ``YYYY-MM-DD``."""
    return eastern_now(now).date().isoformat()


def current_season(today: Optional[str] = None) -> str:
    """Return the NBA season string for an Eastern date (e.g. '2025-26').

    Oct–Dec  → first year of the new season  (e.g. Oct 2025 → 2025-26)
    Jan–Sep  → second year of the current season (e.g. Feb 2026 → 2025-26)
    """
    current = date.fromisoformat(today or eastern_today())
    year = current.year if current.month >= 10 else current.year - 1
    return f"{year}-{str(year + 1)[-2:]}"


def date_range(start: date, end: date) -> Iterable[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_dates(week_start: str, week_end: str) -> List[str]:
    """Every ISO date in ``[week_start, week_end]``, oldest first."""
    start = date.fromisoformat(week_start)
    end = date.fromisoformat(week_end)
    return [day.isoformat() for day in date_range(start, end)]


def monday_anchored_week(today: str) -> Tuple[str, str]:
    """Return the Monday-to-Sunday window containing ``today``."""
    current = date.fromisoformat(today)
    start = current - timedelta(days=current.weekday())
    return start.isoformat(), (start + timedelta(days=6)).isoformat()


def weekday_label(date_str: str) -> str:
    """Short weekday label, e.g. 'Wed'."""
    return date.fromisoformat(date_str).strftime("%a")


def month_day_label(date_str: str) -> str:
    """Month/day label, e.g. 'Nov 5'."""
    day = date.fromisoformat(date_str)
    return f"{day.strftime('%b')} {day.day}"


def display_date(date_str: str) -> str:
    """Display string used for week bounds, e.g. 'Wed, Nov 5'."""
    return f"{weekday_label(date_str)}, {month_day_label(date_str)}"
