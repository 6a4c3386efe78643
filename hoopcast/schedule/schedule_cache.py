"""NBA schedule table caching.

The schedule is a static table of ``{iso_date: [team_abbr, ...]}`` per
season, stored at {cache_root}/nba_schedules/{season}.json.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from hoopcast.utils.config import get_cache_root
from hoopcast.utils.file_utils import read_json, write_json

logger = logging.getLogger(__name__)

ScheduleTable = Dict[str, Tuple[str, ...]]


def get_cache_dir() -> Path:
    """Get the NBA schedule cache directory.

    Returns:
        Path to {cache_root}/nba_schedules/
    """
    cache_dir = get_cache_root() / "nba_schedules"
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def _schedule_path(season: str) -> Path:
    return get_cache_dir() / f"{season}.json"


def normalize_schedule(raw: Mapping[str, Iterable[str]]) -> ScheduleTable:
    """Normalize a raw table to ISO date keys and upper-case abbreviations."""
    table: ScheduleTable = {}
    for game_date, teams in raw.items():
        table[str(game_date)[:10]] = tuple(sorted({str(team).upper() for team in teams or ()}))
    return table


def save_schedule_table(season: str, table: Mapping[str, Sequence[str]]) -> None:
    """Save the season schedule table.

    Args:
        season: Season string (e.g., "2025-26")
        table: ISO date -> team abbreviations playing that day
    """
    write_json(_schedule_path(season), {day: list(teams) for day, teams in table.items()})
    logger.debug(f"Saved schedule for {season} ({len(table)} game days)")


def load_schedule_table(season: str) -> Optional[ScheduleTable]:
    """Load the season schedule table.

    Args:
        season: Season string (e.g., "2025-26")

    Returns:
        Normalized schedule table, or None if not cached
    """
    data = read_json(_schedule_path(season))
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning(f"Schedule cache for {season} is not an object, ignoring")
        return None
    return normalize_schedule(data)


def teams_playing(schedule: Mapping[str, Sequence[str]], date: str) -> Tuple[str, ...]:
    """Team abbreviations playing on ``date`` (empty when no games)."""
    return tuple(schedule.get(date) or ())

