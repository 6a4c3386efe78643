"""Aggregate daily projections and actuals across a scoring period."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from hoopcast.matchup.daily_projector import project_day
from hoopcast.matchup.models import DayProjection, RosterPlayer, StatLine, TeamProjection
from hoopcast.matchup.player_overrides import PlayerOverride
from hoopcast.schedule.schedule_cache import teams_playing
from hoopcast.utils.dates import monday_anchored_week, week_dates

logger = logging.getLogger(__name__)


def resolve_week_bounds(
    week_start: Optional[str], week_end: Optional[str], today: str
) -> Tuple[str, str]:
    """Return the period bounds as ISO dates.

    Explicit bounds win when both are present, which covers irregular
    periods such as the two-week All-Star matchup. Otherwise the
    Monday-to-Sunday window containing ``today`` is used.
    """
    if week_start and week_end:
        if week_end < week_start:
            raise ValueError(f"Week end {week_end} is before week start {week_start}")
        return week_start, week_end
    start, end = monday_anchored_week(today)
    logger.debug(f"No explicit period bounds, using {start} to {end}")
    return start, end


def sum_actuals(
    players: Sequence[RosterPlayer], actual_by_id: Mapping[int, StatLine]
) -> StatLine:
    actual = StatLine()
    for player in players:
        line = actual_by_id.get(player.player_id)
        if line is not None:
            actual = actual + line
    return actual


def aggregate_team(
    name: str,
    players: Sequence[RosterPlayer],
    averages_by_id: Mapping[int, StatLine],
    actual_by_id: Mapping[int, StatLine],
    dates: Sequence[str],
    schedule: Mapping[str, Sequence[str]],
    disable_state: Mapping[str, PlayerOverride],
    today: str,
) -> TeamProjection:
    """Build one team's projection across every day of the period.

    Args:
        name: Fantasy team name
        players: Roster players
        averages_by_id: Per-game averages keyed by player id
        actual_by_id: Stats already accrued this period, keyed by player id
        dates: Every ISO date of the period, oldest first
        schedule: ISO date -> NBA team abbreviations playing
        disable_state: Current overrides keyed by player id
        today: Eastern ISO date

    Returns:
        TeamProjection with actual, projected and total stat lines
    """
    for player in players:
        if not player.nba_team:
            logger.warning(
                f"{name}: no NBA team for {player.name} ({player.player_id}), "
                "excluded from every day"
            )

    days: List[DayProjection] = []
    projected = StatLine()
    for date in dates:
        day = project_day(
            date,
            players,
            averages_by_id,
            frozenset(teams_playing(schedule, date)),
            disable_state,
            today,
        )
        days.append(day)
        if not day.is_past:
            projected = projected + day.totals

    actual = sum_actuals(players, actual_by_id)
    logger.debug(
        f"{name}: actual {actual.points:.1f} pts, projected {projected.points:.1f} pts "
        f"over {sum(1 for day in days if not day.is_past)} remaining days"
    )
    return TeamProjection(
        name=name,
        actual=actual,
        projected=projected,
        total=actual + projected,
        daily_projections=tuple(days),
    )


__all__ = ["aggregate_team", "resolve_week_bounds", "sum_actuals", "week_dates"]
