"""Project one team's stat totals for one calendar day."""

from __future__ import annotations

import logging
from typing import Collection, List, Mapping, Sequence

from hoopcast.matchup.eligibility import is_scheduled, resolve_disabled
from hoopcast.matchup.models import DayProjection, PlayerDayEntry, RosterPlayer, StatLine
from hoopcast.matchup.player_overrides import PlayerOverride
from hoopcast.utils.dates import month_day_label, weekday_label

logger = logging.getLogger(__name__)


def project_day(
    date: str,
    players: Sequence[RosterPlayer],
    averages_by_id: Mapping[int, StatLine],
    teams_playing: Collection[str],
    disable_state: Mapping[str, PlayerOverride],
    today: str,
) -> DayProjection:
    """Build the DayProjection for ``date``.

    Past days are frozen: no entries and zero totals, their stats come from
    game logs instead. Scheduled players are listed with their resolved
    disabled flag; only enabled players add their averages to the totals.

    Args:
        date: ISO date (Eastern) to project
        players: Roster players of one team
        averages_by_id: Per-game averages keyed by player id
        teams_playing: NBA team abbreviations playing on ``date``
        disable_state: Current overrides keyed by player id
        today: Eastern ISO date

    Returns:
        DayProjection for the date
    """
    is_past = date < today
    is_today = date == today
    day_of_week = weekday_label(date)
    month_day = month_day_label(date)

    if is_past:
        return DayProjection(
            date=date,
            day_of_week=day_of_week,
            month_day=month_day,
            is_past=True,
            is_today=False,
        )

    entries: List[PlayerDayEntry] = []
    totals = StatLine()
    for player in players:
        if not is_scheduled(player, teams_playing):
            continue

        averages = averages_by_id.get(player.player_id)
        if averages is None:
            logger.debug(f"No averages for {player.name} ({player.player_id}), using zeros")
            averages = StatLine()

        disabled = resolve_disabled(player, date, disable_state)
        entries.append(
            PlayerDayEntry(
                player_id=player.key,
                name=player.name,
                team=player.nba_team,
                stats=averages,
                disabled=disabled,
                auto_disabled=player.is_auto_disabled,
                status=player.status,
                position=player.selected_position,
            )
        )
        if not disabled:
            totals = totals + averages

    logger.debug(
        f"{date}: {len(entries)} scheduled, "
        f"{sum(1 for entry in entries if not entry.disabled)} counted"
    )
    return DayProjection(
        date=date,
        day_of_week=day_of_week,
        month_day=month_day,
        is_past=False,
        is_today=is_today,
        players=tuple(entries),
        totals=totals,
    )
