"""Decide whether a roster player counts toward a day's projection."""

from __future__ import annotations

import logging
from typing import Collection, Mapping

from hoopcast.matchup.models import RosterPlayer
from hoopcast.matchup.player_overrides import PlayerOverride, resolve_manual_flags

logger = logging.getLogger(__name__)


def is_auto_disabled(player: RosterPlayer) -> bool:
    return player.is_auto_disabled


def resolve_disabled(
    player: RosterPlayer, date: str, disable_state: Mapping[str, PlayerOverride]
) -> bool:
    """Resolved disabled flag for ``player`` on ``date``.

    A manual enable always wins; otherwise auto-disable or any manual
    disable covering the date excludes the player.
    """
    manually_enabled, manually_disabled = resolve_manual_flags(
        disable_state.get(player.key), date
    )
    if manually_enabled:
        return False
    return is_auto_disabled(player) or manually_disabled


def is_scheduled(player: RosterPlayer, teams_playing: Collection[str]) -> bool:
    if not player.nba_team:
        return False
    return player.nba_team in teams_playing


def is_eligible_today(
    player: RosterPlayer,
    date: str,
    disable_state: Mapping[str, PlayerOverride],
    teams_playing: Collection[str],
    today: str,
) -> bool:
    """Return True when the player's averages count toward ``date``'s totals.

    Args:
        player: Roster player
        date: ISO date being projected
        disable_state: Current overrides keyed by player id
        teams_playing: NBA team abbreviations scheduled on ``date``
        today: Eastern ISO date used to classify past days
    """
    if date < today:
        return False
    if not player.nba_team:
        return False
    if not is_scheduled(player, teams_playing):
        return False
    return not resolve_disabled(player, date, disable_state)
