"""Player per-game averages and already-played game log totals."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from hoopcast.matchup.models import StatLine
from hoopcast.utils.stat_mappings import (
    build_averages_column_mapping,
    build_game_log_column_mapping,
)

logger = logging.getLogger(__name__)


def _row_player_id(row: Mapping[str, Any]) -> Optional[int]:
    try:
        return int(row.get("player_id"))
    except (TypeError, ValueError):
        return None


def _stat_line_from_row(row: Mapping[str, Any], column_mapping: Dict[str, str]) -> StatLine:
    return StatLine.from_mapping(
        {field: row.get(column) or 0 for column, field in column_mapping.items()}
    )


def averages_from_rows(
    rows: Iterable[Mapping[str, Any]],
    season: Optional[str] = None,
) -> Dict[int, StatLine]:
    """Build per-player average stat lines from averages table rows.

    Args:
        rows: Rows with ``player_id`` and ``*_per_game`` columns
        season: When given, rows for other seasons are skipped

    Returns:
        Dict mapping player id to per-game StatLine
    """
    column_mapping = build_averages_column_mapping()
    averages: Dict[int, StatLine] = {}
    for row in rows:
        if season and row.get("season") not in (None, season):
            continue
        player_id = _row_player_id(row)
        if player_id is None:
            logger.debug(f"Skipping averages row without player_id: {row!r}")
            continue
        averages[player_id] = _stat_line_from_row(row, column_mapping)
    return averages


def actuals_from_game_logs(
    rows: Iterable[Mapping[str, Any]],
    week_start: str,
    week_end: str,
    today: str,
    player_ids: Optional[Iterable[int]] = None,
) -> Dict[int, StatLine]:
    """Sum game log rows played in the period before today.

    Only games with ``week_start <= game_date <= week_end`` and
    ``game_date < today`` count; today's games are still projected from
    averages.

    Args:
        rows: Game log rows with ``player_id``, ``game_date`` and stat columns
        week_start: First ISO date of the period
        week_end: Last ISO date of the period
        today: Eastern ISO date
        player_ids: Optional restriction to these player ids

    Returns:
        Dict mapping player id to the summed StatLine
    """
    wanted = set(player_ids) if player_ids is not None else None
    column_mapping = build_game_log_column_mapping()
    actuals: Dict[int, StatLine] = {}
    for row in rows:
        player_id = _row_player_id(row)
        if player_id is None or (wanted is not None and player_id not in wanted):
            continue
        game_date = str(row.get("game_date") or "")[:10]
        if not game_date or not (week_start <= game_date <= week_end) or game_date >= today:
            continue
        line = _stat_line_from_row(row, column_mapping)
        actuals[player_id] = actuals.get(player_id, StatLine()) + line
    return actuals
