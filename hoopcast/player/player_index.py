"""Resolve roster players to their current NBA team.

Mapping rows come from the Yahoo↔NBA id table and look like
``{"nba_id": 1628983, "yahoo_id": 6014, "name": "...", "team": "OKC"}``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from hoopcast.matchup.models import RosterPlayer

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def build_mapping_index(rows: Iterable[Mapping[str, Any]]) -> Dict[str, Dict[int, Mapping[str, Any]]]:
    """Index mapping rows by NBA id and by Yahoo id."""
    index: Dict[str, Dict[int, Mapping[str, Any]]] = {"nba": {}, "yahoo": {}}
    for row in rows:
        nba_id = _as_int(row.get("nba_id"))
        yahoo_id = _as_int(row.get("yahoo_id"))
        if nba_id is not None:
            index["nba"][nba_id] = row
        if yahoo_id is not None:
            index["yahoo"][yahoo_id] = row
    return index


def _find_row(
    player: RosterPlayer, index: Dict[str, Dict[int, Mapping[str, Any]]]
) -> Optional[Mapping[str, Any]]:
    if player.nba_player_id is not None and player.nba_player_id in index["nba"]:
        return index["nba"][player.nba_player_id]
    if player.fantasy_player_id is not None:
        return index["yahoo"].get(player.fantasy_player_id)
    return None


def attach_nba_teams(
    players: Sequence[RosterPlayer], mapping_rows: Iterable[Mapping[str, Any]]
) -> List[RosterPlayer]:
    """Fill ``nba_team`` on each player from the id mapping table.

    A player known only by its Yahoo id gets the NBA id from the mapping,
    since averages and game logs are keyed by NBA id. A player with no
    mapping keeps ``nba_team=None`` and is never projected.

    Args:
        players: Roster players
        mapping_rows: Rows of the Yahoo↔NBA mapping table

    Returns:
        New list of RosterPlayer with teams attached
    """
    index = build_mapping_index(mapping_rows)
    resolved: List[RosterPlayer] = []
    for player in players:
        row = _find_row(player, index)
        if row is None:
            if not player.nba_team:
                logger.warning(f"No NBA team mapping for {player.name} ({player.player_id})")
            resolved.append(player)
            continue

        name = player.name
        if name == "Unknown" and row.get("name"):
            name = str(row["name"])
        nba_id = player.nba_player_id
        if nba_id is None:
            nba_id = _as_int(row.get("nba_id"))
        resolved.append(
            replace(
                player,
                nba_player_id=nba_id,
                nba_team=row.get("team") or player.nba_team,
                name=name,
            )
        )
    return resolved
