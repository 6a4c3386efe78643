"""File-backed tables for player averages, game logs and id mappings.

Storage:
- Averages: {cache_root}/players/averages/{season}.json
- Game logs: {cache_root}/players/game_logs/{season}.json
- Id mappings: {cache_root}/players/yahoo_nba_mapping.json

Each file holds a JSON list of rows shaped like the upstream tables.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from hoopcast.utils.config import get_cache_root
from hoopcast.utils.file_utils import read_json, write_json

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def get_cache_dir() -> Path:
    """Get the player tables cache directory.

    Returns:
        Path to {cache_root}/players/
    """
    cache_dir = get_cache_root() / "players"
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def _averages_path(season: str) -> Path:
    return get_cache_dir() / "averages" / f"{season}.json"


def _game_logs_path(season: str) -> Path:
    return get_cache_dir() / "game_logs" / f"{season}.json"


def _mapping_path() -> Path:
    return get_cache_dir() / "yahoo_nba_mapping.json"


def _load_rows(path: Path) -> Optional[List[Row]]:
    data = read_json(path)
    if data is None:
        return None
    if not isinstance(data, list):
        logger.warning(f"Expected a list of rows in {path}, found {type(data).__name__}")
        return None
    return data


def save_averages(season: str, rows: List[Row]) -> None:
    """Save the season averages table.

    Args:
        season: Season string (e.g., "2025-26")
        rows: Rows with ``player_id`` and ``*_per_game`` columns
    """
    write_json(_averages_path(season), rows)
    logger.debug(f"Saved {len(rows)} averages rows for {season}")


def load_averages(season: str) -> Optional[List[Row]]:
    """Load the season averages table, or None if not cached."""
    return _load_rows(_averages_path(season))


def save_game_logs(season: str, rows: List[Row]) -> None:
    write_json(_game_logs_path(season), rows)
    logger.debug(f"Saved {len(rows)} game log rows for {season}")


def load_game_logs(season: str) -> Optional[List[Row]]:
    return _load_rows(_game_logs_path(season))


def save_id_mappings(rows: List[Row]) -> None:
    """Save the Yahoo↔NBA id mapping table (``nba_id, yahoo_id, name, team``)."""
    write_json(_mapping_path(), rows)


def load_id_mappings() -> Optional[List[Row]]:
    return _load_rows(_mapping_path())
