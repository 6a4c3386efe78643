"""Durable storage for player disable-state overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from hoopcast.matchup.player_overrides import (
    DisableState,
    PlayerOverride,
    dump_disable_state,
    parse_disable_state,
)
from hoopcast.utils.config import get_cache_root
from hoopcast.utils.file_utils import read_json, write_json

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "player_overrides.json"


class DisableStateStore:
    """Key-value store for the disable-state JSON blob.

    The file keeps the flat ``{player_id: value}`` shape; unreadable files
    and malformed entries load as no override.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path else get_cache_root() / DEFAULT_FILENAME

    def load(self) -> DisableState:
        state = parse_disable_state(read_json(self.path, default={}))
        logger.debug(f"Loaded {len(state)} player overrides from {self.path}")
        return state

    def save(self, state: Mapping[str, PlayerOverride]) -> None:
        write_json(self.path, dump_disable_state(state))
        logger.debug(f"Saved {len(state)} player overrides to {self.path}")

    def clear(self) -> None:
        self.save({})
