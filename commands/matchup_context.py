"""Shared projection session for matchup-related commands."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

from rich.console import Console

from hoopcast.matchup.models import MatchupProjection
from hoopcast.matchup.projection_session import ProjectionSession
from hoopcast.matchup.snapshot import parse_roster_snapshot


class MatchupContext:
    """Keeps the loaded matchup and its overrides between commands."""

    def __init__(self, console: Console, session: Optional[ProjectionSession] = None) -> None:
        self.console = console
        self.session = session or ProjectionSession()
        self.snapshot_path: Optional[Path] = None

    @property
    def projection(self) -> Optional[MatchupProjection]:
        return self.session.projection

    def load(self, snapshot_path: Path, league: Optional[str] = None) -> MatchupProjection:
        """Parse a roster snapshot file and refresh the projection from it.

        Raises:
            ValueError: If the file is not a valid roster snapshot
            ProjectionFetchError: If the cached tables cannot be loaded
        """
        try:
            with open(snapshot_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as err:
            raise ValueError(f"{snapshot_path} is not valid JSON: {err}") from err

        snapshot = parse_roster_snapshot(raw)
        projection = asyncio.run(self.session.refresh(snapshot, league=league))
        self.snapshot_path = snapshot_path
        return projection

    def require_projection(self) -> Optional[MatchupProjection]:
        if self.projection is None:
            self.console.print(
                "No matchup loaded. Run /matchup <snapshot.json> first.", style="yellow"
            )
        return self.projection
