"""Help command for the Hoopcast CLI."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console

from commands import Command
from commands.matchup_context import MatchupContext
from hoopcast.utils.cli_common import CommandRegistry, show_capabilities
from hoopcast.utils.config import get_cache_root, get_season


class HelpCommand(Command):
    """List commands along with the season, cache and loaded matchup."""

    def __init__(
        self,
        console: Console,
        registry: CommandRegistry,
        matchup_context: Optional[MatchupContext] = None,
    ) -> None:
        super().__init__(console)
        self.registry = registry
        self.matchup_context = matchup_context

    @property
    def name(self) -> str:
        return "/help"

    @property
    def description(self) -> str:
        return "Display available commands."

    def _status_lines(self) -> List[str]:
        season = self.matchup_context.session.season if self.matchup_context else get_season()
        lines = [f"Season: {season}  Cache: {get_cache_root()}"]
        projection = self.matchup_context.projection if self.matchup_context else None
        if projection is None:
            lines.append("No matchup loaded. Start with /matchup <snapshot.json>.")
        else:
            lines.append(
                f"Loaded: {projection.team1.name} vs {projection.team2.name}, "
                f"{projection.week_start} to {projection.week_end}"
            )
        return lines

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        show_capabilities(self.registry, self.console, self._status_lines())
