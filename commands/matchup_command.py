"""Matchup projection command for the Hoopcast CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console

from commands import Command, CommandError, Option, parse_command
from commands.matchup_context import MatchupContext
from hoopcast.matchup.models import MatchupProjection
from hoopcast.matchup.projection_session import ProjectionFetchError
from hoopcast.utils.render import (
    render_category_table,
    render_daily_breakdown,
    render_day_players,
    render_final_day_table,
    render_score_summary,
)

MATCHUP_OPTIONS = (
    Option(("-l", "--league"), "league", takes_value=True, metavar="a league key"),
    Option(("-d", "--daily"), "daily"),
    Option(("-p", "--players"), "players", takes_value=True, implicit="today"),
    Option(("-f", "--final"), "final"),
)


class MatchupCommand(Command):
    """Project the loaded head-to-head matchup."""

    def __init__(self, console: Console, matchup_context: MatchupContext) -> None:
        super().__init__(console)
        self.matchup_context = matchup_context

    @property
    def name(self) -> str:
        return "/matchup"

    @property
    def aliases(self):
        return ("/m",)

    @property
    def description(self) -> str:
        return "Project category totals for a matchup snapshot."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {
                "name": "<snapshot.json>",
                "required": False,
                "description": "Roster snapshot file to load (re-renders the loaded matchup when omitted)",
            },
            {
                "name": "-l, --league",
                "required": False,
                "description": "League key the snapshot belongs to (shown in refresh logs)",
            },
            {
                "name": "-d, --daily",
                "required": False,
                "description": "Show the day-by-day breakdown for both teams",
            },
            {
                "name": "-p, --players",
                "required": False,
                "description": "Show who counts on a given date (YYYY-MM-DD)",
                "default": "today",
            },
            {
                "name": "-f, --final",
                "required": False,
                "description": "Show the final-day view (current score plus today's games)",
            },
        ]

    def _parse(self, command: str) -> Dict[str, object]:
        positional, options = parse_command(command, MATCHUP_OPTIONS)
        if len(positional) > 1:
            raise CommandError(f"Unexpected argument: {positional[1]}")
        options["path"] = positional[0] if positional else None
        return options

    def _render_players(self, projection: MatchupProjection, date: str) -> None:
        if date == "today":
            date = projection.today
        for team in (projection.team1, projection.team2):
            day = next((d for d in team.daily_projections if d.date == date), None)
            if day is None:
                self.console.print(f"{date} is outside the matchup period", style="yellow")
                return
            if day.is_past:
                self.console.print(f"{team.name}: {date} is already final", style="dim")
                continue
            self.console.print(render_day_players(day, team.name))

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return

        try:
            options = self._parse(command)
        except CommandError as err:
            self.error(str(err))
            return

        projection: Optional[MatchupProjection]
        if options["path"]:
            path = Path(str(options["path"])).expanduser()
            if not path.exists():
                self.console.print(f"Snapshot file not found: {path}", style="red")
                return
            with self.console.status("[cyan]Computing projections...", spinner="dots"):
                try:
                    projection = self.matchup_context.load(path, league=options["league"])
                except ValueError as err:
                    self.console.print(f"Invalid snapshot: {err}", style="red")
                    return
                except ProjectionFetchError as err:
                    self.console.print(f"Error projecting matchup: {err}", style="red")
                    if self.matchup_context.projection is not None:
                        self.console.print("Showing the previous projection.", style="yellow")
                        projection = self.matchup_context.projection
                    else:
                        return
        else:
            projection = self.matchup_context.require_projection()

        if projection is None:
            return

        self.console.print(
            f"[bold green]Matchup projection (Week {projection.week or '-'}):[/bold green] "
            f"{projection.week_start} to {projection.week_end}, as of {projection.current_date}"
        )
        self.console.print(render_score_summary(projection))
        self.console.print(render_category_table(projection))

        if options["daily"]:
            self.console.print(render_daily_breakdown(projection.team1))
            self.console.print(render_daily_breakdown(projection.team2))

        if options["players"]:
            self._render_players(projection, str(options["players"]))

        if options["final"]:
            final_day = self.matchup_context.session.final_day()
            if final_day is not None:
                self.console.print(render_final_day_table(final_day))
