"""Player enable/disable commands for the Hoopcast CLI."""

from __future__ import annotations

from datetime import date as date_cls
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console

from commands import Command, CommandError, Option, parse_command
from commands.matchup_context import MatchupContext
from hoopcast.matchup.player_overrides import (
    STATUS_DISABLED,
    STATUS_DISABLED_FOR_DAY,
    STATUS_DISABLED_FOR_WEEK,
    STATUS_ENABLED,
    STATUS_ENABLED_FOR_DAY,
)
from hoopcast.matchup.models import MatchupProjection
from hoopcast.utils.cli_common import confirm
from hoopcast.utils.dates import eastern_today
from hoopcast.utils.render import render_overrides, render_score_summary


STATUS_OPTIONS = (
    Option(("-d", "--day"), "day", takes_value=True, metavar="a date (YYYY-MM-DD)"),
    Option(("-w", "--week"), "week"),
)


def _parse_player_and_date(command: str) -> Tuple[str, Optional[str], bool]:
    """Return ``(player_id, date, week_flag)`` from a status command string."""
    positional, options = parse_command(command, STATUS_OPTIONS)
    if not positional:
        raise CommandError("Missing player id")
    if len(positional) > 1:
        raise CommandError(f"Unexpected argument: {positional[1]}")

    day = options["day"]
    if day is not None:
        try:
            date_cls.fromisoformat(str(day))
        except ValueError as err:
            raise CommandError(f"Invalid date: {day}") from err
    if day and options["week"]:
        raise CommandError("Use either --day or --week, not both")
    return positional[0], day, bool(options["week"])


class _PlayerStatusCommand(Command):
    def __init__(self, console: Console, matchup_context: MatchupContext) -> None:
        super().__init__(console)
        self.matchup_context = matchup_context

    def _apply(self, player_id: str, status: str, day: Optional[str] = None) -> None:
        try:
            projection = self.matchup_context.session.set_player_status(player_id, status, day)
        except ValueError as err:
            self.error(str(err))
            return

        scope = f" on {day}" if day else ""
        self.console.print(f"Player {player_id}: {status}{scope}", style="green")
        self._show(projection)

    def _show(self, projection: Optional[MatchupProjection]) -> None:
        if projection is None:
            return
        self.console.print(render_score_summary(projection))
        # Overrides recompute against the loaded day; games since then are not actuals yet
        if projection.today != eastern_today():
            self.console.print(
                f"Projection is as of {projection.current_date}. "
                "Run /matchup to refresh it for today.",
                style="yellow",
            )


class EnableCommand(_PlayerStatusCommand):
    """Force a player into the projection."""

    @property
    def name(self) -> str:
        return "/enable"

    @property
    def description(self) -> str:
        return "Count a player again (for every day, or one day with --day)."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {"name": "<player_id>", "required": True, "description": "Player id shown in /matchup -p"},
            {
                "name": "-d, --day",
                "required": False,
                "description": "Only lift a single-day disable for this date (YYYY-MM-DD)",
            },
        ]

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        try:
            player_id, day, _ = _parse_player_and_date(command)
        except CommandError as err:
            self.error(str(err))
            return
        status = STATUS_ENABLED_FOR_DAY if day else STATUS_ENABLED
        self._apply(player_id, status, day)


class DisableCommand(_PlayerStatusCommand):
    """Exclude a player from the projection."""

    @property
    def name(self) -> str:
        return "/disable"

    @property
    def description(self) -> str:
        return "Stop counting a player (whole period, or one day with --day)."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {"name": "<player_id>", "required": True, "description": "Player id shown in /matchup -p"},
            {
                "name": "-d, --day",
                "required": False,
                "description": "Disable only for this date (YYYY-MM-DD)",
            },
            {
                "name": "-w, --week",
                "required": False,
                "description": "Disable for the rest of the scoring week",
            },
        ]

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        try:
            player_id, day, week = _parse_player_and_date(command)
        except CommandError as err:
            self.error(str(err))
            return
        if day:
            self._apply(player_id, STATUS_DISABLED_FOR_DAY, day)
        elif week:
            self._apply(player_id, STATUS_DISABLED_FOR_WEEK)
        else:
            self._apply(player_id, STATUS_DISABLED)


class ClearCommand(_PlayerStatusCommand):
    """Remove overrides so only injury rules apply."""

    @property
    def name(self) -> str:
        return "/clear"

    @property
    def aliases(self) -> Sequence[str]:
        return ("/overrides",)

    @property
    def description(self) -> str:
        return "Clear a player's override, or list overrides when no id is given."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {"name": "<player_id>", "required": False, "description": "Player whose override to clear"},
            {"name": "--all", "required": False, "description": "Clear every override"},
        ]

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        session = self.matchup_context.session
        parts = command.split()[1:]

        if not parts:
            overrides = session.overrides()
            if not overrides:
                self.console.print("No player overrides set.", style="dim")
                return
            self.console.print(render_overrides(overrides))
            return

        if parts == ["--all"]:
            if not confirm("Clear every player override?"):
                return
            projection = None
            for player_id in list(session.overrides()):
                projection = session.clear_player_status(player_id)
            self.console.print("Cleared all player overrides.", style="green")
        elif len(parts) == 1 and not parts[0].startswith("-"):
            projection = session.clear_player_status(parts[0])
            self.console.print(f"Cleared override for player {parts[0]}.", style="green")
        else:
            self.error(f"Unexpected arguments: {' '.join(parts)}")
            return

        self._show(projection)
